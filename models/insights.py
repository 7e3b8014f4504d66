from datetime import datetime
from enum import Enum
from pydantic import Field
from typing import Dict, Optional

from .base import BaseGolfModel
from .round_record import ConfidenceLevel, ScoringMode


class Trajectory(str, Enum):
    IMPROVING = "improving"
    STABLE = "stable"
    WORSENING = "worsening"
    UNKNOWN = "unknown"


class ConsistencyLabel(str, Enum):
    STABLE = "stable"
    MODERATE = "moderate"
    VOLATILE = "volatile"
    INSUFFICIENT = "insufficient"


class PerformanceBand(str, Enum):
    """Where the recent strokes-gained average sits against expectation."""
    TOUGH = "tough"
    BELOW = "below"
    EXPECTED = "expected"
    ABOVE = "above"
    GREAT = "great"
    UNKNOWN = "unknown"


class SGComponent(str, Enum):
    OFF_TEE = "off_tee"
    APPROACH = "approach"
    PUTTING = "putting"
    PENALTIES = "penalties"
    RESIDUAL = "residual"
    SHORT_GAME = "short_game"   # inferred from a dominant negative residual


class ConsistencyFacts(BaseGolfModel):
    label: ConsistencyLabel = ConsistencyLabel.INSUFFICIENT
    spread: Optional[float] = None   # std-dev of to-par


class EfficiencyMetric(BaseGolfModel):
    recent: Optional[float] = None
    baseline: Optional[float] = None
    coverage_recent: str = "0/0"


class ProjectionFacts(BaseGolfModel):
    """Ten-rounds-ahead projection. Point values stay None while gated."""
    trajectory: Trajectory = Trajectory.UNKNOWN
    score_slope: Optional[float] = None
    score: Optional[float] = None
    score_low: Optional[float] = None
    score_high: Optional[float] = None
    handicap_current: Optional[float] = None
    handicap: Optional[float] = None
    handicap_low: Optional[float] = None
    handicap_high: Optional[float] = None
    rounds_used: int = 0
    upgrade_prompt: bool = False


class ComponentPick(BaseGolfModel):
    name: Optional[SGComponent] = None
    label: Optional[str] = None
    value: Optional[float] = None
    coverage_recent: Optional[int] = None
    low_coverage: bool = False
    is_weakness: bool = False


class ComponentFacts(BaseGolfModel):
    """Recent-vs-baseline strokes-gained averages keyed by component value."""
    recent_avg: Dict[str, Optional[float]] = Field(default_factory=dict)
    baseline_avg: Dict[str, Optional[float]] = Field(default_factory=dict)
    deltas: Dict[str, Optional[float]] = Field(default_factory=dict)
    strength: ComponentPick = Field(default_factory=ComponentPick)
    opportunity: ComponentPick = Field(default_factory=ComponentPick)
    biggest_leak: Optional[SGComponent] = None
    most_costly_component: Optional[SGComponent] = None
    most_costly_count: int = 0
    has_data: bool = False


class DataQualityFlags(BaseGolfModel):
    insufficient_rounds: bool = True
    missing_score_trend: bool = True
    combined_needs_more_nine_hole_rounds: bool = False
    missing_component_data: bool = True
    residual_dominant: bool = False
    volatile_scoring: bool = False


class OverallInsightsSummary(BaseGolfModel):
    """Derived per-mode snapshot of a player's round history."""
    mode: ScoringMode
    last_updated: datetime
    data_hash: str
    is_premium: bool = False

    window_recent: int = 5
    window_baseline: str = "last20"
    rounds_total: int = 0
    rounds_recent: int = 0
    rounds_baseline: int = 0

    latest_score: Optional[int] = None
    latest_to_par: Optional[int] = None
    avg_score_recent: Optional[float] = None
    avg_score_baseline: Optional[float] = None
    score_delta: Optional[float] = None
    avg_to_par_recent: Optional[float] = None
    best_score_recent: Optional[int] = None
    avg_sg_total_recent: Optional[float] = None
    performance_band: PerformanceBand = PerformanceBand.UNKNOWN

    trajectory: Trajectory = Trajectory.UNKNOWN
    consistency: ConsistencyFacts = Field(default_factory=ConsistencyFacts)
    efficiency: Dict[str, EfficiencyMetric] = Field(default_factory=dict)
    projection: ProjectionFacts = Field(default_factory=ProjectionFacts)
    components: ComponentFacts = Field(default_factory=ComponentFacts)
    confidence: Optional[ConfidenceLevel] = None
    flags: DataQualityFlags = Field(default_factory=DataQualityFlags)
    missing_stats: Dict[str, bool] = Field(default_factory=dict)
