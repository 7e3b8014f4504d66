from .base import BaseGolfModel
from .baseline import ExpectedRound, HandicapTierBaseline
from .hole import Hole
from .insights import (
    ComponentFacts,
    ComponentPick,
    ConsistencyFacts,
    ConsistencyLabel,
    DataQualityFlags,
    EfficiencyMetric,
    OverallInsightsSummary,
    PerformanceBand,
    ProjectionFacts,
    SGComponent,
    Trajectory,
)
from .narrative import (
    ActionPlan,
    ActionType,
    Drill,
    Emoji,
    FocusPlan,
    GuardResult,
    InsightSlot,
    MessageLevel,
    NarrativeCard,
    OverallCardPlan,
    PostRoundMessage,
    PostRoundPlan,
    PresentStats,
)
from .round_record import ConfidenceLevel, RoundRecord, ScoringMode
from .strokes_gained import StrokesGainedResult
from .tee import TeeContext, TeeDefinition, TeeSegment
from .user import PlayerProfile

__all__ = [
    "BaseGolfModel",
    "ExpectedRound",
    "HandicapTierBaseline",
    "Hole",
    "ComponentFacts",
    "ComponentPick",
    "ConsistencyFacts",
    "ConsistencyLabel",
    "DataQualityFlags",
    "EfficiencyMetric",
    "OverallInsightsSummary",
    "PerformanceBand",
    "ProjectionFacts",
    "SGComponent",
    "Trajectory",
    "ActionPlan",
    "ActionType",
    "Drill",
    "Emoji",
    "FocusPlan",
    "GuardResult",
    "InsightSlot",
    "MessageLevel",
    "NarrativeCard",
    "OverallCardPlan",
    "PostRoundMessage",
    "PostRoundPlan",
    "PresentStats",
    "ConfidenceLevel",
    "RoundRecord",
    "ScoringMode",
    "StrokesGainedResult",
    "TeeContext",
    "TeeDefinition",
    "TeeSegment",
    "PlayerProfile",
]
