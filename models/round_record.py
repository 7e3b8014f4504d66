from datetime import datetime
from enum import Enum
from pydantic import Field, field_validator, model_validator
from typing import Dict, Optional

from .base import BaseGolfModel
from .tee import TeeSegment


class ScoringMode(str, Enum):
    """Which rounds a statistic is computed over."""
    NINE = "nine"
    EIGHTEEN = "eighteen"
    COMBINED = "combined"  # 9-hole rounds doubled to 18-hole equivalents


class ConfidenceLevel(str, Enum):
    """Trust bucket for a strokes-gained breakdown."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


SG_FIELDS = (
    "sg_total",
    "sg_off_tee",
    "sg_approach",
    "sg_putting",
    "sg_penalties",
    "sg_residual",
)


class RoundRecord(BaseGolfModel):
    """One played round with its summary stats and strokes-gained breakdown."""
    id: Optional[str] = None
    date: datetime
    holes: int = 18
    non_par3_holes: int = Field(14, ge=0, le=18)
    score: int = Field(..., ge=1)
    to_par: Optional[int] = None

    fir_hit: Optional[int] = Field(None, ge=0)
    fir_possible: Optional[int] = Field(None, ge=0)
    gir_hit: Optional[int] = Field(None, ge=0)
    putts: Optional[int] = Field(None, ge=0)
    penalties: Optional[int] = Field(None, ge=0)

    handicap_at_round: Optional[float] = Field(None, ge=-10, le=54)

    # Tee fields used by the handicap differential and the strokes-gained model
    course_rating: Optional[float] = None
    slope_rating: Optional[float] = None
    par: Optional[int] = None
    tee_segment: TeeSegment = TeeSegment.FULL

    sg_total: Optional[float] = None
    sg_off_tee: Optional[float] = None
    sg_approach: Optional[float] = None
    sg_putting: Optional[float] = None
    sg_penalties: Optional[float] = None
    sg_residual: Optional[float] = None
    sg_confidence: Optional[ConfidenceLevel] = None
    sg_partial_analysis: Optional[bool] = None

    @field_validator('holes')
    @classmethod
    def validate_holes(cls, v):
        if v not in (9, 18):
            raise ValueError(f"Round must be 9 or 18 holes, got {v}")
        return v

    @model_validator(mode='after')
    def validate_stat_consistency(self):
        if self.non_par3_holes > self.holes:
            raise ValueError(
                f"Non-par-3 holes ({self.non_par3_holes}) cannot exceed holes ({self.holes})"
            )
        if self.fir_hit is not None and self.fir_hit > self.fairways_possible():
            raise ValueError(
                f"Fairways hit ({self.fir_hit}) cannot exceed fairways possible ({self.fairways_possible()})"
            )
        if self.gir_hit is not None and self.gir_hit > self.holes:
            raise ValueError(f"Greens hit ({self.gir_hit}) cannot exceed holes ({self.holes})")

        # No handicap means no strokes-gained breakdown
        if self.handicap_at_round is None:
            if any(getattr(self, name) is not None for name in SG_FIELDS):
                raise ValueError("Strokes-gained fields require a handicap at round time")
            if self.sg_confidence is not None:
                raise ValueError("Strokes-gained confidence requires a handicap at round time")
        return self

    def fairways_possible(self) -> int:
        """Fairways available - explicit value or the non-par-3 hole count."""
        if self.fir_possible is not None:
            return self.fir_possible
        return self.non_par3_holes

    def present_stats(self) -> Dict[str, bool]:
        """Which advanced stats were recorded for this round."""
        return {
            "fir": self.fir_hit is not None,
            "gir": self.gir_hit is not None,
            "putts": self.putts is not None,
            "penalties": self.penalties is not None,
        }

    def has_strokes_gained(self) -> bool:
        return any(getattr(self, name) is not None for name in SG_FIELDS)
