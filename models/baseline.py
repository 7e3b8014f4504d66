from pydantic import Field

from .base import BaseGolfModel


class HandicapTierBaseline(BaseGolfModel):
    """Expected 18-hole performance at one handicap on a neutral course (72 / 113)."""
    handicap: float = Field(..., ge=-10, le=54)
    score: float = Field(..., gt=0)
    fir_pct: float = Field(..., ge=0, le=100)
    gir_pct: float = Field(..., ge=0, le=100)
    putts: float = Field(..., ge=0)
    penalties: float = Field(..., ge=0)


class ExpectedRound(BaseGolfModel):
    """Expected stats for the holes actually played, after course adjustment."""
    score: float
    fir_pct: float = Field(..., ge=0, le=100)
    gir_pct: float = Field(..., ge=0, le=100)
    fairways: float = Field(..., ge=0)
    greens: float = Field(..., ge=0)
    putts: float
    penalties: float
