from pydantic import Field
from typing import Dict, List, Optional

from .base import BaseGolfModel
from .baseline import ExpectedRound
from .round_record import ConfidenceLevel


class StrokesGainedResult(BaseGolfModel):
    """Five-part attribution of one round against its expected score.

    Positive values mean better than expected. Values are rounded to two
    decimals; off_tee + approach + putting + penalties + residual == total
    within rounding.
    """
    total: Optional[float] = None
    off_tee: Optional[float] = None
    approach: Optional[float] = None
    putting: Optional[float] = None
    penalties: Optional[float] = None
    residual: Optional[float] = None
    confidence: Optional[ConfidenceLevel] = None
    partial_analysis: bool = True
    messages: List[str] = Field(default_factory=list)
    expected: Optional[ExpectedRound] = None

    def components(self) -> Dict[str, Optional[float]]:
        return {
            "off_tee": self.off_tee,
            "approach": self.approach,
            "putting": self.putting,
            "penalties": self.penalties,
            "residual": self.residual,
        }

    def is_empty(self) -> bool:
        return self.total is None
