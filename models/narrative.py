from enum import Enum
from pydantic import Field
from typing import Dict, List, Optional

from .base import BaseGolfModel
from .insights import SGComponent


class Emoji(str, Enum):
    SUCCESS = "\u2705"
    WARNING = "\u26a0\ufe0f"
    INFO = "\u2139\ufe0f"
    FIRE = "\U0001f525"


class MessageLevel(str, Enum):
    GREAT = "great"
    SUCCESS = "success"
    WARNING = "warning"
    INFO = "info"


class ActionType(str, Enum):
    TRACK = "track"
    DRILL = "drill"
    GENERAL = "general"


class PresentStats(BaseGolfModel):
    """Which tracked stats exist for the facts being described."""
    fir: bool = False
    gir: bool = False
    putts: bool = False
    penalties: bool = False

    def score_only(self) -> bool:
        return not (self.fir or self.gir or self.putts or self.penalties)

    def missing(self) -> Dict[str, bool]:
        return {
            "fir": not self.fir,
            "gir": not self.gir,
            "putts": not self.putts,
            "penalties": not self.penalties,
        }


class Drill(BaseGolfModel):
    """A practice drill with a measurable completion criterion."""
    area: str
    action: str
    goal: str

    @property
    def text(self) -> str:
        return f"{self.action} Goal: {self.goal}"


class InsightSlot(BaseGolfModel):
    emoji: Emoji
    level: MessageLevel
    max_sentences: int = 2


class FocusPlan(BaseGolfModel):
    best_name: Optional[SGComponent] = None
    opportunity_name: Optional[SGComponent] = None
    short_game_inferred: bool = False
    opportunity_is_weak: bool = False
    opportunity_impact_strokes_rounded: Optional[int] = None


class ActionPlan(BaseGolfModel):
    type: ActionType = ActionType.GENERAL
    stat: Optional[str] = None         # FIR, GIR, putts or penalties
    drill: Optional[Drill] = None


class PostRoundPlan(BaseGolfModel):
    """Everything the post-round messages are allowed to say, decided from facts."""
    insights: Dict[str, InsightSlot]
    outcomes: Dict[str, str] = Field(default_factory=dict)
    action: ActionPlan = Field(default_factory=ActionPlan)
    focus: FocusPlan = Field(default_factory=FocusPlan)
    present: PresentStats = Field(default_factory=PresentStats)
    allow_sg_language: bool = False


class PostRoundMessage(BaseGolfModel):
    key: str
    emoji: Emoji
    level: MessageLevel
    text: str
    outcome: Optional[str] = None
    variant_index: Optional[int] = None


class NarrativeCard(BaseGolfModel):
    """One rendered overall-insights card."""
    prefix: str
    text: str
    outcome: Optional[str] = None
    variant_index: Optional[int] = None


class OverallCardPlan(BaseGolfModel):
    """Facts the overall cards are checked against."""
    prefixes: List[str]
    opportunity_is_weak: bool = False
    present: PresentStats = Field(default_factory=PresentStats)
    drill: Optional[Drill] = None


class GuardResult(BaseGolfModel):
    ok: bool
    reason: Optional[str] = None

    @classmethod
    def passed(cls) -> "GuardResult":
        return cls(ok=True)

    @classmethod
    def failed(cls, reason: str) -> "GuardResult":
        return cls(ok=False, reason=reason)
