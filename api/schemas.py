"""API-specific response models."""

from datetime import datetime
from pydantic import BaseModel
from typing import Any, Dict, List, Optional


class CardResponse(BaseModel):
    prefix: str
    text: str


class OverallInsightsResponse(BaseModel):
    """Six cards for the combined mode plus every mode's summary."""
    user_id: str
    generated_at: datetime
    data_hash: str
    variant_offset: int = 0
    is_premium: bool = False
    cached: bool = False
    cards: List[CardResponse]
    cards_by_mode: Dict[str, List[CardResponse]] = {}
    summaries: Dict[str, Dict[str, Any]] = {}


class PostRoundMessageResponse(BaseModel):
    key: str
    emoji: str
    level: str
    text: str


class PostRoundInsightsResponse(BaseModel):
    round_id: str
    messages: List[PostRoundMessageResponse]


class StrokesGainedResponse(BaseModel):
    """Stored breakdown after a recompute."""
    round_id: str
    total: Optional[float] = None
    off_tee: Optional[float] = None
    approach: Optional[float] = None
    putting: Optional[float] = None
    penalties: Optional[float] = None
    residual: Optional[float] = None
    confidence: Optional[str] = None
    partial_analysis: bool = True
    messages: List[str] = []
