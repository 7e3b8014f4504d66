from datetime import datetime
from pydantic import Field
from typing import Optional

from .base import BaseGolfModel


class PlayerProfile(BaseGolfModel):
    """The parts of a user account the analytics layer reads."""
    id: str
    name: Optional[str] = None
    handicap_index: Optional[float] = Field(None, ge=-10, le=54)
    is_premium: bool = False
    created_at: Optional[datetime] = None
