"""When cached overall insights should be regenerated."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional, Tuple


def _iso_week(moment: datetime) -> Tuple[int, int]:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    year, week, _ = moment.astimezone(timezone.utc).isocalendar()
    return year, week


def should_refresh(
    last_generated_at: Optional[datetime],
    previous_hash: Optional[str],
    new_hash: Optional[str],
    now: Optional[datetime] = None,
) -> bool:
    """Regenerate at most once per ISO week, and only when the facts changed.

    Nothing cached yet (no timestamp or no hash) always regenerates. Naive
    datetimes are read as UTC.
    """
    if last_generated_at is None or previous_hash is None:
        return True
    if previous_hash == new_hash:
        return False
    now = now or datetime.now(timezone.utc)
    return _iso_week(last_generated_at) != _iso_week(now)
