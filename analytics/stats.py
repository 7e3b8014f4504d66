from __future__ import annotations

import math
from typing import Any, Iterable, List, Optional, Sequence

DEFAULT_WINDOW = 5


def to_number(value: Any) -> Optional[float]:
    """Coerce a raw value to a finite float, or None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        if not value.strip():
            return None
        try:
            value = float(value)
        except ValueError:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def to_count(value: Any) -> int:
    """Non-negative integer count; anything unusable becomes 0."""
    number = to_number(value)
    if number is None or number < 0:
        return 0
    return int(number)


def to_window(value: Any, default: int = DEFAULT_WINDOW) -> int:
    """Positive window size; anything unusable becomes the default."""
    number = to_number(value)
    if number is None or number < 1:
        return default
    return int(number)


def finite_values(values: Iterable[Any]) -> List[float]:
    cleaned = (to_number(v) for v in values)
    return [v for v in cleaned if v is not None]


def average(values: Iterable[Any]) -> Optional[float]:
    nums = finite_values(values)
    if not nums:
        return None
    return sum(nums) / len(nums)


def std_dev(values: Sequence[float]) -> Optional[float]:
    """Population standard deviation."""
    if not values:
        return None
    mean = sum(values) / len(values)
    variance = sum((v - mean) ** 2 for v in values) / len(values)
    return math.sqrt(variance)


def linear_slope(values: Sequence[float]) -> Optional[float]:
    """Least-squares slope of values against x = 1..n. Needs 3+ points."""
    n = len(values)
    if n < 3:
        return None
    sum_x = sum_y = sum_xy = sum_xx = 0.0
    for i, y in enumerate(values, start=1):
        sum_x += i
        sum_y += y
        sum_xy += i * y
        sum_xx += i * i
    denom = n * sum_xx - sum_x * sum_x
    if denom == 0:
        return None
    return (n * sum_xy - sum_x * sum_y) / denom


def percentile(values: Sequence[float], p: float) -> Optional[float]:
    """Linear-interpolated percentile, p in [0, 1]."""
    if not values:
        return None
    ordered = sorted(values)
    if len(ordered) == 1:
        return ordered[0]
    pos = (len(ordered) - 1) * p
    lower = math.floor(pos)
    upper = math.ceil(pos)
    if lower == upper:
        return ordered[lower]
    weight = pos - lower
    return ordered[lower] * (1 - weight) + ordered[upper] * weight


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def round1(value: Optional[float]) -> Optional[float]:
    """Round half away from zero to one decimal; -0.0 becomes 0.0."""
    return round_to(value, 1)


def round2(value: Optional[float]) -> Optional[float]:
    return round_to(value, 2)


def round_to(value: Optional[float], digits: int) -> Optional[float]:
    if value is None:
        return None
    factor = 10 ** digits
    scaled = abs(value) * factor
    rounded = math.floor(scaled + 0.5) / factor
    rounded = math.copysign(rounded, value)
    return 0.0 if rounded == 0 else rounded
