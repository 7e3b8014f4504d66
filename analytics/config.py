"""Product-policy settings for the analytics layer.

Every value can be overridden from the environment (or a ``.env`` file loaded
at start-up). Unparseable values fall back to the default.
"""

from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r, using %s", name, raw, default)
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r, using %s", name, raw, default)
        return default


# Aggregation windows
RECENT_WINDOW = _env_int("GOLF_RECENT_WINDOW", 5)
FREE_BASELINE_WINDOW = _env_int("GOLF_FREE_BASELINE_WINDOW", 20)
CONSISTENCY_WINDOW = _env_int("GOLF_CONSISTENCY_WINDOW", 10)
CONSISTENCY_MIN_SAMPLES = _env_int("GOLF_CONSISTENCY_MIN_SAMPLES", 5)
MIN_ROUNDS_FOR_TRENDS = _env_int("GOLF_MIN_ROUNDS_FOR_TRENDS", 3)
SG_MIN_RECENT_COVERAGE = _env_int("GOLF_SG_MIN_RECENT_COVERAGE", 3)

# Projections
PROJECTION_MIN_ROUNDS = _env_int("GOLF_PROJECTION_MIN_ROUNDS", 10)
PROJECTION_RANGE_WINDOW = 10
HANDICAP_TREND_WINDOW = 12

# Narrative
GUARD_MAX_ATTEMPTS = _env_int("GOLF_GUARD_MAX_ATTEMPTS", 10)
POST_ROUND_NEUTRAL_EPSILON = _env_float("GOLF_POST_ROUND_NEUTRAL_EPSILON", 0.3)
