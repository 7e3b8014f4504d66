"""Differential-based handicap index and net score."""

from __future__ import annotations

import logging
import math
from typing import Dict, List, Optional, Sequence, Tuple

from models.round_record import RoundRecord

from .coefficients import NEUTRAL_COURSE_RATING, NEUTRAL_SLOPE
from .stats import round1

logger = logging.getLogger(__name__)

MIN_ROUNDS = 3
MAX_ROUNDS_CONSIDERED = 20
BEST_OF_FULL_WINDOW = 8
MAX_HANDICAP = 54.0
DEFAULT_PAR = 72

# rounds available -> (lowest differentials used, adjustment)
DIFFERENTIAL_TABLE: Dict[int, Tuple[int, float]] = {
    3: (1, -2.0),
    4: (1, -1.0),
    5: (1, 0.0),
    6: (2, -1.0),
    7: (2, 0.0),
    8: (2, 0.0),
    9: (3, 0.0),
    10: (3, 0.0),
    11: (3, 0.0),
    12: (4, 0.0),
    13: (4, 0.0),
    14: (4, 0.0),
    15: (5, 0.0),
    16: (5, 0.0),
    17: (6, 0.0),
    18: (6, 0.0),
    19: (7, 0.0),
}


def calculate_score_differential(
    score: float,
    rating: Optional[float] = None,
    slope: Optional[float] = None,
) -> float:
    """((score - rating) * 113) / slope."""
    rating = NEUTRAL_COURSE_RATING if rating is None else rating
    slope = NEUTRAL_SLOPE if not slope else slope
    return ((score - rating) * NEUTRAL_SLOPE) / slope


def round_differential(round_: RoundRecord) -> float:
    """Differential for a round, using par as the rating fallback."""
    rating = round_.course_rating
    if rating is None:
        rating = float(round_.par if round_.par is not None else DEFAULT_PAR)
    return calculate_score_differential(round_.score, rating, round_.slope_rating)


def handicap_from_differentials(differentials: Sequence[float]) -> Optional[float]:
    """Index from differentials in chronological order (oldest first)."""
    count = len(differentials)
    if count < MIN_ROUNDS:
        return None

    if count >= MAX_ROUNDS_CONSIDERED:
        window = sorted(differentials[-MAX_ROUNDS_CONSIDERED:])
        best = window[:BEST_OF_FULL_WINDOW]
        value = sum(best) / len(best)
    else:
        take, adjustment = DIFFERENTIAL_TABLE[count]
        best = sorted(differentials)[:take]
        value = sum(best) / len(best) + adjustment

    return min(round1(value), MAX_HANDICAP)


def calculate_handicap_index(rounds: Sequence[RoundRecord]) -> Optional[float]:
    """Handicap index from normalized rounds (see analytics.modes).

    Rounds are put in date order (ties keep their input order); once twenty
    or more exist only the most recent twenty participate.
    """
    ordered = sorted(rounds, key=lambda r: r.date)
    differentials: List[float] = [round_differential(r) for r in ordered]
    index = handicap_from_differentials(differentials)
    logger.debug("Handicap from %d rounds: %s", len(differentials), index)
    return index


def calculate_net_score(
    gross: Optional[int],
    handicap_index: Optional[float],
    rating: Optional[float],
    slope: Optional[float],
    par: Optional[int],
) -> Tuple[Optional[int], Optional[int]]:
    """(net score, net to par) using the course handicap for the tee."""
    if gross is None or handicap_index is None or rating is None or not slope or par is None:
        return None, None
    course_handicap = math.floor(handicap_index * (slope / NEUTRAL_SLOPE) + (rating - par) + 0.5)
    net = gross - course_handicap
    return net, net - par
