"""Constants of the strokes-gained model.

Stroke values convert counting-stat differences into strokes. Course
sensitivities move the expected FIR/GIR percentages (percentage points per
stroke of rating or slope difficulty) and the expected putts/penalties
(count per stroke of difficulty).
"""

# Stroke value of one extra fairway / green / putt / penalty
STROKES_PER_FIR = 0.25
STROKES_PER_GIR = 0.62
STROKES_PER_PUTT = 1.0
STROKES_PER_PENALTY = 1.0

# GIR value shrinks with handicap, never below 70% of the base value
GIR_HANDICAP_DECAY = 0.012
GIR_COEFFICIENT_FLOOR = 0.70

# Percentage points removed from expected FIR/GIR per stroke of difficulty
RATING_TO_FIR_PCT = 0.8
SLOPE_TO_FIR_PCT = 1.0
RATING_TO_GIR_PCT = 1.5
SLOPE_TO_GIR_PCT = 1.5

# Extra putts / penalties expected per stroke of difficulty
COURSE_DIFF_TO_PUTTS = 0.12
COURSE_DIFF_TO_PENALTIES = 0.60

# Putting component is soft-capped at +/- this many strokes per 18 holes
PUTTING_CAP = 3.5
PUTTING_EXCESS_WEIGHT = 0.5

# Confidence tiering
CONFIDENCE_RESIDUAL_HIGH = 3.0
CONFIDENCE_SHORTGAME_HIGH_PCT = 0.44
CONFIDENCE_SHORTGAME_MEDIUM_MIN_PCT = 0.28
CONFIDENCE_SHORTGAME_MEDIUM_MAX_PCT = 0.39
CONFIDENCE_PUTTING_HIGH_PCT = 0.71

NEUTRAL_COURSE_RATING = 72.0
NEUTRAL_SLOPE = 113.0
MIN_HOLES_FOR_MODEL = 9


def effective_gir_coefficient(handicap: float) -> float:
    """GIR stroke value at a handicap."""
    scale = min(1.0, max(GIR_COEFFICIENT_FLOOR, 1 - GIR_HANDICAP_DECAY * handicap))
    return STROKES_PER_GIR * scale
