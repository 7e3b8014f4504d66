"""Shared builders for round histories and the baseline table."""

from datetime import datetime, timedelta, timezone

from models import RoundRecord

BASELINE_ROWS = [
    {"handicap": -8, "score": 72.0, "fir_pct": 59, "gir_pct": 58, "putts": 30.5, "penalties": 0.8},
    {"handicap": 0, "score": 76.0, "fir_pct": 55, "gir_pct": 54, "putts": 32.0, "penalties": 1.1},
    {"handicap": 6, "score": 80.0, "fir_pct": 50, "gir_pct": 47, "putts": 33.7, "penalties": 1.5},
    {"handicap": 10, "score": 84.6, "fir_pct": 46, "gir_pct": 37, "putts": 35.0, "penalties": 2.0},
    {"handicap": 18, "score": 93.7, "fir_pct": 40, "gir_pct": 22, "putts": 37.0, "penalties": 3.0},
    {"handicap": 30, "score": 105.0, "fir_pct": 33, "gir_pct": 11, "putts": 39.6, "penalties": 4.9},
    {"handicap": 54, "score": 129.0, "fir_pct": 21, "gir_pct": 1, "putts": 43.8, "penalties": 11.0},
]

START = datetime(2025, 3, 1, tzinfo=timezone.utc)


def make_round(day=0, **overrides):
    """An 18-hole round on a neutral course, `day` days after START."""
    fields = {
        "id": f"r{day}",
        "date": START + timedelta(days=day),
        "holes": 18,
        "score": 90,
        "to_par": 18,
        "par": 72,
    }
    fields.update(overrides)
    return RoundRecord(**fields)
