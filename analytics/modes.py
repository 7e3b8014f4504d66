from __future__ import annotations

from typing import Iterable, List, Optional

from models.round_record import RoundRecord, ScoringMode

# Counting fields that scale with holes played
_ADDITIVE_FIELDS = (
    "score",
    "to_par",
    "non_par3_holes",
    "fir_hit",
    "fir_possible",
    "gir_hit",
    "putts",
    "penalties",
    "sg_total",
    "sg_off_tee",
    "sg_approach",
    "sg_putting",
    "sg_penalties",
    "sg_residual",
)


def _doubled(value: Optional[float]) -> Optional[float]:
    return value * 2 if value is not None else None


def double_nine_hole_round(round_: RoundRecord, *, include_tee_fields: bool = False) -> RoundRecord:
    """18-hole equivalent of a 9-hole round. Nulls stay null."""
    if round_.holes != 9:
        return round_
    updates = {name: _doubled(getattr(round_, name)) for name in _ADDITIVE_FIELDS}
    updates["holes"] = 18
    if include_tee_fields:
        updates["course_rating"] = _doubled(round_.course_rating)
        updates["par"] = _doubled(round_.par)
    return round_.model_copy(update=updates)


def normalize_rounds_by_mode(
    rounds: Iterable[RoundRecord], mode: ScoringMode
) -> List[RoundRecord]:
    """Homogeneous rounds for a scoring mode, in input order."""
    mode = ScoringMode(mode)
    if mode == ScoringMode.NINE:
        return [r for r in rounds if r.holes == 9]
    if mode == ScoringMode.EIGHTEEN:
        return [r for r in rounds if r.holes == 18]
    return [double_nine_hole_round(r) for r in rounds]


def normalize_rounds_for_handicap(
    rounds: Iterable[RoundRecord], mode: ScoringMode = ScoringMode.COMBINED
) -> List[RoundRecord]:
    """Like normalize_rounds_by_mode, but combined mode also doubles rating and par."""
    mode = ScoringMode(mode)
    if mode != ScoringMode.COMBINED:
        return normalize_rounds_by_mode(rounds, mode)
    return [double_nine_hole_round(r, include_tee_fields=True) for r in rounds]
