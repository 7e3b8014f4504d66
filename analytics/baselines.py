"""Handicap-tier baseline table and interpolation."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Sequence, Union

from models.baseline import HandicapTierBaseline

from .exceptions import BaselineConfigurationError

logger = logging.getLogger(__name__)

_TRACKED = ("score", "fir_pct", "gir_pct", "putts", "penalties")


def build_baseline_table(rows: Iterable[Union[HandicapTierBaseline, Dict[str, Any]]]) -> List[HandicapTierBaseline]:
    """Validated table sorted ascending by handicap."""
    table = [
        row if isinstance(row, HandicapTierBaseline) else HandicapTierBaseline(**row)
        for row in rows
    ]
    table.sort(key=lambda row: row.handicap)
    handicaps = [row.handicap for row in table]
    if len(handicaps) != len(set(handicaps)):
        raise BaselineConfigurationError("Baseline table has duplicate handicap anchors")
    return table


def load_baseline_table(path: Union[str, Path]) -> List[HandicapTierBaseline]:
    """Read a JSON list of baseline rows."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise BaselineConfigurationError(f"Baseline file {path} must contain a JSON list")
    return build_baseline_table(data)


def interpolate_baseline(
    table: Sequence[HandicapTierBaseline], handicap: float
) -> HandicapTierBaseline:
    """Expected 18-hole stats at any handicap.

    Clamps to the first/last anchor outside the table; between anchors each
    tracked quantity is linearly interpolated on its own.
    """
    if not table:
        raise BaselineConfigurationError("Handicap baseline table is empty")

    ordered = sorted(table, key=lambda row: row.handicap)
    first, last = ordered[0], ordered[-1]
    if handicap <= first.handicap:
        return first.model_copy(update={"handicap": handicap})
    if handicap >= last.handicap:
        return last.model_copy(update={"handicap": handicap})

    for lower, upper in zip(ordered, ordered[1:]):
        if lower.handicap <= handicap <= upper.handicap:
            span = upper.handicap - lower.handicap
            t = (handicap - lower.handicap) / span
            values = {
                name: getattr(lower, name) + (getattr(upper, name) - getattr(lower, name)) * t
                for name in _TRACKED
            }
            return HandicapTierBaseline(handicap=handicap, **values)

    # Unreachable for a sorted table with distinct anchors
    raise BaselineConfigurationError(f"No baseline anchors bracket handicap {handicap}")
