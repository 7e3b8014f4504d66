"""Measured-component selection and missing-stat helpers for one round."""

from __future__ import annotations

from typing import Dict, List, Optional

from models.base import BaseGolfModel
from models.insights import SGComponent
from models.round_record import RoundRecord

WEAKNESS_THRESHOLD = -1.0
RESIDUAL_DOMINANCE_FLOOR = 1.0
RESIDUAL_DOMINANCE_RATIO = 0.6
WEAK_SEPARATION_DELTA = 0.4

AREA_LABELS: Dict[SGComponent, str] = {
    SGComponent.OFF_TEE: "Off the tee",
    SGComponent.APPROACH: "Approach play",
    SGComponent.PUTTING: "Putting",
    SGComponent.PENALTIES: "Penalty avoidance",
    SGComponent.SHORT_GAME: "Short game",
}

STAT_LABELS: Dict[str, str] = {
    "fir": "FIR",
    "gir": "GIR",
    "putts": "putts",
    "penalties": "penalties",
}

# Tracked stat behind each measured area; short game has none
AREA_STATS: Dict[SGComponent, Optional[str]] = {
    SGComponent.OFF_TEE: "fir",
    SGComponent.APPROACH: "gir",
    SGComponent.PUTTING: "putts",
    SGComponent.PENALTIES: "penalties",
    SGComponent.SHORT_GAME: None,
}


class MeasuredComponent(BaseGolfModel):
    name: SGComponent
    label: str
    value: float


class MeasuredSelection(BaseGolfModel):
    components: List[MeasuredComponent] = []
    best: Optional[MeasuredComponent] = None
    opportunity: Optional[MeasuredComponent] = None
    opportunity_is_weak: bool = False
    residual_dominant: bool = False
    weak_separation: bool = False

    @property
    def count(self) -> int:
        return len(self.components)


def build_measured_components(round_: RoundRecord) -> List[MeasuredComponent]:
    values = (
        (SGComponent.OFF_TEE, round_.sg_off_tee),
        (SGComponent.APPROACH, round_.sg_approach),
        (SGComponent.PUTTING, round_.sg_putting),
        (SGComponent.PENALTIES, round_.sg_penalties),
    )
    return [
        MeasuredComponent(name=name, label=AREA_LABELS[name], value=value)
        for name, value in values
        if value is not None
    ]


def _residual_dominant(round_: RoundRecord, components: List[MeasuredComponent]) -> bool:
    if round_.sg_residual is None or round_.sg_total is None:
        return False
    residual = abs(round_.sg_residual)
    if residual < RESIDUAL_DOMINANCE_FLOOR:
        return False
    largest = max((abs(c.value) for c in components), default=0.0)
    total = max(abs(round_.sg_total), 0.001)
    return residual > largest or residual / total >= RESIDUAL_DOMINANCE_RATIO


def select_measured_components(round_: RoundRecord) -> MeasuredSelection:
    """Best and opportunity areas among the measured strokes-gained components.

    The opportunity is the lowest component, or the next-lowest when the
    lowest is also the best (a single component).
    """
    components = build_measured_components(round_)
    if not components:
        return MeasuredSelection()

    ascending = sorted(components, key=lambda c: c.value)
    best = max(components, key=lambda c: c.value)
    opportunity = ascending[0]
    if opportunity.name == best.name and len(ascending) > 1:
        opportunity = ascending[1]

    return MeasuredSelection(
        components=components,
        best=best,
        opportunity=opportunity,
        opportunity_is_weak=opportunity.value <= WEAKNESS_THRESHOLD,
        residual_dominant=_residual_dominant(round_, components),
        weak_separation=(
            len(ascending) > 1
            and abs(ascending[0].value - ascending[1].value) < WEAK_SEPARATION_DELTA
        ),
    )


def missing_stat_keys(missing: Dict[str, bool]) -> List[str]:
    """Missing stat keys in display order."""
    return [key for key in STAT_LABELS if missing.get(key)]


def format_stat_list(keys: List[str]) -> str:
    """'A', 'A and B', or 'A, B, and C'."""
    labels = [STAT_LABELS[key] for key in keys]
    if not labels:
        return ""
    if len(labels) == 1:
        return labels[0]
    if len(labels) == 2:
        return f"{labels[0]} and {labels[1]}"
    return f"{', '.join(labels[:-1])}, and {labels[-1]}"
