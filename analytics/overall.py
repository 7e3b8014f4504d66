"""Per-mode fact layer over a player's round history.

Everything here is a pure function of the rounds passed in; the narrative
engine renders cards from the resulting OverallInsightsSummary.
"""

from __future__ import annotations

import hashlib
import json
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from models.insights import (
    ComponentFacts,
    ComponentPick,
    ConsistencyFacts,
    ConsistencyLabel,
    DataQualityFlags,
    EfficiencyMetric,
    OverallInsightsSummary,
    PerformanceBand,
    ProjectionFacts,
    SGComponent,
    Trajectory,
)
from models.round_record import RoundRecord, ScoringMode

from . import config
from .modes import normalize_rounds_by_mode
from .stats import (
    average,
    clamp,
    finite_values,
    linear_slope,
    percentile,
    round1,
    std_dev,
    to_count,
    to_window,
)

logger = logging.getLogger(__name__)

COMPONENT_LABELS: Dict[SGComponent, str] = {
    SGComponent.OFF_TEE: "Off the tee",
    SGComponent.APPROACH: "Approach play",
    SGComponent.PUTTING: "Putting",
    SGComponent.PENALTIES: "Penalties",
    SGComponent.SHORT_GAME: "Short game",
    SGComponent.RESIDUAL: "Short game",
}

_SG_ATTRS: Dict[SGComponent, str] = {
    SGComponent.OFF_TEE: "sg_off_tee",
    SGComponent.APPROACH: "sg_approach",
    SGComponent.PUTTING: "sg_putting",
    SGComponent.PENALTIES: "sg_penalties",
    SGComponent.RESIDUAL: "sg_residual",
}

MEASURED_COMPONENTS = (
    SGComponent.OFF_TEE,
    SGComponent.APPROACH,
    SGComponent.PUTTING,
    SGComponent.PENALTIES,
)

# Earlier entries win when two leaks are within LEAK_TIE_THRESHOLD
LEAK_TIE_BREAK_ORDER = (
    SGComponent.PENALTIES,
    SGComponent.PUTTING,
    SGComponent.APPROACH,
    SGComponent.OFF_TEE,
)
LEAK_TIE_THRESHOLD = 0.1
RESIDUAL_DOMINANT_THRESHOLD = 0.3
RESIDUAL_OTHER_COMPONENT_MAX = 0.15
VOLATILE_SPREAD_THRESHOLD = 4.0

CONSISTENCY_STABLE_MAX = 3.0
CONSISTENCY_MODERATE_MAX = 5.0

SLOPE_TRAJECTORY_THRESHOLD = 0.35
SCORE_SHIFT_PER_SLOPE = 4
SCORE_SHIFT_LIMIT = 2.0
HANDICAP_SHIFT_PER_SLOPE = 8
HANDICAP_SHIFT_MIN = -0.8
HANDICAP_SHIFT_MAX = 1.2
SCORE_RANGE_MIN, SCORE_RANGE_MAX = 1.2, 3.0
HANDICAP_RANGE_MIN, HANDICAP_RANGE_MAX = 0.4, 1.2
HANDICAP_LOW_FLOOR = 1.0

BAND_TOUGH = -5.0
BAND_BELOW = -2.0
BAND_ABOVE = 2.0
BAND_GREAT = 5.0


# ================================================================
# Helpers
# ================================================================

def _sg(round_: RoundRecord, component: SGComponent) -> Optional[float]:
    return getattr(round_, _SG_ATTRS[component])


def _has_sg(round_: RoundRecord) -> bool:
    return round_.has_strokes_gained()


def trajectory_epsilon(mode: ScoringMode) -> float:
    """Score delta treated as no change; wider for 18-hole scores."""
    return 0.5 if ScoringMode(mode) == ScoringMode.NINE else 1.0


def sort_newest_first(rounds: Iterable[RoundRecord]) -> List[RoundRecord]:
    return sorted(rounds, key=lambda r: r.date, reverse=True)


def compute_data_hash(rounds: Sequence[RoundRecord], is_premium: bool) -> str:
    """SHA-256 over the round fields that affect computed facts."""
    compact = [
        {
            "id": r.id,
            "d": r.date.date().isoformat(),
            "h": r.holes,
            "s": r.score,
            "t": r.to_par,
            "fir": r.fir_hit,
            "gir": r.gir_hit,
            "p": r.putts,
            "pen": r.penalties,
            "hcp": r.handicap_at_round,
            "sg": r.sg_total,
            "ot": r.sg_off_tee,
            "ap": r.sg_approach,
            "pu": r.sg_putting,
            "pe": r.sg_penalties,
            "rs": r.sg_residual,
        }
        for r in sort_newest_first(rounds)
    ]
    canonical = json.dumps(
        {"is_premium": bool(is_premium), "rounds": compact},
        separators=(",", ":"),
        sort_keys=True,
    )
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


# ================================================================
# Scoring facts
# ================================================================

def compute_consistency(rounds_desc: Sequence[RoundRecord]) -> ConsistencyFacts:
    """Spread of to-par over the most recent rounds."""
    values = finite_values(r.to_par for r in rounds_desc[: config.CONSISTENCY_WINDOW])
    if len(values) < config.CONSISTENCY_MIN_SAMPLES:
        return ConsistencyFacts()
    spread = std_dev(values)
    if spread < CONSISTENCY_STABLE_MAX:
        label = ConsistencyLabel.STABLE
    elif spread < CONSISTENCY_MODERATE_MAX:
        label = ConsistencyLabel.MODERATE
    else:
        label = ConsistencyLabel.VOLATILE
    return ConsistencyFacts(label=label, spread=round1(spread))


def compute_efficiency(
    recent: Sequence[RoundRecord], baseline: Sequence[RoundRecord]
) -> Dict[str, EfficiencyMetric]:
    """FIR%, GIR%, putts and penalties: recent vs baseline with recent coverage."""

    def metric(get: Callable[[RoundRecord], Optional[float]]) -> EfficiencyMetric:
        recent_vals = finite_values(get(r) for r in recent)
        baseline_vals = finite_values(get(r) for r in baseline)
        return EfficiencyMetric(
            recent=round1(average(recent_vals)),
            baseline=round1(average(baseline_vals)),
            coverage_recent=f"{len(recent_vals)}/{len(recent)}",
        )

    def fir_pct(r: RoundRecord) -> Optional[float]:
        possible = r.fairways_possible()
        if r.fir_hit is None or possible <= 0:
            return None
        return r.fir_hit / possible * 100

    def gir_pct(r: RoundRecord) -> Optional[float]:
        if r.gir_hit is None:
            return None
        return r.gir_hit / r.holes * 100

    return {
        "fir_pct": metric(fir_pct),
        "gir_pct": metric(gir_pct),
        "putts": metric(lambda r: r.putts),
        "penalties": metric(lambda r: r.penalties),
    }


def compute_band(avg_sg_total: Optional[float]) -> PerformanceBand:
    if avg_sg_total is None:
        return PerformanceBand.UNKNOWN
    if avg_sg_total <= BAND_TOUGH:
        return PerformanceBand.TOUGH
    if avg_sg_total <= BAND_BELOW:
        return PerformanceBand.BELOW
    if avg_sg_total < BAND_ABOVE:
        return PerformanceBand.EXPECTED
    if avg_sg_total < BAND_GREAT:
        return PerformanceBand.ABOVE
    return PerformanceBand.GREAT


def classify_trajectory(delta: Optional[float], mode: ScoringMode) -> Trajectory:
    """Direction of recent scoring vs baseline (lower scores = improving)."""
    if delta is None:
        return Trajectory.UNKNOWN
    if abs(delta) <= trajectory_epsilon(mode):
        return Trajectory.STABLE
    return Trajectory.IMPROVING if delta < 0 else Trajectory.WORSENING


# ================================================================
# Strokes-gained component facts
# ================================================================

def _component_average(rows: Sequence[RoundRecord], component: SGComponent) -> Optional[float]:
    return average(_sg(r, component) for r in rows)


def pick_worst_component_for_round(round_: RoundRecord) -> Optional[Tuple[SGComponent, float]]:
    values = [
        (component, _sg(round_, component))
        for component in (*MEASURED_COMPONENTS, SGComponent.RESIDUAL)
    ]
    values = [(component, v) for component, v in values if v is not None]
    if not values:
        return None
    return min(values, key=lambda item: item[1])


def most_costly_component(recent: Sequence[RoundRecord]) -> Tuple[Optional[SGComponent], int]:
    """Component most often the per-round minimum; ties go to the lower average."""
    counts: Dict[SGComponent, List[float]] = {}
    for round_ in recent:
        worst = pick_worst_component_for_round(round_)
        if worst is not None:
            counts.setdefault(worst[0], []).append(worst[1])
    if not counts:
        return None, 0
    component, values = min(
        counts.items(), key=lambda item: (-len(item[1]), sum(item[1]) / len(item[1]))
    )
    return component, len(values)


def pick_biggest_leak(deltas: Dict[str, Optional[float]]) -> Optional[SGComponent]:
    """Most negative measured delta, with a fixed tie-break inside the tie band."""
    candidates = [
        (component, deltas.get(component.value))
        for component in LEAK_TIE_BREAK_ORDER
    ]
    candidates = [(component, v) for component, v in candidates if v is not None and v < 0]
    if not candidates:
        return None

    worst_component, worst_value = candidates[0]
    for component, value in candidates[1:]:
        if value < worst_value - LEAK_TIE_THRESHOLD:
            worst_component, worst_value = component, value
        # Within the tie band the earlier entry in LEAK_TIE_BREAK_ORDER already holds
    return worst_component


def is_residual_dominant(deltas: Dict[str, Optional[float]]) -> bool:
    residual = deltas.get(SGComponent.RESIDUAL.value)
    if residual is None or abs(residual) < RESIDUAL_DOMINANT_THRESHOLD:
        return False
    others = [
        abs(deltas[c.value]) for c in MEASURED_COMPONENTS if deltas.get(c.value) is not None
    ]
    if not others:
        return True
    return max(others) <= RESIDUAL_OTHER_COMPONENT_MAX


def _strength_and_opportunity(
    recent: Sequence[RoundRecord], baseline: Sequence[RoundRecord]
) -> Tuple[ComponentPick, ComponentPick]:
    scored = []
    for component in MEASURED_COMPONENTS:
        recent_vals = finite_values(_sg(r, component) for r in recent)
        if not recent_vals:
            continue
        baseline_avg = _component_average(baseline, component)
        if baseline_avg is None:
            continue
        scored.append((component, average(recent_vals) - baseline_avg, len(recent_vals)))

    if not scored:
        return ComponentPick(), ComponentPick()

    # max/min keep the first of equal values, so MEASURED_COMPONENTS order breaks ties
    best = max(scored, key=lambda item: item[1])
    worst = min(scored, key=lambda item: item[1])
    strength = ComponentPick(
        name=best[0],
        label=COMPONENT_LABELS[best[0]],
        value=round1(best[1]),
        coverage_recent=best[2],
        low_coverage=best[2] < config.SG_MIN_RECENT_COVERAGE,
    )
    opportunity = ComponentPick(
        name=worst[0],
        label=COMPONENT_LABELS[worst[0]],
        value=round1(worst[1]),
        coverage_recent=worst[2],
        low_coverage=worst[2] < config.SG_MIN_RECENT_COVERAGE,
        is_weakness=worst[1] < 0,
    )
    return strength, opportunity


def compute_component_facts(
    recent: Sequence[RoundRecord], baseline: Sequence[RoundRecord]
) -> ComponentFacts:
    sg_baseline = [r for r in baseline if _has_sg(r)]
    # No recent breakdowns leaves the recent side empty (null deltas)
    sg_recent = [r for r in recent if _has_sg(r)]
    if not sg_baseline:
        return ComponentFacts()

    components = (*MEASURED_COMPONENTS, SGComponent.RESIDUAL)
    recent_avg = {c.value: _component_average(sg_recent, c) for c in components}
    baseline_avg = {c.value: _component_average(sg_baseline, c) for c in components}
    recent_avg["total"] = average(r.sg_total for r in sg_recent)
    baseline_avg["total"] = average(r.sg_total for r in sg_baseline)

    deltas: Dict[str, Optional[float]] = {}
    for c in components:
        r_avg, b_avg = recent_avg[c.value], baseline_avg[c.value]
        deltas[c.value] = round1(r_avg - b_avg) if r_avg is not None and b_avg is not None else None

    strength, opportunity = _strength_and_opportunity(recent, baseline)
    costly, costly_count = most_costly_component(recent)

    return ComponentFacts(
        recent_avg=recent_avg,
        baseline_avg=baseline_avg,
        deltas=deltas,
        strength=strength,
        opportunity=opportunity,
        biggest_leak=pick_biggest_leak(deltas),
        most_costly_component=costly,
        most_costly_count=costly_count,
        has_data=True,
    )


# ================================================================
# Projection
# ================================================================

def _trajectory_from_slope(
    slope: Optional[float], delta: Optional[float], mode: ScoringMode
) -> Trajectory:
    if slope is not None and abs(slope) >= SLOPE_TRAJECTORY_THRESHOLD:
        return Trajectory.IMPROVING if slope < 0 else Trajectory.WORSENING
    return classify_trajectory(delta, mode)


def compute_projection(
    recent: Sequence[RoundRecord],
    baseline: Sequence[RoundRecord],
    mode: ScoringMode,
    *,
    is_premium: bool,
    rounds_total: int,
    current_handicap: Optional[float] = None,
) -> ProjectionFacts:
    """Bounded ten-rounds-ahead projection, gated to premium users with enough rounds."""
    recent_avg = average(r.score for r in recent)
    baseline_avg = average(r.score for r in baseline)
    delta = recent_avg - baseline_avg if recent_avg is not None and baseline_avg is not None else None

    score_slope = linear_slope([r.score for r in reversed(recent)])
    trajectory = _trajectory_from_slope(score_slope, delta, mode)

    if current_handicap is None and baseline:
        current_handicap = baseline[0].handicap_at_round

    facts = ProjectionFacts(
        trajectory=trajectory,
        score_slope=round1(score_slope) if score_slope is not None else None,
        handicap_current=round1(current_handicap),
        rounds_used=rounds_total,
        upgrade_prompt=not is_premium,
    )
    if not is_premium or rounds_total < config.PROJECTION_MIN_ROUNDS or recent_avg is None:
        return facts

    score_shift = clamp(score_slope * SCORE_SHIFT_PER_SLOPE, -SCORE_SHIFT_LIMIT, SCORE_SHIFT_LIMIT) if score_slope is not None else 0.0
    if baseline_avg is not None:
        projected_score = recent_avg * 0.7 + baseline_avg * 0.3 + score_shift
    else:
        projected_score = recent_avg + score_shift
    facts.score = round1(projected_score)

    score_values = [float(r.score) for r in baseline[: config.PROJECTION_RANGE_WINDOW]]
    p25, p75 = percentile(score_values, 0.25), percentile(score_values, 0.75)
    if p25 is not None and p75 is not None:
        window = clamp(abs(p75 - p25) / 2, SCORE_RANGE_MIN, SCORE_RANGE_MAX)
        facts.score_low = round1(projected_score - window)
        facts.score_high = round1(projected_score + window)

    if current_handicap is None:
        return facts

    handicaps = finite_values(r.handicap_at_round for r in baseline[: config.HANDICAP_TREND_WINDOW])
    handicap_slope = linear_slope(list(reversed(handicaps)))
    handicap_shift = (
        clamp(handicap_slope * HANDICAP_SHIFT_PER_SLOPE, HANDICAP_SHIFT_MIN, HANDICAP_SHIFT_MAX)
        if handicap_slope is not None else 0.0
    )
    projected_handicap = current_handicap + handicap_shift
    facts.handicap = round1(projected_handicap)

    h25, h75 = percentile(handicaps, 0.25), percentile(handicaps, 0.75)
    if h25 is not None and h75 is not None:
        window = clamp(abs(h75 - h25) / 2, HANDICAP_RANGE_MIN, HANDICAP_RANGE_MAX)
        low = max(projected_handicap - window, current_handicap - HANDICAP_LOW_FLOOR)
        high = max(projected_handicap + window, low)
        facts.handicap_low = round1(low)
        facts.handicap_high = round1(high)
    return facts


# ================================================================
# Summary
# ================================================================

def missing_stats_for(recent: Sequence[RoundRecord]) -> Dict[str, bool]:
    """A stat counts as missing when too few recent rounds tracked it."""
    needed = min(config.SG_MIN_RECENT_COVERAGE, max(1, len(recent)))
    tracked = {"fir": 0, "gir": 0, "putts": 0, "penalties": 0}
    for r in recent:
        for name, present in r.present_stats().items():
            tracked[name] += int(present)
    return {name: count < needed for name, count in tracked.items()}


def compute_mode_summary(
    rounds: Sequence[RoundRecord],
    mode: ScoringMode,
    *,
    is_premium: bool,
    data_hash: str,
    now: Optional[datetime] = None,
    current_handicap: Optional[float] = None,
    recent_window: Any = None,
    nine_hole_recent: Any = 0,
    eighteen_hole_recent: Any = 0,
) -> OverallInsightsSummary:
    """Fact snapshot for one scoring mode; rounds may arrive in any order."""
    mode = ScoringMode(mode)
    window = to_window(recent_window, config.RECENT_WINDOW)
    points = sort_newest_first(normalize_rounds_by_mode(rounds, mode))
    recent = points[:window]
    baseline = points if is_premium else points[: config.FREE_BASELINE_WINDOW]

    avg_recent = average(r.score for r in recent)
    avg_baseline = average(r.score for r in baseline)
    delta = avg_recent - avg_baseline if avg_recent is not None and avg_baseline is not None else None
    delta = round1(delta)
    avg_sg_recent = average(r.sg_total for r in recent)

    consistency = compute_consistency(points)
    components = compute_component_facts(recent, baseline)
    if not is_premium:
        components.strength.value = None
        components.opportunity.value = None

    latest_with_sg = next((r for r in points if _has_sg(r)), None)
    residual_dominant = is_residual_dominant(components.deltas)
    has_component_data = any(v is not None for v in components.deltas.values())

    flags = DataQualityFlags(
        insufficient_rounds=len(recent) < config.MIN_ROUNDS_FOR_TRENDS,
        missing_score_trend=delta is None,
        combined_needs_more_nine_hole_rounds=(
            mode == ScoringMode.COMBINED
            and to_count(nine_hole_recent) == 0
            and to_count(eighteen_hole_recent) > 0
            and len(recent) < config.MIN_ROUNDS_FOR_TRENDS
        ),
        missing_component_data=not has_component_data,
        residual_dominant=residual_dominant,
        volatile_scoring=(
            consistency.label == ConsistencyLabel.VOLATILE
            or (consistency.spread is not None and consistency.spread > VOLATILE_SPREAD_THRESHOLD)
        ),
    )

    summary = OverallInsightsSummary(
        mode=mode,
        last_updated=now or datetime.now(timezone.utc),
        data_hash=data_hash,
        is_premium=is_premium,
        window_recent=window,
        window_baseline="overall" if is_premium else "last20",
        rounds_total=len(points),
        rounds_recent=len(recent),
        rounds_baseline=len(baseline),
        latest_score=recent[0].score if recent else None,
        latest_to_par=recent[0].to_par if recent else None,
        avg_score_recent=round1(avg_recent),
        avg_score_baseline=round1(avg_baseline),
        score_delta=delta,
        avg_to_par_recent=round1(average(r.to_par for r in recent)),
        best_score_recent=min((r.score for r in recent), default=None),
        avg_sg_total_recent=round1(avg_sg_recent) if is_premium else None,
        performance_band=compute_band(avg_sg_recent),
        trajectory=classify_trajectory(delta, mode) if recent else Trajectory.UNKNOWN,
        consistency=consistency,
        efficiency=compute_efficiency(recent, baseline),
        projection=compute_projection(
            recent,
            baseline,
            mode,
            is_premium=is_premium,
            rounds_total=len(points),
            current_handicap=current_handicap,
        ),
        components=components,
        confidence=latest_with_sg.sg_confidence if latest_with_sg else None,
        flags=flags,
        missing_stats=missing_stats_for(recent),
    )
    logger.debug(
        "Overall summary mode=%s rounds=%d delta=%s trajectory=%s leak=%s",
        mode.value, len(points), delta, summary.trajectory.value, components.biggest_leak,
    )
    return summary


def compute_overall_summaries(
    rounds: Sequence[RoundRecord],
    *,
    is_premium: bool,
    now: Optional[datetime] = None,
    current_handicap: Optional[float] = None,
    recent_window: Any = None,
) -> Dict[ScoringMode, OverallInsightsSummary]:
    """Summaries for every scoring mode, sharing one content hash."""
    now = now or datetime.now(timezone.utc)
    data_hash = compute_data_hash(rounds, is_premium)
    window = to_window(recent_window, config.RECENT_WINDOW)
    nine_recent = len(sort_newest_first(r for r in rounds if r.holes == 9)[:window])
    eighteen_recent = len(sort_newest_first(r for r in rounds if r.holes == 18)[:window])

    summaries = {
        mode: compute_mode_summary(
            rounds,
            mode,
            is_premium=is_premium,
            data_hash=data_hash,
            now=now,
            current_handicap=current_handicap,
            recent_window=window,
            nine_hole_recent=nine_recent,
            eighteen_hole_recent=eighteen_recent,
        )
        for mode in (ScoringMode.COMBINED, ScoringMode.NINE, ScoringMode.EIGHTEEN)
    }
    logger.info("Computed overall summaries for %d rounds (premium=%s)", len(rounds), is_premium)
    return summaries
