"""Six overall-insights cards rendered from one mode summary."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from models.insights import OverallInsightsSummary, SGComponent
from models.narrative import NarrativeCard, OverallCardPlan, PresentStats

from .drills import pick_drill
from .selection import format_stat_list, missing_stat_keys
from .templates import (
    CARD1,
    CARD2,
    CARD3,
    CARD4,
    CARD5,
    CARD6,
    CARD_FALLBACKS,
    CARD_PREFIXES,
    TRAJECTORY_PHRASES,
    clean_text,
    inline_sentence,
    render,
)
from .variants import pick_variant

logger = logging.getLogger(__name__)

TREND_FLAT_DELTA = 0.2
STRENGTH_CLEAR_EDGE = 0.5
TRACK_FIRST_MISSING = 3

# Efficiency metric backing each tracked stat
_EFFICIENCY_STATS = {
    "fir": "fir_pct",
    "gir": "gir_pct",
    "putts": "putts",
    "penalties": "penalties",
}


def card_seed_base(user_id: str, summary: OverallInsightsSummary) -> str:
    return f"{user_id}|{summary.data_hash}|{summary.rounds_total}|{summary.mode.value}"


def _covered(coverage: str) -> bool:
    tracked, _, _ = coverage.partition("/")
    return tracked.isdigit() and int(tracked) > 0


def present_from_summary(summary: OverallInsightsSummary) -> PresentStats:
    """A stat is present when at least one recent round tracked it."""
    values = {}
    for stat, metric in _EFFICIENCY_STATS.items():
        facts = summary.efficiency.get(metric)
        values[stat] = facts is not None and _covered(facts.coverage_recent)
    return PresentStats(**values)


def build_overall_card_plan(
    summary: OverallInsightsSummary, seed_base: str, offset: int = 0
) -> OverallCardPlan:
    components = summary.components
    area = components.opportunity.name or components.strength.name
    return OverallCardPlan(
        prefixes=list(CARD_PREFIXES),
        opportunity_is_weak=components.opportunity.is_weakness,
        present=present_from_summary(summary),
        drill=pick_drill(area, f"{seed_base}|drill", offset),
    )


# ================================================================
# Outcomes
# ================================================================

def _format_to_par(to_par: int) -> str:
    if to_par == 0:
        return "E"
    return f"+{to_par}" if to_par > 0 else str(to_par)


def _latest(summary: OverallInsightsSummary) -> str:
    if summary.latest_to_par is None:
        return str(summary.latest_score)
    return f"{summary.latest_score} ({_format_to_par(summary.latest_to_par)})"


def _trend_card(summary: OverallInsightsSummary) -> Tuple[str, Dict[str, str]]:
    if summary.rounds_total == 0 or summary.latest_score is None:
        return "empty", {}
    values = {"latest": _latest(summary)}
    delta = summary.score_delta
    if delta is None or summary.flags.insufficient_rounds:
        return "A", values
    values["delta"] = f"{abs(delta):.1f}"
    if abs(delta) < TREND_FLAT_DELTA:
        return "B", values
    return ("C" if delta < 0 else "D"), values


def _strength_card(summary: OverallInsightsSummary) -> Tuple[str, Dict[str, str]]:
    strength = summary.components.strength
    if not strength.label:
        return "A", {}
    values = {"label": strength.label}
    if strength.low_coverage:
        return "D", values
    if strength.value is not None and strength.value >= STRENGTH_CLEAR_EDGE:
        return "B", values
    return "C", values


def _opportunity_card(summary: OverallInsightsSummary) -> Tuple[str, Dict[str, str]]:
    opportunity = summary.components.opportunity
    if not opportunity.label:
        return "A", {}
    values = {"label": opportunity.label}
    if opportunity.low_coverage:
        return ("D" if opportunity.is_weakness else "E"), values
    return ("B" if opportunity.is_weakness else "C"), values


def _priority_card(summary: OverallInsightsSummary, plan: OverallCardPlan) -> Tuple[str, Dict[str, str]]:
    missing = missing_stat_keys(summary.missing_stats)
    drill = plan.drill
    values = {"missing": format_stat_list(missing)}
    if drill is not None:
        values.update(action=drill.action, action_inline=inline_sentence(drill.action), goal=drill.goal)
    if len(missing) >= TRACK_FIRST_MISSING:
        return "A", values
    if not missing:
        return "B", values
    return "C", values


def _strategy_card(summary: OverallInsightsSummary) -> Tuple[str, Dict[str, str]]:
    if len(missing_stat_keys(summary.missing_stats)) >= TRACK_FIRST_MISSING:
        return "track_first", {}
    name = summary.components.opportunity.name
    key = name.value if isinstance(name, SGComponent) else "general"
    return (key if key in CARD5 else "general"), {}


def _projection_card(summary: OverallInsightsSummary) -> Tuple[str, Dict[str, str]]:
    projection = summary.projection
    values = {"traj": TRAJECTORY_PHRASES[projection.trajectory.value]}
    if not summary.is_premium:
        return "A", values
    if projection.score is None:
        return "C", values

    if projection.score_low is not None and projection.score_high is not None:
        values["score"] = f"{projection.score_low:.1f} to {projection.score_high:.1f}"
    else:
        values["score"] = f"{projection.score:.1f}"
    if projection.handicap is None:
        return "B_score", values
    if projection.handicap_low is not None and projection.handicap_high is not None:
        values["hcp"] = f"{projection.handicap_low:.1f} to {projection.handicap_high:.1f}"
    else:
        values["hcp"] = f"{projection.handicap:.1f}"
    return "B", values


# ================================================================
# Rendering
# ================================================================

def build_overall_cards(
    summary: OverallInsightsSummary,
    plan: OverallCardPlan,
    seed_base: str,
    offset: int = 0,
    fixed_index: Optional[int] = None,
) -> List[NarrativeCard]:
    decided = (
        (CARD1, _trend_card(summary)),
        (CARD2, _strength_card(summary)),
        (CARD3, _opportunity_card(summary)),
        (CARD4, _priority_card(summary, plan)),
        (CARD5, _strategy_card(summary)),
        (CARD6, _projection_card(summary)),
    )

    cards = []
    for number, (prefix, (table, (outcome, values))) in enumerate(zip(plan.prefixes, decided), start=1):
        template, index = pick_variant(table[outcome], seed_base, f"card{number}|{outcome}", offset, fixed_index)
        body = render(template, **values)
        cards.append(NarrativeCard(
            prefix=prefix,
            text=clean_text(f"{prefix} {body}"),
            outcome=outcome,
            variant_index=index,
        ))
    logger.debug(
        "Cards mode=%s offset=%d outcomes=%s",
        summary.mode.value, offset, [card.outcome for card in cards],
    )
    return cards


def build_fallback_cards(plan: OverallCardPlan) -> List[NarrativeCard]:
    cards = []
    for prefix, text in zip(plan.prefixes, CARD_FALLBACKS):
        cards.append(NarrativeCard(prefix=prefix, text=text, outcome="fallback"))
    return cards
