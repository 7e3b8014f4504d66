"""Three-message feedback for a single saved round.

Message 1 names the best measured area, message 2 the opportunity, and
message 3 the next-round action. The plan is decided from facts alone; the
renderer only chooses wording.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from analytics import config
from analytics.stats import round_to
from models.insights import SGComponent
from models.narrative import (
    ActionPlan,
    ActionType,
    Emoji,
    FocusPlan,
    InsightSlot,
    MessageLevel,
    PostRoundMessage,
    PostRoundPlan,
    PresentStats,
)
from models.round_record import RoundRecord

from .drills import DRILL_BENEFITS, pick_drill
from .selection import (
    AREA_LABELS,
    STAT_LABELS,
    WEAKNESS_THRESHOLD,
    MeasuredSelection,
    format_stat_list,
    missing_stat_keys,
    select_measured_components,
)
from .templates import (
    DRILL_MESSAGES,
    GENERAL_ACTIONS,
    POST_ROUND_FALLBACK,
    POST_ROUND_INSIGHT1,
    POST_ROUND_INSIGHT2,
    RESIDUAL_SUFFIX,
    TRACK_CLAUSES,
    clean_text,
    render,
)
from .variants import pick_variant

logger = logging.getLogger(__name__)

INSIGHT_KEYS = ("insight1", "insight2", "insight3")
MAX_SENTENCES = {"insight1": 2, "insight2": 3, "insight3": 3}

FIRE_THRESHOLD = 2.0
RESIDUAL_SUFFIX_THRESHOLD = 1.5
SCORE_ONLY_OUTCOMES = ("score_only_first", "score_only_better", "score_only_near", "score_only_worse")


# ================================================================
# Facts
# ================================================================

def _whole(value: float) -> int:
    return max(1, int(round_to(abs(value), 0)))


def _strokes(n: int) -> str:
    return "stroke" if n == 1 else "strokes"


def _to_par(round_: RoundRecord) -> Optional[int]:
    if round_.to_par is not None:
        return round_.to_par
    if round_.par is not None:
        return round_.score - round_.par
    return None


def format_to_par(to_par: int) -> str:
    if to_par == 0:
        return "E"
    return f"+{to_par}" if to_par > 0 else str(to_par)


def score_sentence(round_: RoundRecord, avg_score_recent: Optional[float] = None) -> str:
    """'You shot 90 (+18), about 2 strokes above your recent average.'"""
    to_par = _to_par(round_)
    shot = f"You shot {round_.score}"
    if to_par is not None:
        shot += f" ({format_to_par(to_par)})"
    if avg_score_recent is None:
        return f"{shot}."

    delta = round_.score - avg_score_recent
    if abs(delta) < 0.5:
        return f"{shot}, right in line with your recent average."
    n = int(round_to(abs(delta), 0))
    direction = "above" if delta > 0 else "better than"
    return f"{shot}, about {n} {_strokes(n)} {direction} your recent average."


def _near_band(holes: int) -> float:
    return 1.5 * holes / 18


def _score_only_outcome(round_: RoundRecord, avg_score_recent: Optional[float]) -> str:
    if avg_score_recent is None:
        return "score_only_first"
    delta = round_.score - avg_score_recent
    if abs(delta) < _near_band(round_.holes):
        return "score_only_near"
    return "score_only_better" if delta < 0 else "score_only_worse"


def _evidence(round_: RoundRecord, area: SGComponent) -> str:
    """Parenthetical support count for a measured area."""
    if area == SGComponent.OFF_TEE and round_.fir_hit is not None:
        possible = round_.fairways_possible()
        if possible:
            return f" ({round_.fir_hit} of {possible} fairways hit)"
        return f" ({round_.fir_hit} fairways hit)"
    if area == SGComponent.APPROACH and round_.gir_hit is not None:
        return f" ({round_.gir_hit} of {round_.holes} greens in regulation)"
    if area == SGComponent.PUTTING and round_.putts is not None:
        word = "putt" if round_.putts == 1 else "putts"
        return f" ({round_.putts} {word})"
    if area == SGComponent.PENALTIES and round_.penalties is not None:
        word = "penalty" if round_.penalties == 1 else "penalties"
        return f" ({round_.penalties} {word})"
    return ""


# ================================================================
# Plan
# ================================================================

def _insight1_outcome(selection: MeasuredSelection) -> str:
    if selection.count == 0:
        return "score_only"
    if selection.count == 1:
        return "single"
    best = selection.best
    eps = config.POST_ROUND_NEUTRAL_EPSILON
    if best.value > eps:
        return "best_positive_penalties" if best.name == SGComponent.PENALTIES else "best_positive"
    if best.value >= -eps:
        return "best_neutral"
    return "best_negative"


def _insight1_slot(round_: RoundRecord, selection: MeasuredSelection) -> InsightSlot:
    total = round_.sg_total
    best = selection.best.value if selection.best else None
    hot = (total is not None and total > FIRE_THRESHOLD) or (best is not None and best > FIRE_THRESHOLD)
    if hot and not (total is not None and total <= -FIRE_THRESHOLD):
        return InsightSlot(emoji=Emoji.FIRE, level=MessageLevel.GREAT, max_sentences=MAX_SENTENCES["insight1"])
    return InsightSlot(emoji=Emoji.SUCCESS, level=MessageLevel.SUCCESS, max_sentences=MAX_SENTENCES["insight1"])


def _opportunity(round_: RoundRecord, selection: MeasuredSelection, avg_score_recent: Optional[float]):
    """(outcome, focus) for message 2."""
    focus = FocusPlan(best_name=selection.best.name if selection.best else None)
    if selection.count == 0:
        return _score_only_outcome(round_, avg_score_recent), focus
    if selection.count == 1:
        return "single", focus

    residual = round_.sg_residual
    if selection.residual_dominant and residual is not None and residual < 0:
        focus.opportunity_name = SGComponent.SHORT_GAME
        focus.short_game_inferred = True
        focus.opportunity_is_weak = True
        focus.opportunity_impact_strokes_rounded = _whole(residual)
        return "short_game_inferred", focus

    opportunity = selection.opportunity
    focus.opportunity_name = opportunity.name
    eps = config.POST_ROUND_NEUTRAL_EPSILON
    if opportunity.value <= WEAKNESS_THRESHOLD:
        focus.opportunity_is_weak = True
        focus.opportunity_impact_strokes_rounded = _whole(opportunity.value)
        return ("leak_penalties" if opportunity.name == SGComponent.PENALTIES else "leak"), focus
    if opportunity.value < -eps:
        return "trailing", focus
    if opportunity.value <= eps:
        return "neutral", focus
    return "positive", focus


def build_post_round_plan(
    round_: RoundRecord,
    avg_score_recent: Optional[float] = None,
    *,
    seed: str = "",
    offset: int = 0,
) -> PostRoundPlan:
    """Decide slots, outcomes, focus and action for a round.

    The drill pick depends on the seed and offset, so a regenerated variant
    needs a freshly built plan.
    """
    selection = select_measured_components(round_)
    present = PresentStats(**round_.present_stats())

    outcome1 = _insight1_outcome(selection)
    outcome2, focus = _opportunity(round_, selection, avg_score_recent)

    missing = missing_stat_keys(present.missing())
    drill = None
    if focus.opportunity_name is not None:
        drill = pick_drill(focus.opportunity_name, f"{seed}|drill", offset)

    if missing:
        action = ActionPlan(type=ActionType.TRACK, stat=STAT_LABELS[missing[0]], drill=drill if len(missing) == 1 else None)
        outcome3 = "track_many" if len(missing) >= 2 else "track_one"
    elif drill is not None:
        action = ActionPlan(type=ActionType.DRILL, drill=drill)
        outcome3 = "drill"
    else:
        action = ActionPlan(type=ActionType.GENERAL)
        outcome3 = "general"

    warn = focus.opportunity_is_weak or outcome2 == "score_only_worse"
    insights = {
        "insight1": _insight1_slot(round_, selection),
        "insight2": InsightSlot(
            emoji=Emoji.WARNING if warn else Emoji.SUCCESS,
            level=MessageLevel.WARNING if warn else MessageLevel.SUCCESS,
            max_sentences=MAX_SENTENCES["insight2"],
        ),
        "insight3": InsightSlot(emoji=Emoji.INFO, level=MessageLevel.INFO, max_sentences=MAX_SENTENCES["insight3"]),
    }
    return PostRoundPlan(
        insights=insights,
        outcomes={"insight1": outcome1, "insight2": outcome2, "insight3": outcome3},
        action=action,
        focus=focus,
        present=present,
    )


# ================================================================
# Rendering
# ================================================================

def _pick(pool: List[str], seed: str, key: str, outcome: str, offset: int, fixed_index: Optional[int]):
    return pick_variant(pool, seed, f"{key}|{outcome}", offset, fixed_index)


def _label_values(label: str, n: int, evidence: str = "") -> Dict[str, object]:
    return {
        "label": label,
        "label_lower": label.lower(),
        "n": n,
        "strokes": _strokes(n),
        "evidence": evidence,
    }


def _render_insight1(round_, plan, selection, seed, offset, fixed_index, avg_score_recent):
    outcome = plan.outcomes["insight1"]
    template, index = _pick(POST_ROUND_INSIGHT1[outcome], seed, "insight1", outcome, offset, fixed_index)
    if selection.best is None:
        body = render(template)
    else:
        best = selection.best
        body = render(template, **_label_values(best.label, _whole(best.value), _evidence(round_, best.name)))
    return clean_text(f"{score_sentence(round_, avg_score_recent)} {body}"), index


def _render_insight2(round_, plan, selection, seed, offset, fixed_index, avg_score_recent):
    outcome = plan.outcomes["insight2"]
    template, index = _pick(POST_ROUND_INSIGHT2[outcome], seed, "insight2", outcome, offset, fixed_index)

    if outcome in SCORE_ONLY_OUTCOMES:
        n = 0
        if avg_score_recent is not None:
            n = int(round_to(abs(round_.score - avg_score_recent), 0))
        return render(template, n=n, strokes=_strokes(n)), index
    if outcome == "single":
        return render(template), index

    focus = plan.focus
    if outcome == "short_game_inferred":
        n = focus.opportunity_impact_strokes_rounded
        return render(template, **_label_values(AREA_LABELS[SGComponent.SHORT_GAME], n)), index

    opportunity = selection.opportunity
    n = focus.opportunity_impact_strokes_rounded or _whole(opportunity.value)
    evidence = _evidence(round_, opportunity.name) if focus.opportunity_is_weak else ""
    text = render(template, **_label_values(opportunity.label, n, evidence))

    residual = round_.sg_residual
    if selection.count >= 2 and residual is not None and abs(residual) >= RESIDUAL_SUFFIX_THRESHOLD:
        sign = "positive" if residual > 0 else "negative"
        suffix, _ = _pick(RESIDUAL_SUFFIX[sign], seed, "insight2", f"residual_{sign}", offset, fixed_index)
        text = clean_text(f"{text} {render(suffix, n=_whole(residual))}")
    return text, index


def _render_insight3(plan, seed, offset, fixed_index):
    outcome = plan.outcomes["insight3"]
    action = plan.action

    if action.type == ActionType.TRACK:
        stats = format_stat_list(missing_stat_keys(plan.present.missing()))
        clause, index = _pick(TRACK_CLAUSES, seed, "insight3", outcome, offset, fixed_index)
        if action.drill is not None:
            follow = f"{action.drill.action} Goal: {action.drill.goal}"
        else:
            follow, _ = _pick(GENERAL_ACTIONS, seed, "insight3", "general_action", offset, fixed_index)
        return clean_text(f"{render(clause, stats=stats)} {follow}"), index

    if action.type == ActionType.DRILL:
        template, index = _pick(DRILL_MESSAGES, seed, "insight3", outcome, offset, fixed_index)
        drill = action.drill
        return render(template, action=drill.action, benefit=DRILL_BENEFITS[drill.area], goal=drill.goal), index

    general, index = _pick(GENERAL_ACTIONS, seed, "insight3", outcome, offset, fixed_index)
    return clean_text(f"Next round: {general}"), index


def render_post_round_messages(
    round_: RoundRecord,
    plan: PostRoundPlan,
    *,
    seed: str,
    offset: int = 0,
    fixed_index: Optional[int] = None,
    avg_score_recent: Optional[float] = None,
) -> List[PostRoundMessage]:
    selection = select_measured_components(round_)
    rendered = {
        "insight1": _render_insight1(round_, plan, selection, seed, offset, fixed_index, avg_score_recent),
        "insight2": _render_insight2(round_, plan, selection, seed, offset, fixed_index, avg_score_recent),
        "insight3": _render_insight3(plan, seed, offset, fixed_index),
    }

    messages = []
    for key in INSIGHT_KEYS:
        text, index = rendered[key]
        slot = plan.insights[key]
        messages.append(PostRoundMessage(
            key=key,
            emoji=slot.emoji,
            level=slot.level,
            text=text,
            outcome=plan.outcomes.get(key),
            variant_index=index,
        ))
    return messages


# ================================================================
# Fallback
# ================================================================

def build_fallback_plan(plan: PostRoundPlan) -> PostRoundPlan:
    """Same slots with every claim about areas removed."""
    return plan.model_copy(update={
        "outcomes": {key: "fallback" for key in INSIGHT_KEYS},
        "focus": FocusPlan(),
        "action": ActionPlan(type=ActionType.GENERAL),
    })


def render_fallback_messages(
    round_: RoundRecord,
    plan: PostRoundPlan,
    avg_score_recent: Optional[float] = None,
) -> List[PostRoundMessage]:
    texts = {
        "insight1": POST_ROUND_FALLBACK["insight1"].format(score_sentence=score_sentence(round_, avg_score_recent)),
        "insight2": POST_ROUND_FALLBACK["insight2"],
        "insight3": POST_ROUND_FALLBACK["insight3"],
    }
    return [
        PostRoundMessage(
            key=key,
            emoji=plan.insights[key].emoji,
            level=plan.insights[key].level,
            text=clean_text(texts[key]),
            outcome="fallback",
        )
        for key in INSIGHT_KEYS
    ]
