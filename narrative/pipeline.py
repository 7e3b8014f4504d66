"""Facts to validated copy: render, check with the guard, rotate, fall back."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from analytics import config
from analytics.exceptions import CopyGuardViolation
from analytics.overall import compute_data_hash, compute_overall_summaries, sort_newest_first
from analytics.stats import average, to_count
from models.insights import OverallInsightsSummary
from models.narrative import NarrativeCard, PostRoundMessage
from models.round_record import RoundRecord

from .guard import validate_overall_cards, validate_post_round_messages
from .overall_cards import (
    build_fallback_cards,
    build_overall_card_plan,
    build_overall_cards,
    card_seed_base,
)
from .post_round import (
    build_fallback_plan,
    build_post_round_plan,
    render_fallback_messages,
    render_post_round_messages,
)

logger = logging.getLogger(__name__)


def _attempts() -> int:
    return max(1, config.GUARD_MAX_ATTEMPTS)


def recent_average_score(round_: RoundRecord, history: Sequence[RoundRecord]) -> Optional[float]:
    """Average of the player's other recent rounds with the same hole count."""
    others = [
        r for r in history
        if r.holes == round_.holes and (round_.id is None or r.id != round_.id) and r.date <= round_.date
    ]
    recent = sort_newest_first(others)[: config.RECENT_WINDOW]
    return average(r.score for r in recent)


# ================================================================
# Post-round
# ================================================================

def generate_post_round_insights(
    round_: RoundRecord,
    *,
    history: Sequence[RoundRecord] = (),
    user_id: str = "",
    variant_offset: Any = 0,
    strict: bool = False,
) -> List[PostRoundMessage]:
    """Three guarded messages for a round; safe copy when no variant passes."""
    offset = to_count(variant_offset)
    avg_recent = recent_average_score(round_, history)
    round_count = max(len(history), 1)
    seed = f"{user_id}|{compute_data_hash([round_], False)}|{round_count}"

    plan = None
    for attempt in range(_attempts()):
        current = offset + attempt
        plan = build_post_round_plan(round_, avg_recent, seed=seed, offset=current)
        messages = render_post_round_messages(
            round_, plan, seed=seed, offset=current, avg_score_recent=avg_recent
        )
        result = validate_post_round_messages(plan, messages)
        if result.ok:
            if attempt:
                logger.info("Post-round copy for round %s passed at offset %d", round_.id, current)
            return messages
        logger.warning(
            "Post-round copy rejected for round %s at offset %d: %s", round_.id, current, result.reason
        )

    fallback_plan = build_fallback_plan(plan)
    messages = render_fallback_messages(round_, fallback_plan, avg_recent)
    result = validate_post_round_messages(fallback_plan, messages)
    if not result.ok:
        logger.warning("Post-round fallback rejected for round %s: %s", round_.id, result.reason)
        if strict:
            raise CopyGuardViolation(f"Post-round copy for round {round_.id} failed validation")
    return messages


# ================================================================
# Overall cards
# ================================================================

def generate_overall_cards(
    summary: OverallInsightsSummary,
    *,
    user_id: str = "",
    variant_offset: Any = 0,
    strict: bool = False,
) -> List[NarrativeCard]:
    offset = to_count(variant_offset)
    seed_base = card_seed_base(user_id, summary)

    plan = None
    for attempt in range(_attempts()):
        current = offset + attempt
        plan = build_overall_card_plan(summary, seed_base, current)
        cards = build_overall_cards(summary, plan, seed_base, current)
        result = validate_overall_cards(plan, cards)
        if result.ok:
            return cards
        logger.warning(
            "Overall cards rejected for mode %s at offset %d: %s", summary.mode.value, current, result.reason
        )

    cards = build_fallback_cards(plan)
    result = validate_overall_cards(plan, cards)
    if not result.ok:
        logger.warning("Overall card fallback rejected for mode %s: %s", summary.mode.value, result.reason)
        if strict:
            raise CopyGuardViolation(f"Overall cards for mode {summary.mode.value} failed validation")
    return cards


def _card_payload(cards: Sequence[NarrativeCard]) -> List[Dict[str, str]]:
    return [{"prefix": card.prefix, "text": card.text} for card in cards]


def build_overall_insights_payload(
    rounds: Sequence[RoundRecord],
    *,
    user_id: str,
    is_premium: bool,
    variant_offset: Any = 0,
    now: Optional[datetime] = None,
    current_handicap: Optional[float] = None,
) -> Dict[str, Any]:
    """JSON-ready overall insights: per-mode summaries plus the combined cards."""
    now = now or datetime.now(timezone.utc)
    offset = to_count(variant_offset)
    summaries = compute_overall_summaries(
        rounds, is_premium=is_premium, now=now, current_handicap=current_handicap
    )

    cards_by_mode = {
        mode.value: _card_payload(
            generate_overall_cards(summary, user_id=user_id, variant_offset=offset)
        )
        for mode, summary in summaries.items()
    }
    data_hash = next(iter(summaries.values())).data_hash
    return {
        "generated_at": now.isoformat(),
        "data_hash": data_hash,
        "variant_offset": offset,
        "is_premium": is_premium,
        "summaries": {mode.value: s.to_payload() for mode, s in summaries.items()},
        "cards_by_mode": cards_by_mode,
        "cards": cards_by_mode["combined"],
    }
