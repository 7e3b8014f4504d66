"""Overall and post-round insight endpoints."""

import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, HTTPException
from typing import Any, Dict

from analytics import apply_strokes_gained, compute_data_hash, strokes_gained_for_round
from database.db_manager import DatabaseManager
from api.dependencies import get_db
from api.schemas import OverallInsightsResponse, PostRoundInsightsResponse, PostRoundMessageResponse
from narrative import (
    build_overall_insights_payload,
    generate_post_round_insights,
    resolve_variant_offset,
    should_refresh,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _overall_response(user_id: str, payload: Dict[str, Any], cached: bool) -> OverallInsightsResponse:
    return OverallInsightsResponse(
        user_id=user_id,
        generated_at=payload["generated_at"],
        data_hash=payload["data_hash"],
        variant_offset=payload.get("variant_offset", 0),
        is_premium=payload.get("is_premium", False),
        cached=cached,
        cards=payload.get("cards", []),
        cards_by_mode=payload.get("cards_by_mode", {}),
        summaries=payload.get("summaries", {}),
    )


async def _overall_insights(db: DatabaseManager, user_id: str, regenerate: bool) -> OverallInsightsResponse:
    profile = await db.users.get_player_profile(user_id)
    if not profile:
        raise HTTPException(404, "User not found")

    rounds = await db.rounds.get_round_records(user_id)
    cached = await db.insights.get_cached_overall(user_id)
    new_hash = compute_data_hash(rounds, profile.is_premium)

    if cached and not regenerate:
        if not should_refresh(cached["generated_at"], cached["data_hash"], new_hash):
            return _overall_response(user_id, cached["payload"], cached=True)

    offset = resolve_variant_offset(
        cached["variant_offset"] if cached else 0,
        force_regenerate=regenerate,
        bump_variant=regenerate,
    )
    now = datetime.now(timezone.utc)
    payload = build_overall_insights_payload(
        rounds,
        user_id=user_id,
        is_premium=profile.is_premium,
        variant_offset=offset,
        now=now,
        current_handicap=profile.handicap_index,
    )
    await db.insights.save_overall(user_id, payload, payload["data_hash"], offset, now)
    logger.info("Generated overall insights for user %s (offset=%d, rounds=%d)", user_id, offset, len(rounds))
    return _overall_response(user_id, payload, cached=False)


@router.get("/overall/{user_id}", response_model=OverallInsightsResponse)
async def get_overall_insights(user_id: str, db: DatabaseManager = Depends(get_db)):
    """Cached cards unless the round history changed in a new ISO week."""
    return await _overall_insights(db, user_id, regenerate=False)


@router.post("/overall/{user_id}/regenerate", response_model=OverallInsightsResponse)
async def regenerate_overall_insights(user_id: str, db: DatabaseManager = Depends(get_db)):
    """Re-render with the next wording variant; the facts stay the same."""
    return await _overall_insights(db, user_id, regenerate=True)


@router.get("/rounds/{round_id}", response_model=PostRoundInsightsResponse)
async def get_post_round_insights(round_id: str, db: DatabaseManager = Depends(get_db)):
    round_ = await db.rounds.get_round_record(round_id)
    if not round_:
        raise HTTPException(404, "Round not found")
    owner = await db.rounds.get_round_owner(round_id)
    history = await db.rounds.get_round_records(owner) if owner else []

    # Not yet persisted: compute for display only
    if round_.handicap_at_round is not None and not round_.has_strokes_gained():
        baselines = await db.baselines.get_baseline_table()
        round_ = apply_strokes_gained(round_, strokes_gained_for_round(round_, baselines))

    messages = generate_post_round_insights(round_, history=history, user_id=owner or "")
    return PostRoundInsightsResponse(
        round_id=round_id,
        messages=[
            PostRoundMessageResponse(key=m.key, emoji=m.emoji.value, level=m.level.value, text=m.text)
            for m in messages
        ],
    )
