"""Round API endpoints."""

import logging
from fastapi import APIRouter, Depends, HTTPException

from analytics import strokes_gained_for_round
from database.repositories import BaselineRepositoryDB, RoundRepositoryDB
from api.dependencies import get_baselines, get_rounds
from api.schemas import StrokesGainedResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/{round_id}/strokes-gained", response_model=StrokesGainedResponse)
async def recompute_strokes_gained(
    round_id: str,
    rounds: RoundRepositoryDB = Depends(get_rounds),
    baselines: BaselineRepositoryDB = Depends(get_baselines),
):
    """Recompute a round's breakdown against the current baseline table and store it."""
    round_ = await rounds.get_round_record(round_id)
    if not round_:
        raise HTTPException(404, "Round not found")

    table = await baselines.get_baseline_table()
    result = strokes_gained_for_round(round_, table)
    await rounds.update_strokes_gained(round_id, result)
    logger.info("Recomputed strokes gained for round %s: total=%s", round_id, result.total)

    return StrokesGainedResponse(
        round_id=round_id,
        total=result.total,
        off_tee=result.off_tee,
        approach=result.approach,
        putting=result.putting,
        penalties=result.penalties,
        residual=result.residual,
        confidence=result.confidence.value if result.confidence else None,
        partial_analysis=result.partial_analysis,
        messages=result.messages,
    )
