"""Conversion between asyncpg database rows and Pydantic domain models.

Centralizes all mapping logic between the normalized DB schema and the
analytics models. NUMERIC columns arrive as Decimal and are turned into
floats here.
"""

import json
from datetime import date, datetime, time, timezone
from typing import Any, Dict, Optional, Tuple

from pydantic import ValidationError

from analytics.tee_context import context_for_stored_round
from models import (
    ConfidenceLevel,
    HandicapTierBaseline,
    Hole,
    PlayerProfile,
    RoundRecord,
    StrokesGainedResult,
    TeeDefinition,
    TeeSegment,
)
from database.exceptions import RowMappingError


def _float(value) -> Optional[float]:
    return float(value) if value is not None else None


def _int(value) -> Optional[int]:
    return int(value) if value is not None else None


def _datetime(value) -> datetime:
    """DATE columns become midnight UTC; TIMESTAMPTZ passes through."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    raise RowMappingError(f"Expected a date, got {value!r}")


# ================================================================
# Row -> Model (reads)
# ================================================================

def round_record_from_row(row, tee: Optional[TeeDefinition] = None) -> RoundRecord:
    """users.rounds row (+ the tee it was played from) -> RoundRecord.

    Played ratings stored on the round win. Otherwise the tee is resolved for
    the round's segment, so a front or back nine is rated as nine holes.
    """
    holes = row["holes_played"]
    non_par3 = row["non_par3_holes"]
    rating = _float(row["course_rating"])
    slope = _float(row["slope_rating"])
    par = _int(row["par"])
    confidence = row["sg_confidence"]
    try:
        if tee is not None and rating is None:
            context = context_for_stored_round(tee, row["tee_segment"], holes, non_par3)
            holes, non_par3 = context.holes_played, context.non_par3_holes
            rating, slope = context.course_rating, context.slope_rating
            if par is None:
                par = context.par_total
        holes = holes or 18
        return RoundRecord(
            id=str(row["id"]),
            date=_datetime(row["round_date"]),
            holes=holes,
            non_par3_holes=non_par3 if non_par3 is not None else (14 if holes == 18 else 7),
            score=row["total_score"],
            to_par=_int(row["to_par"]),
            fir_hit=_int(row["fir_hit"]),
            fir_possible=_int(row["fir_possible"]),
            gir_hit=_int(row["gir_hit"]),
            putts=_int(row["putts"]),
            penalties=_int(row["penalties"]),
            handicap_at_round=_float(row["handicap_at_round"]),
            course_rating=rating,
            slope_rating=slope,
            par=par,
            tee_segment=TeeSegment(row["tee_segment"] or TeeSegment.FULL.value),
            sg_total=_float(row["sg_total"]),
            sg_off_tee=_float(row["sg_off_tee"]),
            sg_approach=_float(row["sg_approach"]),
            sg_putting=_float(row["sg_putting"]),
            sg_penalties=_float(row["sg_penalties"]),
            sg_residual=_float(row["sg_residual"]),
            sg_confidence=ConfidenceLevel(confidence) if confidence else None,
            sg_partial_analysis=row["sg_partial_analysis"],
        )
    except (ValidationError, ValueError) as e:
        raise RowMappingError(f"Round {row['id']} cannot be mapped: {e}") from e


def tee_definition_from_rows(tee_row, hole_rows: list) -> TeeDefinition:
    """courses.tees row + its course's courses.holes rows -> TeeDefinition."""
    number_of_holes = tee_row["number_of_holes"] or 18
    try:
        return TeeDefinition(
            id=str(tee_row["id"]),
            number_of_holes=number_of_holes,
            course_rating=_float(tee_row["course_rating"]),
            slope_rating=_float(tee_row["slope_rating"]),
            par_total=_int(tee_row["par_total"]),
            front_course_rating=_float(tee_row["front_course_rating"]),
            front_slope_rating=_float(tee_row["front_slope_rating"]),
            back_course_rating=_float(tee_row["back_course_rating"]),
            back_slope_rating=_float(tee_row["back_slope_rating"]),
            holes=[
                Hole(number=h["hole_number"], par=h["par"], handicap=h["handicap"])
                for h in hole_rows
                if h["hole_number"] <= number_of_holes
            ],
        )
    except (ValidationError, ValueError) as e:
        raise RowMappingError(f"Tee {tee_row['id']} cannot be mapped: {e}") from e


def baseline_from_row(row) -> HandicapTierBaseline:
    """analytics.handicap_baselines row -> HandicapTierBaseline."""
    return HandicapTierBaseline(
        handicap=float(row["handicap"]),
        score=float(row["score"]),
        fir_pct=float(row["fir_pct"]),
        gir_pct=float(row["gir_pct"]),
        putts=float(row["putts"]),
        penalties=float(row["penalties"]),
    )


def player_profile_from_row(row) -> PlayerProfile:
    """users.users row -> PlayerProfile."""
    return PlayerProfile(
        id=str(row["id"]),
        name=row["name"],
        handicap_index=_float(row["handicap_index"]),
        is_premium=bool(row["is_premium"]),
        created_at=row["created_at"],
    )


def cached_insights_from_row(row) -> Dict[str, Any]:
    """users.overall_insights row -> cache entry dict (payload decoded from JSONB)."""
    payload = row["payload"]
    if isinstance(payload, str):
        payload = json.loads(payload)
    return {
        "payload": payload or {},
        "data_hash": row["data_hash"],
        "variant_offset": row["variant_offset"] or 0,
        "generated_at": row["generated_at"],
    }


# ================================================================
# Model -> Row (writes)
# ================================================================

def strokes_gained_to_row(result: StrokesGainedResult) -> Tuple:
    """StrokesGainedResult -> values for the users.rounds sg_* UPDATE."""
    return (
        result.total,
        result.off_tee,
        result.approach,
        result.putting,
        result.penalties,
        result.residual,
        result.confidence.value if result.confidence else None,
        result.partial_analysis,
    )


def baseline_to_row(baseline: HandicapTierBaseline) -> Tuple:
    """HandicapTierBaseline -> tuple for analytics.handicap_baselines INSERT (executemany)."""
    return (
        baseline.handicap,
        baseline.score,
        baseline.fir_pct,
        baseline.gir_pct,
        baseline.putts,
        baseline.penalties,
    )
