"""Resolve the playing context (holes, rating, slope, par) for a tee segment."""

from __future__ import annotations

import logging
from typing import List, Optional, Union

from models.hole import Hole
from models.tee import TeeContext, TeeDefinition, TeeSegment

from .coefficients import NEUTRAL_COURSE_RATING, NEUTRAL_SLOPE
from .exceptions import TeeContextError

logger = logging.getLogger(__name__)

DEFAULT_PAR_18 = 72
DEFAULT_PAR_9 = 36
DEFAULT_NON_PAR3_18 = 14
DEFAULT_NON_PAR3_9 = 7


def _parse_segment(segment: Union[TeeSegment, str, None]) -> TeeSegment:
    if segment is None:
        return TeeSegment.FULL
    try:
        return TeeSegment(segment)
    except ValueError:
        raise TeeContextError(f"Invalid tee segment: {segment!r}") from None


def _par_total(holes: List[Hole]) -> Optional[int]:
    if not holes or any(h.par is None for h in holes):
        return None
    return sum(h.par for h in holes)


def _non_par3_count(holes: List[Hole], default: int) -> int:
    if not holes or any(h.par is None for h in holes):
        return default
    return sum(1 for h in holes if not h.is_par3)


def _resolve_full(tee: TeeDefinition) -> TeeContext:
    holes_played = tee.number_of_holes or 18
    holes = tee.sorted_holes()
    is_nine = holes_played == 9
    par = _par_total(holes) or tee.par_total or (DEFAULT_PAR_9 if is_nine else DEFAULT_PAR_18)
    default_rating = NEUTRAL_COURSE_RATING / 2 if is_nine else NEUTRAL_COURSE_RATING
    return TeeContext(
        segment=TeeSegment.FULL,
        holes_played=holes_played,
        course_rating=tee.course_rating if tee.course_rating is not None else default_rating,
        slope_rating=tee.slope_rating or NEUTRAL_SLOPE,
        par_total=par,
        non_par3_holes=_non_par3_count(holes, DEFAULT_NON_PAR3_9 if is_nine else DEFAULT_NON_PAR3_18),
        holes=holes,
        bogey_rating=tee.bogey_rating,
    )


def _resolve_side(tee: TeeDefinition, segment: TeeSegment) -> TeeContext:
    front = segment == TeeSegment.FRONT9
    rating = tee.front_course_rating if front else tee.back_course_rating
    slope = tee.front_slope_rating if front else tee.back_slope_rating
    if tee.number_of_holes != 18 or rating is None or slope is None:
        raise TeeContextError(
            f"{segment.value} segment requires an 18-hole tee with "
            f"{'front' if front else 'back'} nine rating and slope"
        )
    holes = tee.holes_in_range(1, 9) if front else tee.holes_in_range(10, 18)
    return TeeContext(
        segment=segment,
        holes_played=9,
        course_rating=rating,
        slope_rating=slope,
        par_total=_par_total(holes) or DEFAULT_PAR_9,
        non_par3_holes=_non_par3_count(holes, DEFAULT_NON_PAR3_9),
        holes=holes,
    )


def _resolve_double(tee: TeeDefinition) -> TeeContext:
    if tee.number_of_holes != 9:
        raise TeeContextError("double9 segment requires a 9-hole tee")
    holes = tee.sorted_holes()
    rating = tee.course_rating if tee.course_rating is not None else NEUTRAL_COURSE_RATING / 2
    par = _par_total(holes) or tee.par_total or DEFAULT_PAR_9
    return TeeContext(
        segment=TeeSegment.DOUBLE9,
        holes_played=18,
        course_rating=rating * 2,
        slope_rating=tee.slope_rating or NEUTRAL_SLOPE,
        par_total=par * 2,
        non_par3_holes=_non_par3_count(holes, DEFAULT_NON_PAR3_9) * 2,
        holes=holes + holes,
        bogey_rating=tee.bogey_rating * 2 if tee.bogey_rating is not None else None,
    )


def resolve_tee_context(
    tee: TeeDefinition, segment: Union[TeeSegment, str, None] = TeeSegment.FULL
) -> TeeContext:
    """Playing context for the part of the tee that was played."""
    segment = _parse_segment(segment)
    if segment == TeeSegment.FULL:
        return _resolve_full(tee)
    if segment in (TeeSegment.FRONT9, TeeSegment.BACK9):
        return _resolve_side(tee, segment)
    return _resolve_double(tee)


def get_valid_tee_segments(tee: TeeDefinition) -> List[TeeSegment]:
    """Segments that resolve_tee_context accepts for this tee."""
    if tee.number_of_holes == 9:
        return [TeeSegment.FULL, TeeSegment.DOUBLE9]
    segments = [TeeSegment.FULL]
    if tee.front_course_rating is not None and tee.front_slope_rating is not None:
        segments.append(TeeSegment.FRONT9)
    if tee.back_course_rating is not None and tee.back_slope_rating is not None:
        segments.append(TeeSegment.BACK9)
    return segments


def holes_played_for_segment(segment: Union[TeeSegment, str]) -> int:
    """Holes played for a partial/doubled segment; full depends on the tee."""
    segment = _parse_segment(segment)
    if segment in (TeeSegment.FRONT9, TeeSegment.BACK9):
        return 9
    if segment == TeeSegment.DOUBLE9:
        return 18
    raise TeeContextError("full segment hole count depends on the tee")


def context_from_round_fields(
    holes: int,
    non_par3_holes: int,
    course_rating: Optional[float],
    slope_rating: Optional[float],
    par: Optional[int],
) -> TeeContext:
    """Context from the denormalized tee fields stored on a round."""
    scale = holes / 18
    return TeeContext(
        holes_played=holes,
        course_rating=course_rating if course_rating is not None else NEUTRAL_COURSE_RATING * scale,
        slope_rating=slope_rating or NEUTRAL_SLOPE,
        par_total=par if par is not None else round(DEFAULT_PAR_18 * scale),
        non_par3_holes=non_par3_holes,
    )


def context_for_stored_round(
    tee: TeeDefinition,
    segment: Union[TeeSegment, str, None],
    holes_played: Optional[int] = None,
    non_par3_holes: Optional[int] = None,
) -> TeeContext:
    """Context for a persisted round: its tee resolved by segment.

    When the tee cannot support the segment (missing side ratings, a bad
    segment value) or the segment disagrees with the holes recorded on the
    round, the tee's own ratings are scaled to the holes played.
    """
    try:
        context = resolve_tee_context(tee, segment)
        if holes_played is None or context.holes_played == holes_played:
            if non_par3_holes is not None:
                context = context.model_copy(update={"non_par3_holes": non_par3_holes})
            return context
        reason = f"{context.segment.value} covers {context.holes_played} holes, round has {holes_played}"
    except TeeContextError as e:
        reason = str(e)

    holes_count = holes_played or tee.number_of_holes
    scale = holes_count / tee.number_of_holes
    logger.warning("Scaling tee ratings to %d holes: %s", holes_count, reason)

    if segment == TeeSegment.FRONT9:
        holes = tee.holes_in_range(1, 9)
    elif segment == TeeSegment.BACK9:
        holes = tee.holes_in_range(10, 18)
    elif holes_count == tee.number_of_holes:
        holes = tee.sorted_holes()
    else:
        holes = []
    par = _par_total(holes)
    if par is None and tee.par_total:
        par = round(tee.par_total * scale)
    if non_par3_holes is None:
        non_par3_holes = _non_par3_count(holes, round(DEFAULT_NON_PAR3_18 * holes_count / 18))

    return context_from_round_fields(
        holes_count,
        non_par3_holes,
        tee.course_rating * scale if tee.course_rating is not None else None,
        tee.slope_rating,
        par,
    )
