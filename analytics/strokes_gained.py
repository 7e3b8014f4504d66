"""Strokes-gained attribution of one round against a skill-adjusted expectation.

The expectation comes from the handicap-tier baseline at the round's
handicap, shifted for course difficulty and scaled to the holes played.
Positive values mean better than expected.
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence

from models.baseline import ExpectedRound, HandicapTierBaseline
from models.round_record import ConfidenceLevel, RoundRecord
from models.strokes_gained import StrokesGainedResult
from models.tee import TeeContext

from . import coefficients as c
from .baselines import interpolate_baseline
from .stats import clamp, round2
from .tee_context import context_from_round_fields

logger = logging.getLogger(__name__)


def expected_round(
    baseline: HandicapTierBaseline, context: TeeContext, handicap: float
) -> ExpectedRound:
    """Expected stats for the holes in context, full precision."""
    rating_delta = context.normalized_rating() - c.NEUTRAL_COURSE_RATING
    # Slope matters more the higher the handicap
    slope_delta = handicap * (context.slope_rating / c.NEUTRAL_SLOPE - 1)
    difficulty = slope_delta + rating_delta
    scale = context.holes_played / 18

    fir_pct = clamp(
        baseline.fir_pct - rating_delta * c.RATING_TO_FIR_PCT - slope_delta * c.SLOPE_TO_FIR_PCT,
        0, 100,
    )
    gir_pct = clamp(
        baseline.gir_pct - rating_delta * c.RATING_TO_GIR_PCT - slope_delta * c.SLOPE_TO_GIR_PCT,
        0, 100,
    )
    return ExpectedRound(
        score=(baseline.score + difficulty) * scale,
        fir_pct=fir_pct,
        gir_pct=gir_pct,
        fairways=fir_pct / 100 * context.non_par3_holes,
        greens=gir_pct / 100 * context.holes_played,
        putts=(baseline.putts + difficulty * c.COURSE_DIFF_TO_PUTTS) * scale,
        penalties=(baseline.penalties + difficulty * c.COURSE_DIFF_TO_PENALTIES) * scale,
    )


def _soft_cap_putting(value: float, cap: float) -> float:
    """Keep half of anything beyond +/- cap."""
    magnitude = abs(value)
    if magnitude <= cap:
        return value
    return math.copysign(cap + (magnitude - cap) * c.PUTTING_EXCESS_WEIGHT, value)


def _confidence(
    residual: float,
    putting: Optional[float],
    greens_hit: Optional[int],
    putts: Optional[int],
    penalties: Optional[int],
    holes: int,
    putting_cap: float,
):
    """Confidence tier plus explanatory messages."""
    if greens_hit is None or putts is None or penalties is None:
        missing = [
            name for name, value in (("GIR", greens_hit), ("putts", putts), ("penalties", penalties))
            if value is None
        ]
        return ConfidenceLevel.LOW, [
            f"Low confidence: {', '.join(missing)} not recorded, so the breakdown is incomplete"
        ]

    short_game_opps = holes - greens_hit
    opp_share = short_game_opps / holes
    putting_abs = abs(putting or 0.0)

    residual_ok = abs(residual) < c.CONFIDENCE_RESIDUAL_HIGH
    short_game_high = opp_share >= c.CONFIDENCE_SHORTGAME_HIGH_PCT
    short_game_medium = (
        c.CONFIDENCE_SHORTGAME_MEDIUM_MIN_PCT <= opp_share <= c.CONFIDENCE_SHORTGAME_MEDIUM_MAX_PCT
    )
    putting_high = putting_abs <= c.CONFIDENCE_PUTTING_HIGH_PCT * putting_cap
    putting_medium = not putting_high and putting_abs <= putting_cap

    if residual_ok and short_game_high and putting_high:
        return ConfidenceLevel.HIGH, []

    if residual_ok or short_game_medium or putting_medium:
        messages = []
        if not residual_ok:
            messages.append(
                f"Unexplained strokes ({residual:+.2f}) are large relative to the tracked stats"
            )
        if not short_game_high:
            messages.append(
                f"Only {short_game_opps} short-game opportunities ({opp_share:.0%} of holes) limit the read"
            )
        if not putting_high:
            if (putting or 0.0) > 0:
                messages.append(
                    f"Strong putting performance ({putting:+.2f}) may inflate the breakdown"
                )
            else:
                messages.append(
                    f"Poor putting performance ({putting:.2f}) likely contributed to the score"
                )
        return ConfidenceLevel.MEDIUM, messages

    return ConfidenceLevel.LOW, [
        f"Low confidence: residual {residual:.2f}, putting {(putting or 0.0):.2f}, "
        f"short-game opportunities {short_game_opps}"
    ]


def calculate_strokes_gained(
    round_: RoundRecord,
    context: TeeContext,
    baselines: Sequence[HandicapTierBaseline],
    handicap: Optional[float] = None,
) -> StrokesGainedResult:
    """Attribute a round's strokes gained to off-tee, approach, putting, penalties and residual.

    Missing handicap or fewer than 9 holes return an empty result; an empty
    baseline table raises BaselineConfigurationError.
    """
    if handicap is None:
        handicap = round_.handicap_at_round
    if handicap is None:
        return StrokesGainedResult(partial_analysis=True)

    holes = context.holes_played
    if holes < c.MIN_HOLES_FOR_MODEL:
        return StrokesGainedResult(
            confidence=ConfidenceLevel.LOW,
            partial_analysis=True,
            messages=[f"Strokes gained needs at least {c.MIN_HOLES_FOR_MODEL} holes, got {holes}"],
        )

    baseline = interpolate_baseline(baselines, handicap)
    expected = expected_round(baseline, context, handicap)
    messages: List[str] = []

    total = expected.score - round_.score

    off_tee = None
    if round_.fir_hit is not None:
        off_tee = (round_.fir_hit - expected.fairways) * c.STROKES_PER_FIR

    approach = None
    if round_.gir_hit is not None:
        approach = (round_.gir_hit - expected.greens) * c.effective_gir_coefficient(handicap)

    putting_cap = holes / 18 * c.PUTTING_CAP
    putting = None
    if round_.putts is not None:
        raw_putting = (expected.putts - round_.putts) * c.STROKES_PER_PUTT
        putting = _soft_cap_putting(raw_putting, putting_cap)
        if putting != raw_putting:
            messages.append(f"Extreme putting (capped at ±{putting_cap:.1f} strokes)")

    penalties = None
    if round_.penalties is not None:
        penalties = (expected.penalties - round_.penalties) * c.STROKES_PER_PENALTY

    known = [v for v in (off_tee, approach, putting, penalties) if v is not None]
    residual = total - sum(known)

    confidence, confidence_messages = _confidence(
        residual, putting, round_.gir_hit, round_.putts, round_.penalties, holes, putting_cap
    )
    messages.extend(confidence_messages)

    partial = any(
        v is None for v in (round_.fir_hit, round_.gir_hit, round_.putts, round_.penalties)
    )

    # Residual is taken from the rounded parts so the five components sum to the total
    total_out = round2(total)
    parts_out = [round2(v) for v in (off_tee, approach, putting, penalties)]
    residual_out = round2(total_out - sum(v for v in parts_out if v is not None))

    logger.debug(
        "SG round=%s hcp=%s total=%.2f off_tee=%s approach=%s putting=%s penalties=%s residual=%.2f",
        round_.id, handicap, total, *parts_out, residual,
    )

    return StrokesGainedResult(
        total=total_out,
        off_tee=parts_out[0],
        approach=parts_out[1],
        putting=parts_out[2],
        penalties=parts_out[3],
        residual=residual_out,
        confidence=confidence,
        partial_analysis=partial,
        messages=messages,
        expected=ExpectedRound(
            score=round2(expected.score),
            fir_pct=round2(expected.fir_pct),
            gir_pct=round2(expected.gir_pct),
            fairways=round2(expected.fairways),
            greens=round2(expected.greens),
            putts=round2(expected.putts),
            penalties=round2(expected.penalties),
        ),
    )


def strokes_gained_for_round(
    round_: RoundRecord,
    baselines: Sequence[HandicapTierBaseline],
    context: Optional[TeeContext] = None,
) -> StrokesGainedResult:
    """Strokes gained using the tee fields stored on the round when no context is given."""
    if context is None:
        context = context_from_round_fields(
            round_.holes,
            round_.non_par3_holes,
            round_.course_rating,
            round_.slope_rating,
            round_.par,
        )
    return calculate_strokes_gained(round_, context, baselines)


def apply_strokes_gained(round_: RoundRecord, result: StrokesGainedResult) -> RoundRecord:
    """Copy of the round carrying the (re)computed breakdown."""
    if round_.handicap_at_round is None:
        result = StrokesGainedResult(partial_analysis=True)
    return round_.model_copy(
        update={
            "sg_total": result.total,
            "sg_off_tee": result.off_tee,
            "sg_approach": result.approach,
            "sg_putting": result.putting,
            "sg_penalties": result.penalties,
            "sg_residual": result.residual,
            "sg_confidence": result.confidence,
            "sg_partial_analysis": result.partial_analysis,
        }
    )
