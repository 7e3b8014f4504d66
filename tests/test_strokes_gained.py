import pytest

from analytics import (
    BaselineConfigurationError,
    apply_strokes_gained,
    calculate_strokes_gained,
    resolve_tee_context,
    strokes_gained_for_round,
)
from analytics.strokes_gained import expected_round
from analytics.baselines import interpolate_baseline
from models import ConfidenceLevel, TeeContext, TeeDefinition
from factories import make_round


def _tracked(**overrides):
    """Helper: 18-hole round at handicap 10 with every stat recorded."""
    fields = {
        "score": 90,
        "handicap_at_round": 10.0,
        "fir_hit": 7,
        "gir_hit": 8,
        "putts": 34,
        "penalties": 2,
    }
    fields.update(overrides)
    return make_round(**fields)


def _sum_of_parts(result):
    return sum(v for v in result.components().values() if v is not None)


# ================================================================
# Expectation
# ================================================================

def test_expected_round_on_neutral_course(baselines):
    expected = expected_round(interpolate_baseline(baselines, 10.0), TeeContext.neutral(), 10.0)
    assert expected.score == pytest.approx(84.6)
    assert expected.fairways == pytest.approx(6.44)
    assert expected.greens == pytest.approx(6.66)
    assert expected.putts == pytest.approx(35.0)
    assert expected.penalties == pytest.approx(2.0)


def test_harder_course_raises_expectation(baselines):
    ctx = TeeContext(holes_played=18, course_rating=74.0, slope_rating=130, par_total=72, non_par3_holes=14)
    expected = expected_round(interpolate_baseline(baselines, 10.0), ctx, 10.0)
    # 2.0 rating + 10 * (130/113 - 1) slope
    assert expected.score == pytest.approx(88.1044, abs=1e-4)
    assert expected.gir_pct < 37


# ================================================================
# Breakdown
# ================================================================

def test_full_breakdown(baselines):
    result = strokes_gained_for_round(_tracked(), baselines)

    assert result.total == pytest.approx(-5.4)
    assert result.off_tee == pytest.approx(0.14)
    assert result.approach == pytest.approx(0.73)
    assert result.putting == pytest.approx(1.0)
    assert result.penalties == pytest.approx(0.0)
    assert result.residual == pytest.approx(-7.27)
    assert result.confidence == ConfidenceLevel.LOW
    assert result.partial_analysis is False
    assert result.expected.score == pytest.approx(84.6)


def test_components_sum_to_total(baselines):
    rounds = [
        _tracked(),
        _tracked(score=78, fir_hit=10, gir_hit=12, putts=30, penalties=0),
        _tracked(score=101, fir_hit=3, gir_hit=2, putts=38, penalties=5, handicap_at_round=22.3),
        _tracked(score=84, gir_hit=None, putts=None),
    ]
    for r in rounds:
        result = strokes_gained_for_round(r, baselines)
        assert _sum_of_parts(result) == pytest.approx(result.total, abs=0.011)


def test_high_confidence(baselines):
    result = strokes_gained_for_round(
        _tracked(score=85, fir_hit=6, gir_hit=7, putts=35, penalties=2), baselines
    )
    assert result.total == pytest.approx(-0.4)
    assert result.off_tee == pytest.approx(-0.11)
    assert result.approach == pytest.approx(0.19)
    assert result.putting == pytest.approx(0.0)
    assert result.residual == pytest.approx(-0.48)
    assert result.confidence == ConfidenceLevel.HIGH
    assert result.messages == []


def test_score_only_round(baselines):
    r = make_round(score=90, handicap_at_round=10.0)
    result = strokes_gained_for_round(r, baselines)

    assert result.total == pytest.approx(-5.4)
    assert result.residual == pytest.approx(-5.4)
    assert result.off_tee is None
    assert result.putting is None
    assert result.confidence == ConfidenceLevel.LOW
    assert result.partial_analysis is True
    assert "not recorded" in result.messages[0]


def test_nine_hole_round_scaled(baselines):
    r = make_round(holes=9, non_par3_holes=7, score=45, to_par=9, par=36, handicap_at_round=10.0)
    result = strokes_gained_for_round(r, baselines)
    assert result.total == pytest.approx(-2.7)


def test_putting_is_soft_capped(baselines):
    result = strokes_gained_for_round(_tracked(putts=20), baselines)
    # raw 15.0 -> 3.5 + 11.5 * 0.5
    assert result.putting == pytest.approx(9.25)
    assert any("Extreme putting" in m for m in result.messages)


def test_missing_handicap_returns_empty(baselines):
    result = strokes_gained_for_round(make_round(score=90, fir_hit=7), baselines)
    assert result.is_empty()
    assert result.partial_analysis is True
    assert result.confidence is None


def test_empty_baseline_table_raises():
    with pytest.raises(BaselineConfigurationError):
        strokes_gained_for_round(_tracked(), [])


def test_explicit_tee_context(baselines):
    tee = TeeDefinition(
        number_of_holes=18,
        course_rating=74.0,
        slope_rating=130,
        front_course_rating=37.0,
        front_slope_rating=130,
    )
    full = calculate_strokes_gained(_tracked(), resolve_tee_context(tee), baselines)
    assert full.total == pytest.approx(-1.9)

    front = calculate_strokes_gained(
        make_round(holes=9, non_par3_holes=7, score=45, handicap_at_round=10.0),
        resolve_tee_context(tee, "front9"),
        baselines,
    )
    assert front.total == pytest.approx(-0.95)


def test_recompute_is_idempotent(baselines):
    r = _tracked()
    first = strokes_gained_for_round(r, baselines)
    stored = apply_strokes_gained(r, first)
    second = strokes_gained_for_round(stored, baselines)

    assert first == second
    assert apply_strokes_gained(stored, second) == stored
    assert stored.sg_total == pytest.approx(-5.4)
    assert stored.sg_confidence == ConfidenceLevel.LOW
    assert stored.sg_partial_analysis is False
