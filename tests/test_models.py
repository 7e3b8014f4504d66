import pytest
from datetime import datetime
from pydantic import ValidationError

from models import (
    Drill,
    HandicapTierBaseline,
    Hole,
    PlayerProfile,
    PresentStats,
    RoundRecord,
    StrokesGainedResult,
    TeeContext,
    TeeDefinition,
)


# ================================================================
# Hole / Tee
# ================================================================

def test_hole_validation():
    h = Hole(number=1, par=3, handicap=18)
    assert h.is_par3

    with pytest.raises(ValidationError):
        Hole(number=1, par=7)          # par > 6

    with pytest.raises(ValidationError):
        Hole(number=19, par=4)         # hole > 18


def test_tee_definition_rejects_bad_layouts():
    with pytest.raises(ValidationError):
        TeeDefinition(number_of_holes=12)

    with pytest.raises(ValidationError):
        TeeDefinition(holes=[Hole(number=1, par=4), Hole(number=1, par=5)])

    with pytest.raises(ValidationError):
        TeeDefinition(number_of_holes=9, holes=[Hole(number=10, par=4)])


def test_neutral_context_scales_to_holes():
    full = TeeContext.neutral()
    assert full.course_rating == 72.0
    assert full.non_par3_holes == 14

    nine = TeeContext.neutral(9)
    assert nine.course_rating == 36.0
    assert nine.par_total == 36
    assert nine.non_par3_holes == 7
    assert nine.normalized_rating() == 72.0


# ================================================================
# RoundRecord
# ================================================================

def _round(**overrides):
    fields = {"date": datetime(2025, 5, 1), "score": 88}
    fields.update(overrides)
    return RoundRecord(**fields)


def test_round_requires_nine_or_eighteen_holes():
    assert _round(holes=9, non_par3_holes=7).holes == 9
    with pytest.raises(ValidationError):
        _round(holes=10)


def test_round_stat_bounds():
    with pytest.raises(ValidationError):
        _round(fir_hit=15)                        # more than 14 fairways available

    with pytest.raises(ValidationError):
        _round(holes=9, non_par3_holes=7, gir_hit=10)

    with pytest.raises(ValidationError):
        _round(putts=-1)

    # Explicit fairways possible overrides the non-par-3 count
    assert _round(fir_hit=15, fir_possible=16, non_par3_holes=14).fairways_possible() == 16


def test_strokes_gained_requires_handicap():
    with pytest.raises(ValidationError):
        _round(sg_total=-2.0)

    r = _round(handicap_at_round=12.4, sg_total=-2.0)
    assert r.has_strokes_gained()


def test_present_stats():
    r = _round(fir_hit=7, putts=33)
    assert r.present_stats() == {"fir": True, "gir": False, "putts": True, "penalties": False}


def test_update_field_reports_validation_error():
    r = _round()
    assert r.update_field("score", 91) is None
    assert r.score == 91

    error = r.update_field("holes", 12)
    assert error is not None
    assert r.holes == 18


def test_to_payload_is_json_safe():
    payload = _round(id="abc").to_payload()
    assert payload["id"] == "abc"
    assert isinstance(payload["date"], str)
    assert payload["tee_segment"] == "full"


# ================================================================
# Baselines / strokes gained / narrative models
# ================================================================

def test_baseline_bounds():
    with pytest.raises(ValidationError):
        HandicapTierBaseline(handicap=60, score=130, fir_pct=20, gir_pct=1, putts=44, penalties=11)

    with pytest.raises(ValidationError):
        HandicapTierBaseline(handicap=10, score=85, fir_pct=120, gir_pct=37, putts=35, penalties=2)


def test_strokes_gained_result_components():
    result = StrokesGainedResult(total=-1.0, off_tee=0.5, approach=-0.5, residual=-1.0)
    assert not result.is_empty()
    assert result.components()["putting"] is None
    assert StrokesGainedResult().is_empty()


def test_present_stats_helpers():
    assert PresentStats().score_only()
    present = PresentStats(fir=True, putts=True)
    assert not present.score_only()
    assert present.missing() == {"fir": False, "gir": True, "putts": False, "penalties": True}


def test_drill_text():
    drill = Drill(area="putting", action="Hit ten 3-foot putts.", goal="make 8 of 10.")
    assert drill.text == "Hit ten 3-foot putts. Goal: make 8 of 10."


def test_player_profile():
    profile = PlayerProfile(id="u1", handicap_index=14.2)
    assert not profile.is_premium

    with pytest.raises(ValidationError):
        PlayerProfile(id="u1", handicap_index=60)
