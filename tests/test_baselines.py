import json
import os
import pytest

from analytics import (
    BaselineConfigurationError,
    build_baseline_table,
    interpolate_baseline,
    load_baseline_table,
)
from factories import BASELINE_ROWS

DATA_FILE = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "data", "handicap_baselines.json")


def test_table_is_sorted_by_handicap():
    table = build_baseline_table(list(reversed(BASELINE_ROWS)))
    assert [row.handicap for row in table] == [-8, 0, 6, 10, 18, 30, 54]


def test_duplicate_anchors_rejected():
    with pytest.raises(BaselineConfigurationError):
        build_baseline_table(BASELINE_ROWS + [BASELINE_ROWS[3]])


def test_empty_table_raises():
    with pytest.raises(BaselineConfigurationError):
        interpolate_baseline([], 10.0)


def test_anchor_values_returned_exactly(baselines):
    row = interpolate_baseline(baselines, 10.0)
    assert row.score == 84.6
    assert row.gir_pct == 37
    assert row.putts == 35.0


def test_interpolates_each_field_between_anchors(baselines):
    row = interpolate_baseline(baselines, 14.0)
    assert row.handicap == 14.0
    assert row.score == pytest.approx(89.15)
    assert row.fir_pct == pytest.approx(43.0)
    assert row.gir_pct == pytest.approx(29.5)
    assert row.putts == pytest.approx(36.0)
    assert row.penalties == pytest.approx(2.5)


def test_clamps_outside_table(baselines):
    low = interpolate_baseline(baselines, -10.0)
    assert low.score == 72.0
    assert low.handicap == -10.0

    high = interpolate_baseline(build_baseline_table(BASELINE_ROWS[:5]), 40.0)
    assert high.score == 93.7
    assert high.penalties == 3.0


def test_load_from_json(tmp_path):
    path = tmp_path / "baselines.json"
    path.write_text(json.dumps(BASELINE_ROWS[:2]))
    table = load_baseline_table(path)
    assert [row.handicap for row in table] == [-8, 0]


def test_load_rejects_non_list(tmp_path):
    path = tmp_path / "baselines.json"
    path.write_text(json.dumps({"handicap": 10}))
    with pytest.raises(BaselineConfigurationError):
        load_baseline_table(path)


def test_shipped_table_loads():
    table = load_baseline_table(DATA_FILE)
    assert len(table) == 7
    assert table[0].handicap == -8
    assert table[-1].handicap == 54
