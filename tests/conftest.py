import pytest

from analytics import build_baseline_table
from factories import BASELINE_ROWS


@pytest.fixture
def baselines():
    return build_baseline_table(BASELINE_ROWS)
