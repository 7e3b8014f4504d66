import pytest

from narrative import DRILL_LIBRARY, pick_drill, pick_variant, resolve_variant_offset
from narrative.drills import DRILL_BENEFITS
from narrative.variants import seed_index

POOL = ["a", "b", "c", "d", "e"]


def test_seed_index_is_stable():
    assert seed_index("user|hash", "card1|A") == seed_index("user|hash", "card1|A")
    assert seed_index("user|hash", "card1|A") != seed_index("user|hash", "card1|B")


def test_pick_variant_deterministic():
    assert pick_variant(POOL, "seed", "ns") == pick_variant(POOL, "seed", "ns")


def test_offset_advances_index():
    _, base = pick_variant(POOL, "seed", "ns")
    _, shifted = pick_variant(POOL, "seed", "ns", offset=1)
    assert shifted == (base + 1) % len(POOL)
    _, wrapped = pick_variant(POOL, "seed", "ns", offset=len(POOL))
    assert wrapped == base


def test_unusable_offset_treated_as_zero():
    assert pick_variant(POOL, "seed", "ns", offset=-3) == pick_variant(POOL, "seed", "ns")
    assert pick_variant(POOL, "seed", "ns", offset="x") == pick_variant(POOL, "seed", "ns")


def test_fixed_index_wins():
    assert pick_variant(POOL, "seed", "ns", offset=2, fixed_index=1) == ("b", 1)
    assert pick_variant(POOL, "seed", "ns", fixed_index=7) == ("c", 2)


def test_empty_pool_raises():
    with pytest.raises(ValueError):
        pick_variant([], "seed", "ns")


def test_resolve_variant_offset():
    assert resolve_variant_offset(None) == 0
    assert resolve_variant_offset(3) == 3
    assert resolve_variant_offset("2") == 2
    assert resolve_variant_offset(3, force_regenerate=True) == 3
    assert resolve_variant_offset(3, force_regenerate=True, bump_variant=True) == 4


# ================================================================
# Drills
# ================================================================

def test_every_area_has_drills_and_benefit():
    for area, drills in DRILL_LIBRARY.items():
        assert drills, area
        assert area in DRILL_BENEFITS
        for drill in drills:
            assert drill.area == area
            assert drill.goal


def test_pick_drill_areas():
    assert pick_drill("putting", "seed").area == "putting"
    assert pick_drill("residual", "seed").area == "short_game"
    assert pick_drill(None, "seed").area == "general"
    assert pick_drill("bunker", "seed").area == "general"


def test_pick_drill_fixed_index():
    assert pick_drill("putting", "seed", fixed_index=0) == DRILL_LIBRARY["putting"][0]
