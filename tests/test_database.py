import json
import pytest
from datetime import date, datetime, timezone
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

from database.connection import DatabasePool, build_dsn_from_env
from database.converters import (
    baseline_from_row,
    baseline_to_row,
    cached_insights_from_row,
    player_profile_from_row,
    round_record_from_row,
    strokes_gained_to_row,
    tee_definition_from_rows,
)
from database.db_manager import DatabaseManager
from database.exceptions import NotFoundError, RowMappingError
from database.repositories.baseline_repo import BaselineRepositoryDB
from database.repositories.insights_repo import InsightsRepositoryDB
from database.repositories.round_repo import RoundRepositoryDB
from database.repositories.user_repo import UserRepositoryDB
from models import ConfidenceLevel, StrokesGainedResult, TeeSegment
from factories import BASELINE_ROWS
from analytics import build_baseline_table


# ================================================================
# Fixtures
# ================================================================

@pytest.fixture
def mock_pool():
    pool = MagicMock()
    conn = AsyncMock()
    pool.acquire.return_value.__aenter__.return_value = conn
    return pool, conn


def _round_row(round_id=None, **overrides):
    """Helper: users.rounds row joined with its tee, as the round query returns it."""
    row = {
        "id": round_id or uuid4(),
        "round_date": date(2025, 5, 3),
        "holes_played": 18,
        "total_score": 88,
        "to_par": 16,
        "non_par3_holes": 14,
        "fir_hit": 7,
        "fir_possible": None,
        "gir_hit": 6,
        "putts": 33,
        "penalties": 1,
        "handicap_at_round": Decimal("14.2"),
        "tee_id": None,
        "tee_segment": "full",
        "course_rating": Decimal("71.4"),
        "slope_rating": 128,
        "par": 72,
        "sg_total": None,
        "sg_off_tee": None,
        "sg_approach": None,
        "sg_putting": None,
        "sg_penalties": None,
        "sg_residual": None,
        "sg_confidence": None,
        "sg_partial_analysis": None,
    }
    row.update(overrides)
    return row


FRONT_PARS = [4, 4, 3, 5, 4, 4, 3, 4, 5]
BACK_PARS = [4, 3, 5, 4, 4, 3, 4, 5, 4]


def _tee_row(tee_id, course_id, **overrides):
    """Helper: courses.tees row with side ratings, as the tee query returns it."""
    row = {
        "id": tee_id,
        "course_id": course_id,
        "number_of_holes": 18,
        "course_rating": Decimal("72.4"),
        "slope_rating": 131,
        "par_total": 72,
        "front_course_rating": Decimal("35.9"),
        "front_slope_rating": 127,
        "back_course_rating": Decimal("36.5"),
        "back_slope_rating": 134,
    }
    row.update(overrides)
    return row


def _hole_rows(course_id):
    return [
        {"course_id": course_id, "hole_number": i + 1, "par": par, "handicap": None}
        for i, par in enumerate(FRONT_PARS + BACK_PARS)
    ]


def _front_nine_row(tee_id, **overrides):
    """Helper: a front-nine round with no played ratings of its own."""
    fields = {
        "tee_id": tee_id, "tee_segment": "front9", "holes_played": 9, "non_par3_holes": None,
        "total_score": 44, "to_par": 8, "fir_hit": 4, "gir_hit": 3, "putts": 16, "penalties": 0,
        "course_rating": None, "slope_rating": None, "par": None,
    }
    fields.update(overrides)
    return _round_row(**fields)


# ================================================================
# converters.py - pure function tests (no mocks needed)
# ================================================================

def test_round_converter_maps_fields():
    row = _round_row()
    r = round_record_from_row(row)

    assert r.id == str(row["id"])
    assert r.date == datetime(2025, 5, 3, tzinfo=timezone.utc)
    assert r.handicap_at_round == 14.2
    assert isinstance(r.course_rating, float)
    assert r.tee_segment == TeeSegment.FULL
    assert r.fairways_possible() == 14
    assert not r.has_strokes_gained()


def test_round_converter_defaults_for_nine_holes():
    r = round_record_from_row(_round_row(holes_played=9, non_par3_holes=None, tee_segment=None, total_score=44))
    assert r.holes == 9
    assert r.non_par3_holes == 7
    assert r.tee_segment == TeeSegment.FULL


def test_round_converter_reads_stored_breakdown():
    r = round_record_from_row(_round_row(
        sg_total=Decimal("-2.10"),
        sg_residual=Decimal("-2.10"),
        sg_confidence="low",
        sg_partial_analysis=True,
    ))
    assert r.sg_total == -2.1
    assert r.sg_confidence == ConfidenceLevel.LOW
    assert r.sg_partial_analysis is True


def test_round_converter_rejects_invalid_rows():
    with pytest.raises(RowMappingError):
        round_record_from_row(_round_row(holes_played=12))

    # Breakdown stored without a handicap
    with pytest.raises(RowMappingError):
        round_record_from_row(_round_row(handicap_at_round=None, sg_total=Decimal("1.0")))

    with pytest.raises(RowMappingError):
        round_record_from_row(_round_row(round_date="2025-05-03"))


def test_baseline_converters():
    row = {"handicap": Decimal("10"), "score": Decimal("84.6"), "fir_pct": Decimal("46"),
           "gir_pct": Decimal("37"), "putts": Decimal("35.0"), "penalties": Decimal("2.0")}
    baseline = baseline_from_row(row)
    assert baseline.score == 84.6
    assert baseline_to_row(baseline) == (10.0, 84.6, 46.0, 37.0, 35.0, 2.0)


def test_player_profile_converter():
    user_id = uuid4()
    profile = player_profile_from_row({
        "id": user_id, "name": "Sam", "handicap_index": Decimal("12.3"),
        "is_premium": None, "created_at": None,
    })
    assert profile.id == str(user_id)
    assert profile.handicap_index == 12.3
    assert profile.is_premium is False


def test_cached_insights_converter_decodes_json():
    generated = datetime(2025, 6, 2, tzinfo=timezone.utc)
    entry = cached_insights_from_row({
        "payload": json.dumps({"cards": []}),
        "data_hash": "abc",
        "variant_offset": None,
        "generated_at": generated,
    })
    assert entry == {"payload": {"cards": []}, "data_hash": "abc", "variant_offset": 0, "generated_at": generated}


def test_round_converter_resolves_front_nine_from_tee():
    tee_id, course_id = uuid4(), uuid4()
    tee = tee_definition_from_rows(_tee_row(tee_id, course_id), _hole_rows(course_id))

    r = round_record_from_row(_front_nine_row(tee_id), tee)

    assert r.holes == 9
    assert r.tee_segment == TeeSegment.FRONT9
    assert r.course_rating == 35.9
    assert r.slope_rating == 127
    assert r.par == 36
    assert r.non_par3_holes == 7


def test_round_converter_scales_tee_without_side_ratings():
    tee_id, course_id = uuid4(), uuid4()
    tee = tee_definition_from_rows(
        _tee_row(tee_id, course_id, front_course_rating=None, front_slope_rating=None),
        _hole_rows(course_id),
    )

    r = round_record_from_row(_front_nine_row(tee_id), tee)

    assert r.holes == 9
    assert r.course_rating == pytest.approx(36.2)
    assert r.slope_rating == 131
    assert r.par == 36


def test_round_converter_prefers_played_ratings():
    tee_id, course_id = uuid4(), uuid4()
    tee = tee_definition_from_rows(_tee_row(tee_id, course_id), _hole_rows(course_id))

    r = round_record_from_row(
        _front_nine_row(tee_id, course_rating=Decimal("34.8"), slope_rating=120, par=35), tee
    )

    assert r.course_rating == 34.8
    assert r.slope_rating == 120
    assert r.par == 35


def test_tee_converter_drops_holes_beyond_layout():
    tee_id, course_id = uuid4(), uuid4()
    tee = tee_definition_from_rows(
        _tee_row(tee_id, course_id, number_of_holes=9, course_rating=Decimal("35.5"),
                 front_course_rating=None, front_slope_rating=None,
                 back_course_rating=None, back_slope_rating=None),
        _hole_rows(course_id),
    )
    assert tee.number_of_holes == 9
    assert [h.number for h in tee.holes] == list(range(1, 10))

    with pytest.raises(RowMappingError):
        tee_definition_from_rows(_tee_row(tee_id, course_id, slope_rating=300), [])


def test_strokes_gained_to_row():
    result = StrokesGainedResult(
        total=-1.5, off_tee=0.2, approach=-0.7, putting=0.1, penalties=0.0, residual=-1.1,
        confidence=ConfidenceLevel.MEDIUM, partial_analysis=False,
    )
    assert strokes_gained_to_row(result) == (-1.5, 0.2, -0.7, 0.1, 0.0, -1.1, "medium", False)
    assert strokes_gained_to_row(StrokesGainedResult())[6] is None


# ================================================================
# round_repo.py
# ================================================================

@pytest.mark.asyncio
async def test_get_round_records(mock_pool):
    pool, conn = mock_pool
    user_id = str(uuid4())
    conn.fetch.return_value = [_round_row(), _round_row(total_score=92)]

    rounds = await RoundRepositoryDB(pool).get_round_records(user_id)

    assert [r.score for r in rounds] == [88, 92]
    sql = conn.fetch.call_args.args[0]
    assert "ORDER BY r.round_date DESC" in sql
    assert str(conn.fetch.call_args.args[1]) == user_id


@pytest.mark.asyncio
async def test_get_round_records_resolves_tee_segment(mock_pool):
    pool, conn = mock_pool
    tee_id, course_id = uuid4(), uuid4()
    conn.fetch.side_effect = [
        [_front_nine_row(tee_id), _round_row()],
        [_tee_row(tee_id, course_id)],
        _hole_rows(course_id),
    ]

    front, full = await RoundRepositoryDB(pool).get_round_records(str(uuid4()))

    assert (front.holes, front.course_rating, front.par) == (9, 35.9, 36)
    assert full.course_rating == 71.4
    tee_call, hole_call = conn.fetch.call_args_list[1:]
    assert "FROM courses.tees" in tee_call.args[0]
    assert tee_call.args[1] == [tee_id]
    assert hole_call.args[1] == [course_id]


@pytest.mark.asyncio
async def test_get_round_record_loads_its_tee(mock_pool):
    pool, conn = mock_pool
    tee_id, course_id = uuid4(), uuid4()
    conn.fetchrow.return_value = _front_nine_row(tee_id, handicap_at_round=Decimal("10"))
    conn.fetch.side_effect = [[_tee_row(tee_id, course_id)], _hole_rows(course_id)]

    r = await RoundRepositoryDB(pool).get_round_record(str(uuid4()))

    assert r.holes == 9
    assert r.course_rating == 35.9


@pytest.mark.asyncio
async def test_get_round_record_missing(mock_pool):
    pool, conn = mock_pool
    conn.fetchrow.return_value = None
    assert await RoundRepositoryDB(pool).get_round_record(str(uuid4())) is None


@pytest.mark.asyncio
async def test_get_round_owner(mock_pool):
    pool, conn = mock_pool
    owner = uuid4()
    conn.fetchval.return_value = owner
    assert await RoundRepositoryDB(pool).get_round_owner(str(uuid4())) == str(owner)


@pytest.mark.asyncio
async def test_update_strokes_gained(mock_pool):
    pool, conn = mock_pool
    conn.execute.return_value = "UPDATE 1"
    round_id = str(uuid4())
    result = StrokesGainedResult(total=-5.4, residual=-5.4, confidence=ConfidenceLevel.LOW)

    await RoundRepositoryDB(pool).update_strokes_gained(round_id, result)

    args = conn.execute.call_args.args
    assert "UPDATE users.rounds" in args[0]
    assert str(args[1]) == round_id
    assert args[2:] == (-5.4, None, None, None, None, -5.4, "low", True)


@pytest.mark.asyncio
async def test_update_strokes_gained_unknown_round(mock_pool):
    pool, conn = mock_pool
    conn.execute.return_value = "UPDATE 0"
    with pytest.raises(NotFoundError):
        await RoundRepositoryDB(pool).update_strokes_gained(str(uuid4()), StrokesGainedResult())


# ================================================================
# baseline_repo.py
# ================================================================

@pytest.mark.asyncio
async def test_get_baseline_table(mock_pool):
    pool, conn = mock_pool
    conn.fetch.return_value = BASELINE_ROWS[:2]
    table = await BaselineRepositoryDB(pool).get_baseline_table()
    assert [row.handicap for row in table] == [-8, 0]


@pytest.mark.asyncio
async def test_replace_baseline_table_uses_transaction(mock_pool):
    pool, conn = mock_pool
    conn.transaction = MagicMock()
    conn.transaction.return_value.__aenter__.return_value = AsyncMock()

    written = await BaselineRepositoryDB(pool).replace_baseline_table(build_baseline_table(BASELINE_ROWS))

    assert written == 7
    conn.transaction.assert_called_once()
    assert "DELETE FROM analytics.handicap_baselines" in conn.execute.call_args.args[0]
    values = conn.executemany.call_args.args[1]
    assert len(values) == 7
    assert values[3] == (10.0, 84.6, 46.0, 37.0, 35.0, 2.0)


# ================================================================
# user_repo.py / insights_repo.py
# ================================================================

@pytest.mark.asyncio
async def test_get_player_profile(mock_pool):
    pool, conn = mock_pool
    user_id = uuid4()
    conn.fetchrow.return_value = {
        "id": user_id, "name": "Sam", "handicap_index": None, "is_premium": True, "created_at": None,
    }
    profile = await UserRepositoryDB(pool).get_player_profile(str(user_id))
    assert profile.is_premium
    assert profile.handicap_index is None


@pytest.mark.asyncio
async def test_get_cached_overall_missing(mock_pool):
    pool, conn = mock_pool
    conn.fetchrow.return_value = None
    assert await InsightsRepositoryDB(pool).get_cached_overall(str(uuid4())) is None


@pytest.mark.asyncio
async def test_save_overall_upserts_json(mock_pool):
    pool, conn = mock_pool
    user_id = str(uuid4())
    generated = datetime(2025, 6, 2, tzinfo=timezone.utc)

    await InsightsRepositoryDB(pool).save_overall(user_id, {"cards": [{"prefix": "x"}]}, "abc", 2, generated)

    args = conn.execute.call_args.args
    assert "ON CONFLICT (user_id) DO UPDATE" in args[0]
    assert str(args[1]) == user_id
    assert json.loads(args[2]) == {"cards": [{"prefix": "x"}]}
    assert args[3:] == ("abc", 2, generated)


# ================================================================
# connection.py / db_manager.py
# ================================================================

def test_dsn_prefers_database_url(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@db:5432/golf")
    assert build_dsn_from_env() == "postgresql://u:p@db:5432/golf"


def test_dsn_from_pg_variables(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.setenv("PGHOST", "db")
    monkeypatch.setenv("PGUSER", "golf")
    monkeypatch.delenv("PGPASSWORD", raising=False)
    monkeypatch.delenv("PGPORT", raising=False)
    monkeypatch.setenv("PGDATABASE", "analytics")
    assert build_dsn_from_env() == "postgresql://golf@db:5432/analytics"


def test_pool_requires_initialize():
    with pytest.raises(RuntimeError):
        DatabasePool().pool


@pytest.mark.asyncio
async def test_pool_lifecycle():
    fake_pool = MagicMock()
    fake_pool.close = AsyncMock()
    with patch("database.connection.asyncpg.create_pool", new=AsyncMock(return_value=fake_pool)) as create:
        pool = DatabasePool()
        await pool.initialize("postgresql://localhost/golf")
        await pool.initialize("postgresql://localhost/golf")   # second call is a no-op
        assert pool.pool is fake_pool
        create.assert_awaited_once()

        await pool.close()
        fake_pool.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_health_check_without_pool():
    assert await DatabasePool().health_check() is False


def test_db_manager_wires_repositories(mock_pool):
    pool, _ = mock_pool
    manager = DatabaseManager(pool)
    assert manager.pool is pool
    assert isinstance(manager.rounds, RoundRepositoryDB)
    assert isinstance(manager.baselines, BaselineRepositoryDB)
    assert isinstance(manager.users, UserRepositoryDB)
    assert isinstance(manager.insights, InsightsRepositoryDB)
