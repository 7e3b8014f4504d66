import pytest
from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch
from uuid import uuid4

from fastapi.testclient import TestClient

from analytics import build_baseline_table, compute_data_hash, strokes_gained_for_round
from api.main import create_app
from models import PlayerProfile
from narrative import build_overall_insights_payload
from factories import BASELINE_ROWS, make_round


USER_ID = str(uuid4())
ROUND_ID = str(uuid4())


def _history():
    return [make_round(day=i, id=str(uuid4()), score=90 - i % 3) for i in range(6)]


def _fake_db(profile=None, rounds=None, cached=None, round_=None, owner=None):
    """Helper: DatabaseManager stand-in with AsyncMock repositories."""
    return SimpleNamespace(
        users=SimpleNamespace(get_player_profile=AsyncMock(return_value=profile)),
        rounds=SimpleNamespace(
            get_round_records=AsyncMock(return_value=rounds or []),
            get_round_record=AsyncMock(return_value=round_),
            get_round_owner=AsyncMock(return_value=owner),
            update_strokes_gained=AsyncMock(),
        ),
        baselines=SimpleNamespace(
            get_baseline_table=AsyncMock(return_value=build_baseline_table(BASELINE_ROWS))
        ),
        insights=SimpleNamespace(
            get_cached_overall=AsyncMock(return_value=cached),
            save_overall=AsyncMock(),
        ),
    )


@pytest.fixture
def client_for():
    def make(fake_db):
        app = create_app()
        app.state.db_manager = fake_db
        # No context manager: the lifespan (real pool) never runs
        return TestClient(app)
    return make


# ================================================================
# Overall insights
# ================================================================

def test_overall_unknown_user(client_for):
    client = client_for(_fake_db())
    response = client.get(f"/api/insights/overall/{USER_ID}")
    assert response.status_code == 404
    assert response.json()["detail"] == "User not found"


def test_overall_generates_and_saves(client_for):
    fake = _fake_db(profile=PlayerProfile(id=USER_ID, handicap_index=15.0), rounds=_history())
    response = client_for(fake).get(f"/api/insights/overall/{USER_ID}")

    assert response.status_code == 200
    body = response.json()
    assert body["cached"] is False
    assert body["variant_offset"] == 0
    assert len(body["cards"]) == 6
    assert set(body["cards_by_mode"]) == {"nine", "eighteen", "combined"}

    args = fake.insights.save_overall.await_args.args
    assert args[0] == USER_ID
    assert args[2] == body["data_hash"]
    assert args[3] == 0


def test_overall_returns_cache_when_history_unchanged(client_for):
    rounds = _history()
    profile = PlayerProfile(id=USER_ID)
    generated = datetime.now(timezone.utc)
    payload = build_overall_insights_payload(rounds, user_id=USER_ID, is_premium=False, now=generated)
    cached = {
        "payload": payload,
        "data_hash": compute_data_hash(rounds, False),
        "variant_offset": 0,
        "generated_at": generated,
    }
    fake = _fake_db(profile=profile, rounds=rounds, cached=cached)

    body = client_for(fake).get(f"/api/insights/overall/{USER_ID}").json()

    assert body["cached"] is True
    assert body["cards"] == payload["cards"]
    fake.insights.save_overall.assert_not_awaited()


def test_regenerate_bumps_variant_offset(client_for):
    rounds = _history()
    generated = datetime.now(timezone.utc)
    cached = {
        "payload": build_overall_insights_payload(rounds, user_id=USER_ID, is_premium=False, now=generated),
        "data_hash": compute_data_hash(rounds, False),
        "variant_offset": 3,
        "generated_at": generated,
    }
    fake = _fake_db(profile=PlayerProfile(id=USER_ID), rounds=rounds, cached=cached)

    body = client_for(fake).post(f"/api/insights/overall/{USER_ID}/regenerate").json()

    assert body["cached"] is False
    assert body["variant_offset"] == 4
    assert fake.insights.save_overall.await_args.args[3] == 4


# ================================================================
# Post-round insights
# ================================================================

def test_post_round_unknown_round(client_for):
    response = client_for(_fake_db()).get(f"/api/insights/rounds/{ROUND_ID}")
    assert response.status_code == 404
    assert response.json()["detail"] == "Round not found"


def test_post_round_computes_breakdown_for_display(client_for):
    round_ = make_round(day=10, id=ROUND_ID, handicap_at_round=10.0, fir_hit=7, gir_hit=4, putts=33, penalties=2)
    fake = _fake_db(round_=round_, owner=USER_ID, rounds=_history())

    response = client_for(fake).get(f"/api/insights/rounds/{ROUND_ID}")

    assert response.status_code == 200
    body = response.json()
    assert body["round_id"] == ROUND_ID
    assert 1 <= len(body["messages"]) <= 3
    assert all(set(m) == {"key", "emoji", "level", "text"} for m in body["messages"])
    fake.baselines.get_baseline_table.assert_awaited_once()
    fake.rounds.get_round_records.assert_awaited_once_with(USER_ID)


def test_post_round_without_handicap_skips_baselines(client_for):
    fake = _fake_db(round_=make_round(day=10, id=ROUND_ID), owner=None)

    response = client_for(fake).get(f"/api/insights/rounds/{ROUND_ID}")

    assert response.status_code == 200
    assert response.json()["messages"]
    fake.baselines.get_baseline_table.assert_not_awaited()
    fake.rounds.get_round_records.assert_not_awaited()


# ================================================================
# Strokes gained recompute
# ================================================================

def test_recompute_strokes_gained(client_for):
    round_ = make_round(id=ROUND_ID, handicap_at_round=10.0, fir_hit=7, gir_hit=4, putts=33, penalties=2)
    fake = _fake_db(round_=round_)
    expected = strokes_gained_for_round(round_, build_baseline_table(BASELINE_ROWS))

    response = client_for(fake).post(f"/api/rounds/{ROUND_ID}/strokes-gained")

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == expected.total
    assert body["confidence"] == expected.confidence.value
    fake.rounds.update_strokes_gained.assert_awaited_once_with(ROUND_ID, expected)


def test_recompute_unknown_round(client_for):
    fake = _fake_db()
    response = client_for(fake).post(f"/api/rounds/{ROUND_ID}/strokes-gained")
    assert response.status_code == 404
    fake.rounds.update_strokes_gained.assert_not_awaited()


def test_recompute_without_baselines_is_unavailable(client_for):
    fake = _fake_db(round_=make_round(id=ROUND_ID, handicap_at_round=10.0))
    fake.baselines.get_baseline_table = AsyncMock(return_value=[])

    response = client_for(fake).post(f"/api/rounds/{ROUND_ID}/strokes-gained")

    assert response.status_code == 503
    assert response.json()["detail"] == "Strokes gained is not configured"


def test_routes_unavailable_before_database_is_ready():
    # No lifespan ran, so there is no db_manager on the app state
    client = TestClient(create_app())
    response = client.post(f"/api/rounds/{ROUND_ID}/strokes-gained")
    assert response.status_code == 503
    assert response.json()["detail"] == "Database is not available"
    assert client.get(f"/api/insights/overall/{USER_ID}").status_code == 503


# ================================================================
# Health
# ================================================================

def test_health_reports_degraded_database(client_for):
    with patch("api.main.db.health_check", new=AsyncMock(return_value=False)):
        body = client_for(_fake_db()).get("/api/health").json()
    assert body == {"status": "degraded", "database": False}
