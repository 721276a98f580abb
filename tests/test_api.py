"""Tests for the trends and health HTTP endpoints."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from trendline.api.trends import get_trend_service
from trendline.config import settings
from trendline.database import get_db
from trendline.main import app
from trendline.services.trends import RecordSourceUnavailableError, TrendService

PREFIX = settings.api_v1_prefix


@pytest.fixture
def service(fake_source):
    return TrendService(fake_source)


@pytest.fixture
def client(service):
    app.dependency_overrides[get_trend_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# POST /trends
# ---------------------------------------------------------------------------


class TestPostTrends:
    def test_team_query(self, client, fake_source):
        response = client.post(
            f"{PREFIX}/trends",
            json={"sport": "nfl", "team": "Kansas City Chiefs", "perspective": "team"},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True

        data = body["data"]
        assert data["query"]["sport"] == "NFL"
        assert data["query"]["perspective"] == "team"
        assert data["summary"]["total_games"] == 2
        assert data["summary"]["wins"] == 2
        assert data["game_count"] == 2
        assert body["meta"]["sport"] == "NFL"
        assert body["meta"]["games_searched"] == 2
        assert isinstance(body["meta"]["duration_ms"], int)
        assert fake_source.fetch_calls[0][1] == 1

    def test_games_omit_raw_record(self, client):
        body = client.post(f"{PREFIX}/trends", json={"sport": "NFL"}).json()
        games = body["data"]["games"]
        assert len(games) == 3
        assert all("raw" not in g for g in games)
        assert games[0]["game_date"] == "2023-11-05"
        assert games[0]["spread_result"] == "COVERED"

    def test_filters(self, client):
        response = client.post(
            f"{PREFIX}/trends",
            json={
                "sport": "NFL",
                "filters": [{"field": "spread", "operator": "lte", "value": -7}],
                "order_by": {"field": "game_date", "direction": "asc"},
            },
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["game_count"] == 1
        assert data["games"][0]["home_team"] == "Buffalo Bills"
        assert data["query"]["filters"] == [{"field": "spread", "operator": "lte", "value": -7}]

    def test_filter_on_raw_key(self, client):
        response = client.post(
            f"{PREFIX}/trends",
            json={
                "sport": "NFL",
                "filters": [{"field": "home_team_abbr", "operator": "eq", "value": "kc"}],
            },
        )
        assert response.json()["data"]["game_count"] == 3

    def test_all_sports(self, client):
        body = client.post(f"{PREFIX}/trends", json={"sport": "ALL"}).json()
        assert body["data"]["game_count"] == 5
        assert body["meta"]["sport"] == "ALL"

    def test_response_games_capped(self, client, monkeypatch):
        monkeypatch.setattr(settings, "trend_max_response_games", 1)
        data = client.post(f"{PREFIX}/trends", json={"sport": "NFL"}).json()["data"]
        assert len(data["games"]) == 1
        assert data["game_count"] == 3
        assert data["summary"]["total_games"] == 3

    @pytest.mark.parametrize(
        "body",
        [
            {"sport": "NBA"},
            {"sport": "NFL", "perspective": "sideways"},
            {"sport": "NFL", "limit": 0},
            {"sport": "NFL", "limit": 5000},
            {"sport": "NFL", "team": "x" * 101},
            {"sport": "NFL", "filters": [{"field": "spread", "operator": "approx", "value": 1}]},
            {"sport": "NFL", "filters": [{"field": "", "operator": "eq", "value": 1}]},
            {"sport": "NFL", "filters": [{"field": "week", "operator": "eq", "value": "1"}] * 11},
            {"sport": "NFL", "order_by": {"field": "spread", "direction": "up"}},
            {"sport": "NFL", "filters": [{"field": "spread", "operator": "between", "value": 5}]},
            {"sport": "NFL", "filters": [{"field": "spread", "operator": "between", "value": [3]}]},
            {"sport": "NFL", "filters": [{"field": "spread", "operator": "in", "value": 3}]},
            {"sport": "NFL", "filters": [{"field": "spread", "operator": "gte", "value": [1]}]},
            {"sport": "NFL", "filters": [{"field": "spread", "operator": "lt", "value": None}]},
        ],
    )
    def test_invalid_body(self, client, body):
        assert client.post(f"{PREFIX}/trends", json=body).status_code == 422

    @pytest.mark.parametrize(
        "trend_filter,expected",
        [
            ({"field": "week", "operator": "gte", "value": 5}, 3),
            ({"field": "week", "operator": "gte", "value": 10}, 0),
            ({"field": "week", "operator": "between", "value": [1, 10]}, 3),
            ({"field": "week", "operator": "eq", "value": "9"}, 3),
        ],
    )
    def test_numeric_week_filters(self, client, trend_filter, expected):
        response = client.post(f"{PREFIX}/trends", json={"sport": "NFL", "filters": [trend_filter]})
        assert response.status_code == 200
        assert response.json()["data"]["game_count"] == expected

    def test_uncomparable_filter_value(self, client):
        response = client.post(
            f"{PREFIX}/trends",
            json={
                "sport": "NFL",
                "filters": [{"field": "spread", "operator": "gt", "value": "abc"}],
            },
        )
        assert response.status_code == 400
        assert "Invalid filter" in response.json()["detail"]

    def test_record_store_unavailable(self):
        class BrokenSource:
            def fetch_records(self, sport, team_id=None, season_range=None):
                raise RecordSourceUnavailableError("Could not load NFL games")

            def resolve_team_id(self, team_name, sport=None):
                return None

            def invalidate(self):
                pass

        app.dependency_overrides[get_trend_service] = lambda: TrendService(BrokenSource())
        try:
            response = TestClient(app).post(f"{PREFIX}/trends", json={"sport": "NFL"})
        finally:
            app.dependency_overrides.clear()
        assert response.status_code == 503
        assert "Could not load NFL games" in response.json()["detail"]


# ---------------------------------------------------------------------------
# GET /trends
# ---------------------------------------------------------------------------


class TestGetTrends:
    def test_simple_query(self, client):
        response = client.get(f"{PREFIX}/trends", params={"sport": "nfl", "limit": "2"})
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["game_count"] == 2
        assert data["query"]["limit"] == 2

    def test_season_range(self, client):
        params = {"sport": "NFL", "season_start": "2022", "season_end": "2022"}
        data = client.get(f"{PREFIX}/trends", params=params).json()["data"]
        assert data["game_count"] == 2
        assert data["query"]["season_range"] == [2022, 2022]

    def test_perspective(self, client):
        params = {"sport": "NFL", "perspective": "away"}
        summary = client.get(f"{PREFIX}/trends", params=params).json()["data"]["summary"]
        assert summary["wins"] == 1
        assert summary["losses"] == 2

    @pytest.mark.parametrize(
        "params,message",
        [
            ({"sport": "NBA"}, "Invalid sport"),
            ({"sport": "NFL", "perspective": "sideways"}, "Invalid perspective"),
            ({"sport": "NFL", "season_start": "2020", "season_end": "latest"}, "valid integers"),
            ({"sport": "NFL", "limit": "-1"}, "positive integer"),
            ({"sport": "NFL", "limit": "ten"}, "positive integer"),
        ],
    )
    def test_invalid_params(self, client, params, message):
        response = client.get(f"{PREFIX}/trends", params=params)
        assert response.status_code == 400
        assert message in response.json()["detail"]

    def test_sport_required(self, client):
        assert client.get(f"{PREFIX}/trends").status_code == 422


# ---------------------------------------------------------------------------
# Cache and health
# ---------------------------------------------------------------------------


def test_invalidate_cache(client, service, fake_source):
    client.post(f"{PREFIX}/trends", json={"sport": "NFL"})
    response = client.post(f"{PREFIX}/trends/cache/invalidate")
    assert response.json() == {"status": "invalidated"}
    assert fake_source.invalidations == 1

    client.post(f"{PREFIX}/trends", json={"sport": "NFL"})
    assert len(fake_source.fetch_calls) == 2


def test_ready(client):
    assert client.get("/ready").json() == {"status": "ready"}


def test_health_reports_cache_state(client):
    engine = create_engine("sqlite://")
    factory = sessionmaker(bind=engine)

    def sqlite_db():
        session = factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = sqlite_db
    client.post(f"{PREFIX}/trends", json={"sport": "NFL"})
    body = client.get("/health").json()

    assert body["status"] == "healthy"
    assert body["checks"]["database"] == "ok"
    assert body["checks"]["cache"] == {"NFL": "loaded", "NCAAF": "cold", "NCAAMB": "cold"}
