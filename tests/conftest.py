"""Shared fixtures for trend engine tests."""

import threading
from types import MappingProxyType
from typing import Any

import pytest

from trendline.services.trends import Game, Sport


# ---------------------------------------------------------------------------
# Raw record factories (each sport's own naming convention)
# ---------------------------------------------------------------------------


def _nfl_raw(**overrides: Any) -> dict[str, Any]:
    record = {
        "season": 2023,
        "game_date": "2023-11-05",
        "home_team_canonical": "Kansas City Chiefs",
        "away_team_canonical": "Miami Dolphins",
        "winner_canonical": "Kansas City Chiefs",
        "home_team_original": "KC Chiefs",
        "away_team_original": "MIA Dolphins",
        "home_team_abbr": "KC",
        "away_team_abbr": "MIA",
        "home_score": 21,
        "away_score": 14,
        "score_difference": 7,
        "spread": -2.5,
        "over_under": 50.5,
        "spread_result": "COVERED",
        "ou_result": "UNDER",
        "week": "9",
        "day_of_week": "Sun",
        "is_playoff": False,
        "is_neutral_site": True,
        "is_primetime": False,
    }
    record.update(overrides)
    return record


def _ncaaf_raw(**overrides: Any) -> dict[str, Any]:
    record = {
        "season": 2023,
        "game_date": "2023-10-14",
        "home_team": "Texas",
        "away_team": "Oklahoma",
        "winner": "Oklahoma",
        "home_conference": "Big 12",
        "away_conference": "Big 12",
        "home_score": 30,
        "away_score": 34,
        "score_difference": -4,
        "spread": -6.5,
        "over_under": 60.5,
        "spread_result": "LOST",
        "ou_result": "OVER",
        "home_rank": 3,
        "away_rank": 12,
        "is_conference_game": True,
        "is_bowl_game": False,
        "is_neutral_site": True,
    }
    record.update(overrides)
    return record


def _ncaamb_raw(**overrides: Any) -> dict[str, Any]:
    record = {
        "season": 2024,
        "game_date": "2024-03-21",
        "home_team": "Duke",
        "away_team": "Vermont",
        "home_team_raw": "Duke Blue Devils",
        "away_team_raw": "Vermont Catamounts",
        "winner": "Duke",
        "home_conference": "ACC",
        "away_conference": "AEast",
        "home_score": 64,
        "away_score": 47,
        "score_difference": 17,
        "spread": -12.5,
        "over_under": 128.5,
        "spread_result": "COVERED",
        "ou_result": "UNDER",
        "home_kenpom_rank": 9,
        "away_kenpom_rank": 84,
        "is_tournament": True,
        "is_nit": False,
        "is_conference_tourney": False,
        "home_seed": 4,
        "away_seed": 13,
        "home_adj_em": 24.1,
        "overtimes": 0,
    }
    record.update(overrides)
    return record


@pytest.fixture
def nfl_raw():
    return _nfl_raw


@pytest.fixture
def ncaaf_raw():
    return _ncaaf_raw


@pytest.fixture
def ncaamb_raw():
    return _ncaamb_raw


# ---------------------------------------------------------------------------
# Game factory
# ---------------------------------------------------------------------------


def _make_game(**overrides: Any) -> Game:
    raw = overrides.pop("raw", {})
    values: dict[str, Any] = {
        "sport": Sport.NFL,
        "season": 2023,
        "game_date": "2023-11-05",
        "home_team": "Kansas City Chiefs",
        "away_team": "Buffalo Bills",
        "home_score": 28,
        "away_score": 20,
        "winner": "",
        "spread": -7.0,
        "over_under": 45.5,
    }
    values.update(overrides)
    values.setdefault("score_difference", values["home_score"] - values["away_score"])
    values.setdefault("total_points", values["home_score"] + values["away_score"])
    if not values["winner"] and values["home_score"] != values["away_score"]:
        home_won = values["home_score"] > values["away_score"]
        values["winner"] = values["home_team"] if home_won else values["away_team"]
    return Game(raw=MappingProxyType(dict(raw)), **values)


@pytest.fixture
def make_game():
    """Build a Game; score_difference, total_points and winner follow the scores."""
    return _make_game


# ---------------------------------------------------------------------------
# Fake record source
# ---------------------------------------------------------------------------


class FakeRecordSource:
    """In-memory RecordSource that counts fetches."""

    def __init__(
        self,
        records: dict[Sport, list[dict[str, Any]]] | None = None,
        team_ids: dict[str, int] | None = None,
        delay: threading.Event | None = None,
    ):
        self.records = records or {}
        self.team_ids = team_ids or {}
        self.delay = delay
        self.fetch_calls: list[tuple[Sport, int | None, tuple[int, int] | None]] = []
        self.invalidations = 0
        self._lock = threading.Lock()

    def fetch_records(self, sport, team_id=None, season_range=None):
        with self._lock:
            self.fetch_calls.append((Sport(sport), team_id, season_range))
        if self.delay is not None:
            self.delay.wait(timeout=5)
        rows = list(self.records.get(Sport(sport), []))
        if team_id is not None:
            rows = [
                r for r in rows
                if team_id in (r.get("home_team_id"), r.get("away_team_id"))
            ]
        if season_range:
            rows = [r for r in rows if season_range[0] <= r["season"] <= season_range[1]]
        return rows

    def resolve_team_id(self, team_name, sport=None):
        return self.team_ids.get(team_name.lower())

    def invalidate(self):
        self.invalidations += 1


@pytest.fixture
def source_records():
    """Two NFL seasons, one NCAAF game, one NCAAMB game."""
    return {
        Sport.NFL: [
            _nfl_raw(
                game_date="2023-11-05", home_team_id=1, away_team_id=2,
            ),
            _nfl_raw(
                season=2022,
                game_date="2022-12-18",
                home_team_canonical="Buffalo Bills",
                away_team_canonical="Miami Dolphins",
                winner_canonical="Buffalo Bills",
                home_team_original="BUF Bills",
                home_score=32,
                away_score=29,
                score_difference=3,
                spread=-7.0,
                over_under=43.5,
                spread_result="LOST",
                ou_result="OVER",
                home_team_id=3,
                away_team_id=2,
            ),
            _nfl_raw(
                season=2022,
                game_date="2022-09-11",
                home_team_canonical="Arizona Cardinals",
                away_team_canonical="Kansas City Chiefs",
                winner_canonical="Kansas City Chiefs",
                home_team_original="ARI Cardinals",
                away_team_original="KC Chiefs",
                home_score=21,
                away_score=44,
                score_difference=-23,
                spread=6.0,
                over_under=54.0,
                spread_result="LOST",
                ou_result="OVER",
                home_team_id=4,
                away_team_id=1,
            ),
        ],
        Sport.NCAAF: [_ncaaf_raw(home_team_id=10, away_team_id=11)],
        Sport.NCAAMB: [_ncaamb_raw(home_team_id=20, away_team_id=21)],
    }


@pytest.fixture
def fake_source(source_records):
    return FakeRecordSource(records=source_records, team_ids={"kansas city chiefs": 1})


@pytest.fixture
def make_source():
    return FakeRecordSource
