"""Database-backed raw record source for the trend engine.

Loads the team table once into a map, then reads each sport's games without
joins and resolves team names in memory. Rows are emitted as raw records in
each sport's own naming convention, ready for ``normalize_records``.
"""

import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

import structlog
from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from trendline.models import NCAAFGame, NCAAMBGame, NFLGame, Team
from trendline.services.trends.game import Sport

logger = structlog.get_logger()


class RecordSourceUnavailableError(RuntimeError):
    """The external record store could not be read."""


class RecordSource(Protocol):
    def fetch_records(
        self,
        sport: Sport,
        team_id: int | None = None,
        season_range: tuple[int, int] | None = None,
    ) -> list[dict[str, Any]]: ...

    def resolve_team_id(self, team_name: str, sport: Sport | None = None) -> int | None: ...

    def invalidate(self) -> None: ...


@dataclass(frozen=True)
class TeamInfo:
    sport: str
    name: str
    abbreviation: str
    conference: str


UNKNOWN_TEAM = TeamInfo(sport="", name="", abbreviation="", conference="")

GAME_MODELS = {
    Sport.NFL: NFLGame,
    Sport.NCAAF: NCAAFGame,
    Sport.NCAAMB: NCAAMBGame,
}


def _columns(row: Any) -> dict[str, Any]:
    return {column.key: getattr(row, column.key) for column in row.__table__.columns}


def _nfl_record(row: NFLGame, teams: dict[int, TeamInfo]) -> dict[str, Any]:
    home = teams.get(row.home_team_id, UNKNOWN_TEAM)
    away = teams.get(row.away_team_id, UNKNOWN_TEAM)
    winner = teams.get(row.winner_id, UNKNOWN_TEAM) if row.winner_id else UNKNOWN_TEAM
    record = _columns(row)
    record.update(
        home_team_canonical=home.name,
        away_team_canonical=away.name,
        winner_canonical=winner.name,
        home_team_abbr=home.abbreviation,
        away_team_abbr=away.abbreviation,
    )
    return record


def _ncaaf_record(row: NCAAFGame, teams: dict[int, TeamInfo]) -> dict[str, Any]:
    home = teams.get(row.home_team_id, UNKNOWN_TEAM)
    away = teams.get(row.away_team_id, UNKNOWN_TEAM)
    winner = teams.get(row.winner_id, UNKNOWN_TEAM) if row.winner_id else UNKNOWN_TEAM
    record = _columns(row)
    record.update(
        home_team=home.name,
        away_team=away.name,
        winner=winner.name,
        home_conference=home.conference or None,
        away_conference=away.conference or None,
    )
    return record


def _ncaamb_record(row: NCAAMBGame, teams: dict[int, TeamInfo]) -> dict[str, Any]:
    home = teams.get(row.home_team_id, UNKNOWN_TEAM)
    away = teams.get(row.away_team_id, UNKNOWN_TEAM)
    winner = teams.get(row.winner_id, UNKNOWN_TEAM) if row.winner_id else UNKNOWN_TEAM
    record = _columns(row)
    record.update(
        home_team=home.name,
        away_team=away.name,
        winner=winner.name,
        home_conference=home.conference or None,
        away_conference=away.conference or None,
    )
    return record


RECORD_BUILDERS: dict[Sport, Callable[[Any, dict[int, TeamInfo]], dict[str, Any]]] = {
    Sport.NFL: _nfl_record,
    Sport.NCAAF: _ncaaf_record,
    Sport.NCAAMB: _ncaamb_record,
}


class DatabaseRecordSource:
    """Reads raw game records from the record store via SQLAlchemy."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory
        self._teams: dict[int, TeamInfo] | None = None
        self._lock = threading.Lock()

    def _team_map(self, session: Session) -> dict[int, TeamInfo]:
        with self._lock:
            if self._teams is None:
                rows = session.execute(select(Team).order_by(Team.id)).scalars().all()
                self._teams = {
                    t.id: TeamInfo(
                        sport=t.sport,
                        name=t.name,
                        abbreviation=t.abbreviation,
                        conference=t.conference or "",
                    )
                    for t in rows
                }
                logger.info("Loaded team map", teams=len(self._teams))
            return self._teams

    def fetch_records(
        self,
        sport: Sport,
        team_id: int | None = None,
        season_range: tuple[int, int] | None = None,
    ) -> list[dict[str, Any]]:
        """
        Load raw records for one sport, most recent first.

        Args:
            sport: Sport table to read
            team_id: Only games involving this team
            season_range: Inclusive (start, end) seasons

        Returns:
            Raw records in the sport's naming convention
        """
        sport = Sport(sport)
        model = GAME_MODELS[sport]
        build = RECORD_BUILDERS[sport]

        stmt = select(model).order_by(model.game_date.desc())
        if team_id is not None:
            stmt = stmt.where(
                or_(model.home_team_id == team_id, model.away_team_id == team_id)
            )
        if season_range:
            stmt = stmt.where(model.season.between(season_range[0], season_range[1]))

        try:
            with self.session_factory() as session:
                teams = self._team_map(session)
                rows = session.execute(stmt).scalars().all()
                return [build(row, teams) for row in rows]
        except SQLAlchemyError as e:
            logger.error("Failed to load games", sport=sport.value, error=str(e))
            raise RecordSourceUnavailableError(
                f"Could not load {sport.value} games: {e}"
            ) from e

    def resolve_team_id(self, team_name: str, sport: Sport | None = None) -> int | None:
        """Exact name match, then partial match, then a case-insensitive DB lookup."""
        lower = team_name.lower()
        try:
            with self.session_factory() as session:
                teams = self._team_map(session)
                if sport is not None:
                    teams = {
                        team_id: info
                        for team_id, info in teams.items()
                        if info.sport == Sport(sport).value
                    }

                for team_id, info in teams.items():
                    if info.name.lower() == lower:
                        return team_id
                for team_id, info in teams.items():
                    if lower in info.name.lower():
                        return team_id

                if sport is None:
                    return None
                # Teams added since the map was cached
                stmt = (
                    select(Team.id)
                    .where(Team.sport == Sport(sport).value)
                    .where(Team.name.ilike(f"%{team_name}%"))
                    .limit(1)
                )
                return session.execute(stmt).scalar()
        except SQLAlchemyError as e:
            logger.error("Failed to resolve team", team=team_name, error=str(e))
            raise RecordSourceUnavailableError(f"Could not resolve team {team_name!r}: {e}") from e

    def invalidate(self) -> None:
        with self._lock:
            self._teams = None

