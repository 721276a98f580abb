"""Trend query service: cached execution for API routes and batch jobs."""

import structlog

from trendline.services.trends.cache import GameCache
from trendline.services.trends.game import ALL_SPORTS, Sport
from trendline.services.trends.loader import RecordSource
from trendline.services.trends.normalize import normalize_records
from trendline.services.trends.query import TrendQuery, TrendResult, execute_trend_query

logger = structlog.get_logger()


class TrendService:
    """Runs trend queries against cached games from a record source."""

    def __init__(self, source: RecordSource, cache: GameCache | None = None):
        self.source = source
        self.cache = cache or GameCache(source)

    def execute(self, query: TrendQuery) -> TrendResult:
        """
        Execute a trend query using cached game data.

        Single-sport queries for a named team skip the cache and load only
        that team's games (hundreds of rows instead of tens of thousands).
        When the team cannot be resolved to an id, the full cache is used so
        partial name matching still applies.
        """
        if query.team and query.sport != ALL_SPORTS:
            sport = Sport(query.sport)
            team_id = self.source.resolve_team_id(query.team, sport)
            if team_id is not None:
                records = self.source.fetch_records(
                    sport, team_id=team_id, season_range=query.season_range
                )
                games = normalize_records(sport, records)
                logger.debug(
                    "Loaded team games directly",
                    sport=sport.value,
                    team=query.team,
                    games=len(games),
                )
                return execute_trend_query(query, games)

        if query.sport == ALL_SPORTS:
            games = self.cache.get_all()
        else:
            games = self.cache.get(Sport(query.sport))
        return execute_trend_query(query, games)

    def warm(self) -> int:
        """Load every sport into the cache; returns the number of games."""
        return len(self.cache.get_all())

    def invalidate(self) -> None:
        self.cache.invalidate()
        self.source.invalidate()
