"""In-memory game cache backing repeated trend queries.

Each sport is loaded from the record source on first access and kept until
``invalidate()``. Population happens under a lock, and a sport's games are
published as a complete tuple, so readers never see a half-loaded sport.
"""

import threading
import time

import structlog

from trendline.services.trends.game import Game, Sport
from trendline.services.trends.loader import RecordSource
from trendline.services.trends.normalize import normalize_records

logger = structlog.get_logger()


class GameCache:
    """Lazily populated per-sport cache of normalized games."""

    def __init__(self, source: RecordSource):
        self.source = source
        self._games: dict[Sport, tuple[Game, ...]] = {}
        self._lock = threading.Lock()

    def _load(self, sport: Sport) -> tuple[Game, ...]:
        start = time.perf_counter()
        records = self.source.fetch_records(sport)
        games = tuple(normalize_records(sport, records))
        duration_ms = round((time.perf_counter() - start) * 1000)

        if not games:
            logger.warning("No games loaded for sport", sport=sport.value)
        else:
            logger.info(
                "Loaded games into cache",
                sport=sport.value,
                games=len(games),
                duration_ms=duration_ms,
            )
        return games

    def get(self, sport: Sport) -> tuple[Game, ...]:
        """Games for one sport, loading them on first access."""
        sport = Sport(sport)
        games = self._games.get(sport)
        if games is not None:
            return games

        with self._lock:
            # Another caller may have finished the load while we waited
            games = self._games.get(sport)
            if games is None:
                games = self._load(sport)
                self._games[sport] = games
            return games

    def get_all(self) -> list[Game]:
        """Games for every sport, in NFL, NCAAF, NCAAMB order."""
        games: list[Game] = []
        for sport in Sport:
            games.extend(self.get(sport))
        return games

    def is_loaded(self, sport: Sport) -> bool:
        return Sport(sport) in self._games

    def invalidate(self) -> None:
        """Drop every cached sport; the next access reloads."""
        with self._lock:
            self._games = {}
        logger.info("Game cache invalidated")
