"""Trend query orchestration.

Pipeline, in order:

1. Filter by sport (when the pool spans sports and sport != ALL)
2. Filter by inclusive season range
3. Filter by team
4. Apply user filters (AND)
5. Apply the perspective pre-filter
6. Sort (``order_by`` or most recent first)
7. Apply limit
8. Compute summary
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from functools import cmp_to_key
from typing import Any, Literal

from trendline.services.trends.fields import resolve_field
from trendline.services.trends.filters import TrendFilter, apply_all_filters
from trendline.services.trends.game import ALL_SPORTS, Game, SportOrAll
from trendline.services.trends.perspective import Perspective, apply_perspective, team_matches
from trendline.services.trends.summary import TrendSummary, compute_summary


@dataclass(frozen=True)
class OrderBy:
    field: str
    direction: Literal["asc", "desc"] = "desc"


@dataclass
class TrendQuery:
    """A composable trend query.

    Example, home favorites of 7+ in November since 2018::

        TrendQuery(
            sport=Sport.NFL,
            perspective=Perspective.FAVORITE,
            season_range=(2018, 2025),
            filters=[spread_filter("lte", -7), month_filter(11)],
        )
    """

    sport: SportOrAll
    team: str | None = None
    perspective: Perspective = Perspective.HOME
    filters: list[TrendFilter] = field(default_factory=list)
    season_range: tuple[int, int] | None = None  # inclusive
    limit: int | None = None
    order_by: OrderBy | None = None


@dataclass
class TrendResult:
    query: TrendQuery
    games: list[Game]
    summary: TrendSummary
    computed_at: str


def build_query(sport: SportOrAll, **options: Any) -> TrendQuery:
    """Build a TrendQuery with defaults applied."""
    options.setdefault("filters", [])
    return TrendQuery(sport=sport, **options)


def _compare_values(a: Any, b: Any) -> int:
    # Nulls sort to the end in both directions; handled by the caller
    if isinstance(a, str) and isinstance(b, str):
        return (a > b) - (a < b)
    try:
        diff = a - b
    except TypeError:
        return 0
    return (diff > 0) - (diff < 0)


def sort_games(games: Sequence[Game], order_by: OrderBy | None) -> list[Game]:
    """Stable sort; defaults to most recent ``game_date`` first."""
    if order_by is None:
        return sorted(games, key=lambda g: g.game_date, reverse=True)

    sign = 1 if order_by.direction == "asc" else -1

    def compare(a: Game, b: Game) -> int:
        a_val = resolve_field(a, order_by.field)
        b_val = resolve_field(b, order_by.field)
        if a_val is None and b_val is None:
            return 0
        if a_val is None:
            return 1
        if b_val is None:
            return -1
        return sign * _compare_values(a_val, b_val)

    return sorted(games, key=cmp_to_key(compare))


def execute_trend_query(query: TrendQuery, games: Iterable[Game]) -> TrendResult:
    """
    Execute a trend query against pre-loaded games.

    Args:
        query: The trend query to execute
        games: Game pool (one sport or all sports)

    Returns:
        TrendResult with matching games and summary statistics
    """
    pool = list(games)

    if query.sport != ALL_SPORTS:
        pool = [g for g in pool if g.sport == query.sport]

    if query.season_range:
        start_season, end_season = query.season_range
        pool = [g for g in pool if start_season <= g.season <= end_season]

    if query.team:
        pool = [g for g in pool if team_matches(g, query.team) is not None]

    pool = apply_all_filters(pool, query.filters)

    perspective = Perspective(query.perspective or Perspective.HOME)
    pool = apply_perspective(pool, perspective, query.team)

    pool = sort_games(pool, query.order_by)

    if query.limit and query.limit > 0:
        pool = pool[: query.limit]

    return TrendResult(
        query=query,
        games=pool,
        summary=compute_summary(pool, perspective, query.team),
        computed_at=datetime.now(timezone.utc).isoformat(),
    )
