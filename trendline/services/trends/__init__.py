"""Composable trend query engine.

Normalizes NFL, NCAAF and NCAAMB records into one Game model and answers
win/loss, ATS and O/U trend questions under composable filters, oriented from
home/away/favorite/underdog/team/opponent perspectives.
"""

from trendline.services.trends.cache import GameCache
from trendline.services.trends.fields import resolve_field
from trendline.services.trends.filters import (
    FilterOperator,
    TrendFilter,
    apply_all_filters,
    apply_filter,
    conference_filter,
    day_of_week_filter,
    evaluate_operator,
    month_filter,
    season_range_filter,
    spread_filter,
)
from trendline.services.trends.game import ALL_SPORTS, Game, OUResult, Sport, SpreadResult
from trendline.services.trends.loader import (
    DatabaseRecordSource,
    RecordSource,
    RecordSourceUnavailableError,
)
from trendline.services.trends.normalize import normalize_record, normalize_records
from trendline.services.trends.perspective import (
    OrientedGame,
    Perspective,
    apply_perspective,
    compute_ats_for_side,
    compute_ou_result,
    is_home_favorite,
    orient_game,
    team_matches,
)
from trendline.services.trends.query import (
    OrderBy,
    TrendQuery,
    TrendResult,
    build_query,
    execute_trend_query,
)
from trendline.services.trends.service import TrendService
from trendline.services.trends.summary import SeasonBreakdown, TrendSummary, compute_summary

__all__ = [
    "ALL_SPORTS",
    "DatabaseRecordSource",
    "FilterOperator",
    "Game",
    "GameCache",
    "OUResult",
    "OrderBy",
    "OrientedGame",
    "Perspective",
    "RecordSource",
    "RecordSourceUnavailableError",
    "SeasonBreakdown",
    "Sport",
    "SpreadResult",
    "TrendFilter",
    "TrendQuery",
    "TrendResult",
    "TrendService",
    "TrendSummary",
    "apply_all_filters",
    "apply_filter",
    "apply_perspective",
    "build_query",
    "compute_ats_for_side",
    "compute_ou_result",
    "compute_summary",
    "conference_filter",
    "day_of_week_filter",
    "evaluate_operator",
    "execute_trend_query",
    "is_home_favorite",
    "month_filter",
    "normalize_record",
    "normalize_records",
    "orient_game",
    "resolve_field",
    "season_range_filter",
    "spread_filter",
    "team_matches",
]
