"""Composable filter predicates for trend queries."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

import structlog

from trendline.services.trends.fields import resolve_field
from trendline.services.trends.game import Game

logger = structlog.get_logger()


class FilterOperator(str, Enum):
    EQ = "eq"
    NEQ = "neq"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    IN = "in"
    NOT_IN = "not_in"
    CONTAINS = "contains"
    BETWEEN = "between"


@dataclass(frozen=True)
class TrendFilter:
    """One predicate: any Game field, raw record key, or computed field like ``month``."""

    field: str
    operator: str
    value: Any = None


def _same_value(a: Any, b: Any) -> bool:
    # Booleans never equal numbers (True != 1 here)
    if isinstance(a, bool) != isinstance(b, bool):
        return False
    return a == b


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _comparable(field_value: Any, reference: Any) -> Any:
    """Numeric strings such as a week of ``"9"`` compare as numbers against a number.

    Returns ``None`` for a non-numeric string (``"WildCard"``), which never matches.
    """
    if isinstance(field_value, str) and _is_number(reference):
        try:
            return float(field_value)
        except ValueError:
            return None
    return field_value


def _contains_value(options: Sequence[Any], value: Any) -> bool:
    if isinstance(value, str):
        lowered = value.lower()
        return any(isinstance(v, str) and v.lower() == lowered for v in options)
    return any(_same_value(value, v) for v in options)


def evaluate_operator(field_value: Any, operator: str, filter_value: Any) -> bool:
    """Evaluate a single filter operator against a resolved field value.

    A missing field value only satisfies ``eq None`` and ``neq <non-None>``.
    String comparisons are case-insensitive. Unknown operators never match.
    Ordering operators raise ``TypeError`` when the kinds cannot be compared.
    """
    if field_value is None:
        if operator == FilterOperator.EQ:
            return filter_value is None
        if operator == FilterOperator.NEQ:
            return filter_value is not None
        return False

    if operator == FilterOperator.EQ:
        if isinstance(field_value, str) and isinstance(filter_value, str):
            return field_value.lower() == filter_value.lower()
        return _same_value(field_value, filter_value)

    if operator == FilterOperator.NEQ:
        if isinstance(field_value, str) and isinstance(filter_value, str):
            return field_value.lower() != filter_value.lower()
        return not _same_value(field_value, filter_value)

    if operator in (
        FilterOperator.GT,
        FilterOperator.GTE,
        FilterOperator.LT,
        FilterOperator.LTE,
    ):
        value = _comparable(field_value, filter_value)
        if value is None:
            return False
        if operator == FilterOperator.GT:
            return value > filter_value
        if operator == FilterOperator.GTE:
            return value >= filter_value
        if operator == FilterOperator.LT:
            return value < filter_value
        return value <= filter_value

    if operator == FilterOperator.IN:
        return _contains_value(filter_value, field_value)
    if operator == FilterOperator.NOT_IN:
        return not _contains_value(filter_value, field_value)

    if operator == FilterOperator.CONTAINS:
        if isinstance(field_value, str) and isinstance(filter_value, str):
            return filter_value.lower() in field_value.lower()
        return False

    if operator == FilterOperator.BETWEEN:
        low, high = filter_value
        value = _comparable(field_value, low)
        if value is None:
            return False
        return low <= value <= high

    logger.warning("Unknown filter operator", operator=str(operator))
    return False


def apply_filter(games: Iterable[Game], trend_filter: TrendFilter) -> list[Game]:
    return [
        game
        for game in games
        if evaluate_operator(
            resolve_field(game, trend_filter.field),
            trend_filter.operator,
            trend_filter.value,
        )
    ]


def apply_all_filters(games: Iterable[Game], filters: Iterable[TrendFilter]) -> list[Game]:
    """Apply filters in order; all must match."""
    result = list(games)
    for trend_filter in filters:
        result = apply_filter(result, trend_filter)
    return result


# --- Convenience builders ---


def month_filter(month: int) -> TrendFilter:
    """Games played in ``month`` (1-12, January = 1)."""
    return TrendFilter(field="month", operator=FilterOperator.EQ, value=month)


def spread_filter(operator: str, value: float | Sequence[float]) -> TrendFilter:
    """Filter on the home spread, e.g. ``spread_filter("lte", -7)`` for home favored by 7+."""
    return TrendFilter(field="spread", operator=operator, value=value)


def season_range_filter(start_season: int, end_season: int) -> TrendFilter:
    return TrendFilter(
        field="season",
        operator=FilterOperator.BETWEEN,
        value=(start_season, end_season),
    )


def day_of_week_filter(days: str | Sequence[str]) -> TrendFilter:
    """Single day (``"Sun"``) or any of several (``["Sun", "Mon"]``)."""
    if isinstance(days, str):
        return TrendFilter(field="day_of_week", operator=FilterOperator.EQ, value=days)
    return TrendFilter(field="day_of_week", operator=FilterOperator.IN, value=list(days))


def conference_filter(conference: str) -> TrendFilter:
    """Match the home team's conference. Combine with team perspective for broader queries."""
    return TrendFilter(field="home_conference", operator=FilterOperator.EQ, value=conference)
