"""Resolve filter field names against a Game.

Resolution order, first hit wins:

1. Computed date fields (``month``, ``year``, ``month_name``)
2. Dot paths into the raw record (``raw.weather.temp``, ``weather.temp``;
   numeric segments index lists, ``scores.0.q``)
3. Promoted Game attributes (``KNOWN_FIELDS``)
4. Bare name lookup in the raw record

Anything unresolvable resolves to ``None``.
"""

from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Any

from trendline.services.trends.game import KNOWN_FIELDS, Game

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

COMPUTED_FIELDS = frozenset({"month", "year", "month_name"})

RAW_PREFIX = "raw"


def _reference_datetime(game_date: str) -> datetime | None:
    # Fixed noon reference: month/year never shift across a timezone boundary
    if not game_date:
        return None
    return datetime.fromisoformat(f"{game_date[:10]}T12:00:00")


def _computed_field(game: Game, field: str) -> Any:
    moment = _reference_datetime(game.game_date)
    if moment is None:
        return None
    if field == "month":
        return moment.month
    if field == "year":
        return moment.year
    return MONTH_NAMES[moment.month - 1]


def _walk_raw(raw: Mapping[str, Any], parts: list[str]) -> Any:
    current: Any = raw
    for part in parts:
        if isinstance(current, Mapping):
            current = current.get(part)
        elif isinstance(current, Sequence) and not isinstance(current, str) and part.isdigit():
            index = int(part)
            current = current[index] if index < len(current) else None
        else:
            return None
        if current is None:
            return None
    return current


def resolve_field(game: Game, field: str) -> Any:
    """Return the value of ``field`` for ``game``, or ``None``."""
    if field in COMPUTED_FIELDS:
        return _computed_field(game, field)

    if "." in field:
        parts = field.split(".")
        if parts[0] == RAW_PREFIX:
            parts = parts[1:]
        return _walk_raw(game.raw, parts)

    if field in KNOWN_FIELDS:
        return getattr(game, field)

    return game.raw.get(field)
