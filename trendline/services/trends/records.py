"""Per-sport raw record schemas.

Each sport keeps its own field naming convention. Optional fields default to
``None`` so that a missing value is never mistaken for a real one.
"""

from datetime import date, datetime
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict, field_validator

from trendline.services.trends.game import OUResult, SpreadResult

logger = structlog.get_logger()


def _parse_outcome(value: Any, enum_cls: type) -> Any:
    if value is None or isinstance(value, enum_cls):
        return value
    text = str(value).strip().upper()
    if not text:
        return None
    try:
        return enum_cls(text)
    except ValueError:
        logger.warning("Unknown outcome value", value=value, outcome=enum_cls.__name__)
        return None


class BaseGameRecord(BaseModel):
    """Fields every provider supplies under the same name."""

    # Weeks arrive as 9 or "WildCard" depending on the provider
    model_config = ConfigDict(extra="ignore", frozen=True, coerce_numbers_to_str=True)

    season: int
    game_date: date

    home_score: int | None = None
    away_score: int | None = None
    score_difference: int | None = None

    spread: float | None = None
    over_under: float | None = None
    spread_result: SpreadResult | None = None
    ou_result: OUResult | None = None

    is_neutral_site: bool | None = None

    @field_validator("game_date", mode="before")
    @classmethod
    def _date_only(cls, value: Any) -> Any:
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, str) and len(value) > 10:
            return value[:10]
        return value

    @field_validator("spread_result", mode="before")
    @classmethod
    def _spread_result(cls, value: Any) -> Any:
        return _parse_outcome(value, SpreadResult)

    @field_validator("ou_result", mode="before")
    @classmethod
    def _ou_result(cls, value: Any) -> Any:
        return _parse_outcome(value, OUResult)


class NFLGameRecord(BaseGameRecord):
    """NFL record: canonical names carry a ``_canonical`` suffix."""

    home_team_canonical: str
    away_team_canonical: str
    winner_canonical: str | None = None
    home_team_original: str | None = None
    away_team_original: str | None = None
    home_team_abbr: str | None = None
    away_team_abbr: str | None = None

    week: str | None = None
    day_of_week: str | None = None
    is_playoff: bool | None = None
    is_primetime: bool | None = None
    primetime_slot: str | None = None

    weather_category: str | None = None
    temperature: float | None = None
    wind_mph: float | None = None

    # Enrichments
    home_rest_days: int | None = None
    away_rest_days: int | None = None
    rest_advantage: int | None = None
    home_is_bye_week: bool | None = None
    away_is_bye_week: bool | None = None
    is_short_week: bool | None = None


class NCAAFGameRecord(BaseGameRecord):
    home_team: str
    away_team: str
    winner: str | None = None
    home_conference: str | None = None
    away_conference: str | None = None

    home_rank: int | None = None
    away_rank: int | None = None

    week: str | None = None
    day_of_week: str | None = None
    is_conference_game: bool | None = None
    is_playoff: bool | None = None
    is_bowl_game: bool | None = None
    bowl_name: str | None = None
    is_primetime: bool | None = None
    primetime_slot: str | None = None

    weather_category: str | None = None
    temperature: float | None = None
    wind_mph: float | None = None

    home_rest_days: int | None = None
    away_rest_days: int | None = None
    rest_advantage: int | None = None
    home_is_bye_week: bool | None = None
    away_is_bye_week: bool | None = None
    is_short_week: bool | None = None


class NCAAMBGameRecord(BaseGameRecord):
    """NCAAMB record: vendor spellings live in ``*_team_raw``."""

    home_team: str
    away_team: str
    home_team_raw: str | None = None
    away_team_raw: str | None = None
    winner: str | None = None
    home_conference: str | None = None
    away_conference: str | None = None

    home_rank: int | None = None
    away_rank: int | None = None
    home_kenpom_rank: int | None = None
    away_kenpom_rank: int | None = None

    is_conference_game: bool | None = None
    is_tournament: bool | None = None
    is_nit: bool | None = None
    is_conference_tourney: bool | None = None
    overtimes: int | None = None
    home_seed: int | None = None
    away_seed: int | None = None

    home_adj_em: float | None = None
    away_adj_em: float | None = None
    home_adj_oe: float | None = None
    away_adj_oe: float | None = None
    home_adj_de: float | None = None
    away_adj_de: float | None = None
    home_adj_tempo: float | None = None
    away_adj_tempo: float | None = None
    fm_home_pred: float | None = None
    fm_away_pred: float | None = None
    fm_home_win_prob: float | None = None
    fm_thrill_score: float | None = None

    home_rest_days: int | None = None
    away_rest_days: int | None = None
    rest_advantage: int | None = None
    home_is_back_to_back: bool | None = None
    away_is_back_to_back: bool | None = None

    expected_pace: float | None = None
    pace_mismatch: float | None = None
    efficiency_gap: float | None = None
    kenpom_pred_margin: float | None = None
    is_kenpom_upset: bool | None = None
    game_style: str | None = None
