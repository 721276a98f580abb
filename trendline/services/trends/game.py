"""Unified game model shared by every sport.

Spread convention: negative = home favored (e.g. -7 means home is a 7-point
favorite). ``spread_result`` and ``ou_result`` are precomputed upstream from
the home team's perspective only.
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from types import MappingProxyType
from typing import Any, Literal, Mapping


class Sport(str, Enum):
    NFL = "NFL"
    NCAAF = "NCAAF"
    NCAAMB = "NCAAMB"


ALL_SPORTS = "ALL"
SportOrAll = Sport | Literal["ALL"]


class SpreadResult(str, Enum):
    COVERED = "COVERED"
    LOST = "LOST"
    PUSH = "PUSH"


class OUResult(str, Enum):
    OVER = "OVER"
    UNDER = "UNDER"
    PUSH = "PUSH"


Side = Literal["home", "away"]


@dataclass(frozen=True)
class Game:
    """A normalized game. Fields a sport does not track are ``None``."""

    # Identity
    sport: Sport
    season: int
    game_date: str  # YYYY-MM-DD

    # Teams (canonical names)
    home_team: str
    away_team: str

    # Scores
    home_score: int
    away_score: int
    score_difference: int  # home - away
    winner: str

    # Rankings
    home_rank: int | None = None  # AP poll
    away_rank: int | None = None
    home_kenpom_rank: int | None = None
    away_kenpom_rank: int | None = None

    # Betting
    spread: float | None = None
    over_under: float | None = None
    spread_result: SpreadResult | None = None
    ou_result: OUResult | None = None
    total_points: int = 0

    # Context
    is_conference_game: bool | None = None
    is_playoff: bool | None = None  # NFL playoff, CFP, or NCAA Tournament
    is_neutral_site: bool | None = None

    # Scheduling / weather (NFL, NCAAF)
    week: str | None = None
    day_of_week: str | None = None
    is_primetime: bool | None = None
    primetime_slot: str | None = None
    weather_category: str | None = None
    temperature: float | None = None
    wind_mph: float | None = None

    # NCAAF
    is_bowl_game: bool | None = None
    bowl_name: str | None = None

    # NCAAMB
    is_ncaat: bool | None = None
    is_nit: bool | None = None
    is_conf_tourney: bool | None = None
    overtimes: int | None = None
    home_seed: int | None = None
    away_seed: int | None = None

    # KenPom efficiency (NCAAMB)
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

    # Rest enrichments
    home_rest_days: int | None = None
    away_rest_days: int | None = None
    rest_advantage: int | None = None
    home_is_bye_week: bool | None = None
    away_is_bye_week: bool | None = None
    is_short_week: bool | None = None
    home_is_back_to_back: bool | None = None
    away_is_back_to_back: bool | None = None

    # Conferences (NCAAF / NCAAMB)
    home_conference: str | None = None
    away_conference: str | None = None

    # Matchup enrichments (NCAAMB)
    expected_pace: float | None = None
    pace_mismatch: float | None = None
    efficiency_gap: float | None = None
    kenpom_pred_margin: float | None = None
    is_kenpom_upset: bool | None = None
    game_style: str | None = None

    # Original record for sport-specific fields
    raw: Mapping[str, Any] = field(
        default_factory=lambda: MappingProxyType({}), compare=False, repr=False
    )

    def to_dict(self, include_raw: bool = False) -> dict[str, Any]:
        """Serialize to a plain dict, optionally with the extension bag."""
        data = {
            f.name: getattr(self, f.name) for f in fields(self) if f.name != "raw"
        }
        if include_raw:
            data["raw"] = dict(self.raw)
        return data


# Promoted attributes addressable by filter field name
KNOWN_FIELDS: frozenset[str] = frozenset(
    f.name for f in fields(Game) if f.name != "raw"
)
