"""Perspective system: which side of each game the statistics describe.

The spread is stored from the home team's perspective (negative = home
favored) and ``score_difference`` is home minus away, so every side-dependent
number is re-derived here for the chosen side.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

import structlog

from trendline.services.trends.game import Game, OUResult, Side, SpreadResult

logger = structlog.get_logger()


class Perspective(str, Enum):
    """How results are oriented.

    ``favorite``/``underdog`` require a spread; ``team``/``opponent`` require
    a team name on the query.
    """

    HOME = "home"
    AWAY = "away"
    FAVORITE = "favorite"
    UNDERDOG = "underdog"
    TEAM = "team"
    OPPONENT = "opponent"


# Vendor name variants: NFL keeps *_team_original, NCAAF *_team, NCAAMB *_team_raw
HOME_NAME_KEYS = ("home_team_original", "home_team", "home_team_raw")
AWAY_NAME_KEYS = ("away_team_original", "away_team", "away_team_raw")


@dataclass(frozen=True)
class OrientedGame:
    """A game seen from one side."""

    game: Game
    points_for: int
    points_against: int
    margin: int  # positive = this side won
    is_win: bool
    ats_result: SpreadResult | None
    perspective_spread: float | None  # negative = this side was favored


def _raw_names(game: Game, keys: tuple[str, ...]) -> list[str]:
    return [str(game.raw[key]).lower() for key in keys if game.raw.get(key)]


def team_matches(game: Game, team_name: str) -> Side | None:
    """Case-insensitive team match.

    Canonical names first, then raw name variants, then substring matches.
    """
    target = team_name.lower()
    home = game.home_team.lower()
    away = game.away_team.lower()

    if home == target:
        return "home"
    if away == target:
        return "away"

    raw_home = _raw_names(game, HOME_NAME_KEYS)
    raw_away = _raw_names(game, AWAY_NAME_KEYS)

    if target in raw_home:
        return "home"
    if target in raw_away:
        return "away"

    if target in home or any(target in name for name in raw_home):
        return "home"
    if target in away or any(target in name for name in raw_away):
        return "away"

    return None


def is_home_favorite(game: Game) -> bool | None:
    """Home is favored when spread < 0. A pick'em (0) counts as home favored."""
    if game.spread is None:
        return None
    return game.spread <= 0


def compute_ats_for_side(game: Game, side: Side) -> SpreadResult | None:
    """ATS result for one side: ``adjusted = score_difference + spread``.

    Home covers when adjusted > 0, away covers when adjusted < 0, 0 is a push.

    Home -7, final 24-20: adjusted = 4 - 7 = -3, away covered.
    Home -7, final 28-20: adjusted = 8 - 7 = 1, home covered.
    """
    if game.spread is None:
        return None

    adjusted_margin = game.score_difference + game.spread

    if side == "home":
        if adjusted_margin > 0:
            return SpreadResult.COVERED
        if adjusted_margin < 0:
            return SpreadResult.LOST
        return SpreadResult.PUSH

    if adjusted_margin < 0:
        return SpreadResult.COVERED
    if adjusted_margin > 0:
        return SpreadResult.LOST
    return SpreadResult.PUSH


def compute_ou_result(total_points: int, over_under: float | None) -> OUResult | None:
    """Over/under category for a total; side independent."""
    if over_under is None:
        return None
    if total_points > over_under:
        return OUResult.OVER
    if total_points < over_under:
        return OUResult.UNDER
    return OUResult.PUSH


def apply_perspective(
    games: Iterable[Game],
    perspective: Perspective,
    team: str | None = None,
) -> list[Game]:
    """Keep only games the perspective can describe.

    home/away keep everything, favorite/underdog need a spread, team/opponent
    need ``team`` to match one side.
    """
    perspective = Perspective(perspective)

    if perspective in (Perspective.FAVORITE, Perspective.UNDERDOG):
        return [g for g in games if g.spread is not None]

    if perspective in (Perspective.TEAM, Perspective.OPPONENT):
        if not team:
            logger.warning(
                "Perspective requires a team name", perspective=perspective.value
            )
            return list(games)
        return [g for g in games if team_matches(g, team) is not None]

    return list(games)


def resolve_side(game: Game, perspective: Perspective, team: str | None = None) -> Side:
    perspective = Perspective(perspective)

    if perspective == Perspective.HOME:
        return "home"
    if perspective == Perspective.AWAY:
        return "away"
    if perspective == Perspective.FAVORITE:
        return "home" if is_home_favorite(game) is True else "away"
    if perspective == Perspective.UNDERDOG:
        return "away" if is_home_favorite(game) is True else "home"
    if perspective == Perspective.TEAM:
        if not team:
            return "home"
        return "away" if team_matches(game, team) == "away" else "home"

    # opponent
    if not team:
        return "away"
    return "away" if team_matches(game, team) == "home" else "home"


def orient_game(game: Game, perspective: Perspective, team: str | None = None) -> OrientedGame:
    side = resolve_side(game, perspective, team)

    if side == "home":
        points_for, points_against = game.home_score, game.away_score
    else:
        points_for, points_against = game.away_score, game.home_score
    margin = points_for - points_against

    perspective_spread = None
    if game.spread is not None:
        perspective_spread = game.spread if side == "home" else -game.spread

    return OrientedGame(
        game=game,
        points_for=points_for,
        points_against=points_against,
        margin=margin,
        is_win=margin > 0,
        ats_result=compute_ats_for_side(game, side),
        perspective_spread=perspective_spread,
    )
