"""Summary statistics over an oriented set of games."""

import math
from collections.abc import Sequence
from dataclasses import dataclass, field

from trendline.services.trends.game import Game, OUResult, SpreadResult
from trendline.services.trends.perspective import Perspective, orient_game


@dataclass
class SeasonBreakdown:
    season: int
    games: int = 0
    wins: int = 0
    losses: int = 0
    ats_covered: int = 0
    ats_lost: int = 0


@dataclass
class TrendSummary:
    """Aggregate record for a query. Percentages are 0-100 and exclude pushes/ties."""

    total_games: int = 0

    # Win/Loss
    wins: int = 0
    losses: int = 0
    win_pct: float = 0

    # ATS
    ats_covered: int = 0
    ats_lost: int = 0
    ats_push: int = 0
    ats_pct: float = 0
    ats_record: str = "0-0"  # "45-32-2"

    # Over/Under
    overs: int = 0
    unders: int = 0
    ou_push: int = 0
    over_pct: float = 0
    ou_record: str = "0-0"

    # Scoring, from the perspective side
    avg_points_for: float = 0
    avg_points_against: float = 0
    avg_total_points: float = 0
    avg_margin: float = 0

    avg_spread: float | None = None
    avg_over_under: float | None = None

    by_season_breakdown: list[SeasonBreakdown] = field(default_factory=list)


def round_half_up(value: float, decimals: int = 1) -> float:
    """Round halves toward +infinity (2.25 -> 2.3, -2.25 -> -2.2)."""
    factor = 10**decimals
    return math.floor(value * factor + 0.5) / factor


def format_record(wins: int, losses: int, pushes: int) -> str:
    """``"45-32-2"``; the push component only appears when pushes > 0."""
    if pushes > 0:
        return f"{wins}-{losses}-{pushes}"
    return f"{wins}-{losses}"


def _pct(part: int, whole: int) -> float:
    return round_half_up(part / whole * 100) if whole > 0 else 0


def empty_trend_summary() -> TrendSummary:
    return TrendSummary()


def compute_summary(
    games: Sequence[Game],
    perspective: Perspective,
    team: str | None = None,
) -> TrendSummary:
    """
    Compute summary statistics for games oriented by ``perspective``.

    Each game is oriented once, then aggregated into W/L, ATS, O/U, scoring
    averages, average lines and a per-season breakdown.

    Args:
        games: Games to summarize
        perspective: How to orient each game
        team: Required when perspective is "team" or "opponent"

    Returns:
        TrendSummary (all zeros for an empty input)
    """
    if not games:
        return empty_trend_summary()

    oriented = [orient_game(g, perspective, team) for g in games]
    n = len(oriented)

    # Ties count as neither
    wins = sum(1 for o in oriented if o.is_win)
    losses = sum(1 for o in oriented if o.margin < 0)

    ats_covered = sum(1 for o in oriented if o.ats_result == SpreadResult.COVERED)
    ats_lost = sum(1 for o in oriented if o.ats_result == SpreadResult.LOST)
    ats_push = sum(1 for o in oriented if o.ats_result == SpreadResult.PUSH)

    # O/U is the same from either side
    overs = sum(1 for o in oriented if o.game.ou_result == OUResult.OVER)
    unders = sum(1 for o in oriented if o.game.ou_result == OUResult.UNDER)
    ou_push = sum(1 for o in oriented if o.game.ou_result == OUResult.PUSH)

    spreads = [o.perspective_spread for o in oriented if o.perspective_spread is not None]
    lines = [o.game.over_under for o in oriented if o.game.over_under is not None]

    seasons: dict[int, SeasonBreakdown] = {}
    for o in oriented:
        sb = seasons.setdefault(o.game.season, SeasonBreakdown(season=o.game.season))
        sb.games += 1
        if o.is_win:
            sb.wins += 1
        elif o.margin < 0:
            sb.losses += 1
        if o.ats_result == SpreadResult.COVERED:
            sb.ats_covered += 1
        elif o.ats_result == SpreadResult.LOST:
            sb.ats_lost += 1

    return TrendSummary(
        total_games=n,
        wins=wins,
        losses=losses,
        win_pct=_pct(wins, wins + losses),
        ats_covered=ats_covered,
        ats_lost=ats_lost,
        ats_push=ats_push,
        ats_pct=_pct(ats_covered, ats_covered + ats_lost),
        ats_record=format_record(ats_covered, ats_lost, ats_push),
        overs=overs,
        unders=unders,
        ou_push=ou_push,
        over_pct=_pct(overs, overs + unders),
        ou_record=format_record(overs, unders, ou_push),
        avg_points_for=round_half_up(sum(o.points_for for o in oriented) / n),
        avg_points_against=round_half_up(sum(o.points_against for o in oriented) / n),
        avg_total_points=round_half_up(sum(o.game.total_points for o in oriented) / n),
        avg_margin=round_half_up(sum(o.margin for o in oriented) / n),
        avg_spread=round_half_up(sum(spreads) / len(spreads)) if spreads else None,
        avg_over_under=round_half_up(sum(lines) / len(lines)) if lines else None,
        by_season_breakdown=[seasons[s] for s in sorted(seasons)],
    )
