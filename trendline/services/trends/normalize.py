"""Per-sport adapters from raw records to the unified Game model."""

from collections.abc import Callable, Iterable, Mapping
from types import MappingProxyType
from typing import Any

import structlog
from pydantic import ValidationError

from trendline.services.trends.game import Game, Sport
from trendline.services.trends.perspective import compute_ou_result
from trendline.services.trends.records import (
    BaseGameRecord,
    NCAAFGameRecord,
    NCAAMBGameRecord,
    NFLGameRecord,
)

logger = structlog.get_logger()


def _core_fields(record: BaseGameRecord, raw: Mapping[str, Any]) -> dict[str, Any]:
    """Fields every sport maps identically.

    Missing scores count as 0; that is the upstream convention for games
    without a final.
    """
    home_score = record.home_score or 0
    away_score = record.away_score or 0
    score_difference = record.score_difference
    if score_difference is None:
        score_difference = home_score - away_score

    ou_result = record.ou_result
    if ou_result is None and record.home_score is not None and record.away_score is not None:
        # Line without a graded outcome; grade it from the final
        ou_result = compute_ou_result(home_score + away_score, record.over_under)

    return {
        "season": record.season,
        "game_date": record.game_date.isoformat(),
        "home_score": home_score,
        "away_score": away_score,
        "score_difference": score_difference,
        "total_points": home_score + away_score,
        "spread": record.spread,
        "over_under": record.over_under,
        "spread_result": record.spread_result,
        "ou_result": ou_result,
        "is_neutral_site": record.is_neutral_site,
        "raw": MappingProxyType(dict(raw)),
    }


def normalize_nfl(raw: Mapping[str, Any]) -> Game:
    record = NFLGameRecord.model_validate(raw)
    return Game(
        sport=Sport.NFL,
        home_team=record.home_team_canonical,
        away_team=record.away_team_canonical,
        winner=record.winner_canonical or "",
        is_playoff=record.is_playoff,
        week=record.week,
        day_of_week=record.day_of_week,
        is_primetime=record.is_primetime,
        primetime_slot=record.primetime_slot,
        weather_category=record.weather_category,
        temperature=record.temperature,
        wind_mph=record.wind_mph,
        home_rest_days=record.home_rest_days,
        away_rest_days=record.away_rest_days,
        rest_advantage=record.rest_advantage,
        home_is_bye_week=record.home_is_bye_week,
        away_is_bye_week=record.away_is_bye_week,
        is_short_week=record.is_short_week,
        **_core_fields(record, raw),
    )


def normalize_ncaaf(raw: Mapping[str, Any]) -> Game:
    record = NCAAFGameRecord.model_validate(raw)
    return Game(
        sport=Sport.NCAAF,
        home_team=record.home_team,
        away_team=record.away_team,
        winner=record.winner or "",
        home_rank=record.home_rank,
        away_rank=record.away_rank,
        is_conference_game=record.is_conference_game,
        is_playoff=record.is_playoff,
        week=record.week,
        day_of_week=record.day_of_week,
        is_primetime=record.is_primetime,
        primetime_slot=record.primetime_slot,
        weather_category=record.weather_category,
        temperature=record.temperature,
        wind_mph=record.wind_mph,
        is_bowl_game=record.is_bowl_game,
        bowl_name=record.bowl_name,
        home_rest_days=record.home_rest_days,
        away_rest_days=record.away_rest_days,
        rest_advantage=record.rest_advantage,
        home_is_bye_week=record.home_is_bye_week,
        away_is_bye_week=record.away_is_bye_week,
        is_short_week=record.is_short_week,
        home_conference=record.home_conference,
        away_conference=record.away_conference,
        **_core_fields(record, raw),
    )


def normalize_ncaamb(raw: Mapping[str, Any]) -> Game:
    record = NCAAMBGameRecord.model_validate(raw)
    return Game(
        sport=Sport.NCAAMB,
        home_team=record.home_team,
        away_team=record.away_team,
        winner=record.winner or "",
        home_rank=record.home_rank,
        away_rank=record.away_rank,
        home_kenpom_rank=record.home_kenpom_rank,
        away_kenpom_rank=record.away_kenpom_rank,
        is_conference_game=record.is_conference_game,
        # The NCAA Tournament is the NCAAMB postseason
        is_playoff=record.is_tournament,
        is_ncaat=record.is_tournament,
        is_nit=record.is_nit,
        is_conf_tourney=record.is_conference_tourney,
        overtimes=record.overtimes,
        home_seed=record.home_seed,
        away_seed=record.away_seed,
        home_adj_em=record.home_adj_em,
        away_adj_em=record.away_adj_em,
        home_adj_oe=record.home_adj_oe,
        away_adj_oe=record.away_adj_oe,
        home_adj_de=record.home_adj_de,
        away_adj_de=record.away_adj_de,
        home_adj_tempo=record.home_adj_tempo,
        away_adj_tempo=record.away_adj_tempo,
        fm_home_pred=record.fm_home_pred,
        fm_away_pred=record.fm_away_pred,
        fm_home_win_prob=record.fm_home_win_prob,
        fm_thrill_score=record.fm_thrill_score,
        home_rest_days=record.home_rest_days,
        away_rest_days=record.away_rest_days,
        rest_advantage=record.rest_advantage,
        home_is_back_to_back=record.home_is_back_to_back,
        away_is_back_to_back=record.away_is_back_to_back,
        home_conference=record.home_conference,
        away_conference=record.away_conference,
        expected_pace=record.expected_pace,
        pace_mismatch=record.pace_mismatch,
        efficiency_gap=record.efficiency_gap,
        kenpom_pred_margin=record.kenpom_pred_margin,
        is_kenpom_upset=record.is_kenpom_upset,
        game_style=record.game_style,
        **_core_fields(record, raw),
    )


NORMALIZERS: dict[Sport, Callable[[Mapping[str, Any]], Game]] = {
    Sport.NFL: normalize_nfl,
    Sport.NCAAF: normalize_ncaaf,
    Sport.NCAAMB: normalize_ncaamb,
}


def normalize_record(sport: Sport, raw: Mapping[str, Any]) -> Game:
    """Normalize one raw record. Raises ``ValidationError`` on a malformed record."""
    return NORMALIZERS[Sport(sport)](raw)


def normalize_records(sport: Sport, raws: Iterable[Mapping[str, Any]]) -> list[Game]:
    """Normalize a batch, skipping records that fail validation."""
    games = []
    skipped = 0
    for raw in raws:
        try:
            games.append(normalize_record(sport, raw))
        except ValidationError as e:
            skipped += 1
            logger.warning(
                "Failed to normalize game record",
                sport=Sport(sport).value,
                error=str(e),
                season=raw.get("season"),
                game_date=str(raw.get("game_date")),
            )
    if skipped:
        logger.info("Skipped malformed records", sport=Sport(sport).value, skipped=skipped)
    return games
