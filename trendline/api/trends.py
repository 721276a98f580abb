"""Trend query API endpoints.

POST /trends runs a full query from a JSON body; GET /trends runs a simple
query from URL params. Game lists in responses are capped and omit the raw
record.
"""

import time
from dataclasses import asdict
from functools import lru_cache

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.concurrency import run_in_threadpool

from trendline.config import settings
from trendline.database import get_session_maker
from trendline.schemas.trends import TrendQueryRequest
from trendline.services.trends import (
    DatabaseRecordSource,
    Perspective,
    RecordSourceUnavailableError,
    Sport,
    TrendQuery,
    TrendResult,
    TrendService,
    build_query,
)
from trendline.services.trends.game import ALL_SPORTS

logger = structlog.get_logger()

router = APIRouter()

VALID_SPORTS = [s.value for s in Sport] + [ALL_SPORTS]
VALID_PERSPECTIVES = [p.value for p in Perspective]


@lru_cache
def get_trend_service() -> TrendService:
    """Process-wide trend service; its cache lives until explicitly invalidated."""
    return TrendService(DatabaseRecordSource(get_session_maker()))


def _format_response(result: TrendResult, duration_ms: int) -> dict:
    games = result.games[: settings.trend_max_response_games]
    return {
        "success": True,
        "data": {
            "query": asdict(result.query),
            "summary": asdict(result.summary),
            "games": [g.to_dict() for g in games],
            "game_count": len(result.games),
            "computed_at": result.computed_at,
        },
        "meta": {
            "duration_ms": duration_ms,
            "sport": result.query.sport,
            "games_searched": result.summary.total_games,
        },
    }


async def _run(service: TrendService, query: TrendQuery) -> dict:
    sport = query.sport.value if isinstance(query.sport, Sport) else query.sport
    start = time.perf_counter()
    try:
        result = await run_in_threadpool(service.execute, query)
    except RecordSourceUnavailableError as e:
        logger.error("Trend query failed", sport=sport, error=str(e))
        raise HTTPException(status_code=503, detail=str(e))
    except (TypeError, ValueError) as e:
        # Filter value cannot be compared with the field it targets
        logger.warning("Invalid trend filter", sport=sport, error=str(e))
        raise HTTPException(status_code=400, detail=f"Invalid filter: {e}")

    duration_ms = round((time.perf_counter() - start) * 1000)
    logger.info(
        "Trend query executed",
        sport=sport,
        perspective=Perspective(query.perspective).value,
        filters=len(query.filters),
        games=result.summary.total_games,
        duration_ms=duration_ms,
    )
    return _format_response(result, duration_ms)


@router.post("/trends")
async def query_trends(
    request: TrendQueryRequest,
    service: TrendService = Depends(get_trend_service),
) -> dict:
    """
    Execute a composable trend query.

    Returns the summary (W/L, ATS, O/U, averages, season breakdown) and the
    matching games, most recent first unless ``order_by`` is given.
    """
    return await _run(service, request.to_query())


@router.get("/trends")
async def get_trends(
    sport: str = Query(..., description="NFL, NCAAF, NCAAMB or ALL"),
    team: str | None = Query(default=None, max_length=100),
    perspective: str | None = Query(default=None),
    season_start: str | None = Query(default=None),
    season_end: str | None = Query(default=None),
    limit: str | None = Query(default=None),
    service: TrendService = Depends(get_trend_service),
) -> dict:
    """Simple trend query via URL params (no filters)."""
    sport_value = sport.upper()
    if sport_value not in VALID_SPORTS:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid sport: '{sport}'. Must be one of: {', '.join(VALID_SPORTS)}",
        )

    if perspective and perspective not in VALID_PERSPECTIVES:
        raise HTTPException(
            status_code=400,
            detail=(
                f"Invalid perspective: '{perspective}'. "
                f"Must be one of: {', '.join(VALID_PERSPECTIVES)}"
            ),
        )

    season_range = None
    if season_start and season_end:
        try:
            season_range = (int(season_start), int(season_end))
        except ValueError:
            raise HTTPException(
                status_code=400, detail="season_start and season_end must be valid integers"
            )

    limit_value = None
    if limit:
        try:
            limit_value = int(limit)
        except ValueError:
            limit_value = 0
        if limit_value <= 0:
            raise HTTPException(status_code=400, detail="limit must be a positive integer")

    query = build_query(
        ALL_SPORTS if sport_value == ALL_SPORTS else Sport(sport_value),
        team=team or None,
        perspective=Perspective(perspective) if perspective else Perspective.HOME,
        season_range=season_range,
        limit=limit_value,
    )
    return await _run(service, query)


@router.post("/trends/cache/invalidate")
async def invalidate_trend_cache(
    service: TrendService = Depends(get_trend_service),
) -> dict:
    """Drop cached games after upstream data updates."""
    service.invalidate()
    return {"status": "invalidated"}
