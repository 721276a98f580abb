"""Health check endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from trendline.api.trends import get_trend_service
from trendline.database import get_db
from trendline.services.trends import Sport, TrendService

router = APIRouter()


@router.get("/health")
def health_check(
    db: Session = Depends(get_db),
    service: TrendService = Depends(get_trend_service),
) -> dict:
    """
    Health check endpoint for load balancers and monitoring.

    Checks record store connectivity and reports which sports are cached.
    """
    checks = {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "checks": {},
    }

    # Database check
    try:
        db.execute(text("SELECT 1"))
        checks["checks"]["database"] = "ok"
    except SQLAlchemyError as e:
        checks["checks"]["database"] = f"error: {str(e)}"
        checks["status"] = "unhealthy"

    checks["checks"]["cache"] = {
        sport.value: "loaded" if service.cache.is_loaded(sport) else "cold"
        for sport in Sport
    }

    return checks


@router.get("/ready")
async def readiness_check() -> dict:
    """Readiness probe for Kubernetes/Railway."""
    return {"status": "ready"}
