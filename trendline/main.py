"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

import structlog
from fastapi import FastAPI
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware

from trendline.config import settings
from trendline.api import health, trends
from trendline.services.trends import RecordSourceUnavailableError

# Configure structured logging
logging.basicConfig(format="%(message)s", level=settings.log_level.upper())
structlog.configure(
    processors=[
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.add_log_level,
        structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager."""
    logger.info("Starting TrendLine API", environment=settings.environment)

    if settings.trend_warm_cache_on_startup:
        try:
            total = await run_in_threadpool(trends.get_trend_service().warm)
            logger.info("Trend cache warmed", games=total)
        except RecordSourceUnavailableError as e:
            # Queries retry the load on first use
            logger.error("Trend cache warm-up failed", error=str(e))

    yield

    logger.info("Shutting down TrendLine API")


app = FastAPI(
    title="TrendLine API",
    description="Composable betting trend queries over historical NFL, NCAAF and NCAAMB games",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs" if not settings.is_production else None,
    redoc_url="/redoc" if not settings.is_production else None,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(trends.router, prefix=settings.api_v1_prefix, tags=["Trends"])


@app.get("/")
async def root() -> dict:
    """Root endpoint."""
    return {
        "name": "TrendLine API",
        "version": "0.1.0",
        "docs": "/docs",
    }
