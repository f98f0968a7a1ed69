"""Health check endpoint - no identity required."""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter
from sqlalchemy.exc import SQLAlchemyError

from vidshare import __version__
from vidshare.api.schemas.responses import ApiResponse, CamelModel
from vidshare.config.database import db_manager

logger = logging.getLogger(__name__)


class HealthStatus(CamelModel):
    """Application health status."""

    status: str  # "healthy" or "unhealthy"
    version: str
    database: str  # "connected" or "disconnected"
    database_latency_ms: Optional[int] = None
    timestamp: datetime


router = APIRouter()


@router.get("/health", response_model=ApiResponse[HealthStatus])
async def health_check() -> ApiResponse[HealthStatus]:
    """Report application version and database connectivity."""
    db_status = "disconnected"
    db_latency_ms: Optional[int] = None
    try:
        start = time.monotonic()
        await db_manager.ping()
        db_latency_ms = int((time.monotonic() - start) * 1000)
        db_status = "connected"
    except (SQLAlchemyError, OSError):
        logger.warning("Health check could not reach the database", exc_info=True)

    health = HealthStatus(
        status="healthy" if db_status == "connected" else "unhealthy",
        version=__version__,
        database=db_status,
        database_latency_ms=db_latency_ms,
        timestamp=datetime.now(timezone.utc),
    )
    return ApiResponse[HealthStatus](message="Health check completed", data=health)
