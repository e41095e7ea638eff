"""Health check endpoints."""

import time
from datetime import UTC, datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from stormforge.infrastructure.database import get_db
from stormforge.infrastructure.telemetry import get_logger

logger = get_logger(__name__)
router = APIRouter()

_STARTED_AT = time.monotonic()


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: str
    uptime: float


class ReadinessResponse(BaseModel):
    """Readiness check response."""

    ready: bool
    checks: dict[str, bool]


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic liveness check.

    Does not touch the database; use /ready for that.
    """
    return HealthResponse(
        status="OK",
        timestamp=datetime.now(UTC).isoformat(),
        uptime=round(time.monotonic() - _STARTED_AT, 3),
    )


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(
    db: AsyncSession = Depends(get_db),
) -> ReadinessResponse:
    """Readiness check endpoint.

    Verifies all dependencies are available:
    - Database connection
    """
    checks: dict[str, bool] = {}

    try:
        await db.execute(text("SELECT 1"))
        checks["database"] = True
    except SQLAlchemyError as e:
        logger.warning("Database readiness check failed", extra={"error_type": type(e).__name__})
        checks["database"] = False

    return ReadinessResponse(
        ready=all(checks.values()),
        checks=checks,
    )
