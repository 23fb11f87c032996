"""Liveness and readiness probes."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import settings
from infrastructure.database.session import get_async_session

API_VERSION = "1.0.0"

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Probe result."""

    status: str
    service: str
    version: str
    timestamp: str
    environment: str
    database: str | None = None


def _report(status: str, database: str | None = None) -> HealthResponse:
    return HealthResponse(
        status=status,
        service=settings.app_name,
        version=API_VERSION,
        timestamp=datetime.now(timezone.utc).isoformat(),
        environment=settings.app_env,
        database=database,
    )


@router.get("/health", response_model=HealthResponse, summary="Liveness probe")
async def health_check() -> HealthResponse:
    """Report that the process is up. Touches nothing else."""
    return _report("healthy")


@router.get(
    "/health/detailed",
    response_model=HealthResponse,
    summary="Readiness probe",
)
async def detailed_health_check(
    db: AsyncSession = Depends(get_async_session),
) -> HealthResponse:
    """Round-trip to the document store; a failed probe reports ``degraded``."""
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        return _report("degraded", database=f"unreachable: {type(exc).__name__}")
    return _report("healthy", database="reachable")
