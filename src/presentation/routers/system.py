"""System router for non-versioned application endpoints.

Provides external-facing system endpoints that are not part of the
versioned API contract: root status and the health check used by load
balancers.
"""

import time
from datetime import UTC, datetime

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from src.core.config import settings
from src.core.container import get_cache, get_database
from src.domain.protocols import CacheProtocol
from src.infrastructure.persistence.database import Database
from src.schemas.system_schemas import (
    CacheStatsResponse,
    HealthMetrics,
    HealthResponse,
    HealthServices,
)

system_router = APIRouter(tags=["System"])


@system_router.get("/")
async def root() -> dict[str, str]:
    """Root endpoint - basic health/status check.

    Returns:
        dict[str, str]: Welcome message with API status and version.
    """
    return {
        "message": f"{settings.app_name} API",
        "status": "operational",
        "version": settings.app_version,
    }


@system_router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
)
async def health(
    database: Database = Depends(get_database),
    cache: CacheProtocol = Depends(get_cache),
) -> JSONResponse:
    """Health check endpoint for monitoring and load balancers.

    Runs ``SELECT 1`` against the database and reports cache statistics.
    Answers 503 when the database is unreachable.
    """
    started = time.perf_counter()
    database_ok = await database.check_connection()
    stats = cache.get_stats()

    report = HealthResponse(
        status="healthy" if database_ok else "unhealthy",
        timestamp=datetime.now(UTC),
        services=HealthServices(
            database="healthy" if database_ok else "unhealthy",
            cache="healthy",
        ),
        metrics=HealthMetrics(
            response_time_ms=round((time.perf_counter() - started) * 1000, 2),
            cache=CacheStatsResponse(
                total=stats.total,
                active=stats.active,
                expired=stats.expired,
                tags=stats.tags,
            ),
        ),
    )
    return JSONResponse(
        status_code=status.HTTP_200_OK if database_ok else status.HTTP_503_SERVICE_UNAVAILABLE,
        content=report.model_dump(mode="json"),
    )
