"""Health check endpoints.

Provides liveness and readiness probes for Kubernetes and load balancers.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from microblog.core.config import Settings, get_settings
from microblog.database.connection import check_database_health
from microblog.observability.logging import get_logger
from microblog.schemas.enums import HealthStatus
from microblog.schemas.health import HealthResponse, ReadinessResponse


logger = get_logger(__name__)

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness probe",
    description="Basic health check to verify the service is running.",
)
async def health_check(
    settings: Annotated[Settings, Depends(get_settings)],
) -> HealthResponse:
    """Check if the service is alive.

    Does not touch the database.
    """
    return HealthResponse(
        status=HealthStatus.HEALTHY,
        timestamp=datetime.now(UTC),
        version=settings.app.version,
        environment=settings.APP_ENV,
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness probe",
    description="Readiness check verifying the database is reachable.",
    responses={503: {"model": ReadinessResponse, "description": "Not ready"}},
)
async def readiness_check(response: Response) -> ReadinessResponse:
    """Check if the service is ready to handle requests.

    Responds 503 while the database is unreachable so the instance is taken
    out of rotation.
    """
    checks = await check_database_health()
    ready = all(value == "healthy" for value in checks.values())

    if not ready:
        logger.warning("Readiness check failed", checks=checks)
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return ReadinessResponse(
        status=HealthStatus.HEALTHY if ready else HealthStatus.UNHEALTHY,
        timestamp=datetime.now(UTC),
        checks=checks,
    )
