"""Health check schemas.

This module contains schemas for the liveness and readiness endpoints.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from microblog.schemas.base import APIResponse
from microblog.schemas.enums import HealthStatus


class HealthResponse(APIResponse):
    """Liveness probe response."""

    status: HealthStatus = Field(..., description="Overall service health status")
    timestamp: datetime = Field(..., description="Health check timestamp")
    version: str = Field(..., description="Service version")
    environment: str = Field(..., description="Deployment environment")


class ReadinessResponse(APIResponse):
    """Readiness probe response with per-dependency status."""

    status: HealthStatus = Field(..., description="Overall readiness")
    timestamp: datetime = Field(..., description="Check timestamp")
    checks: dict[str, str] = Field(
        default_factory=dict,
        description="Dependency name to status",
        examples=[{"database": "healthy"}],
    )
