"""Enumeration types used across the API schemas."""

from __future__ import annotations

from enum import StrEnum


class HealthStatus(StrEnum):
    """Service or component health."""

    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"
