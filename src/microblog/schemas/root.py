"""Root endpoint response schema."""

from __future__ import annotations

from pydantic import Field

from microblog.schemas.base import APIResponse


class RootResponse(APIResponse):
    """Basic service information and links."""

    service: str = Field(..., description="Service name", examples=["Microblog Service"])
    version: str = Field(..., description="Service version", examples=["0.1.0"])
    status: str = Field(
        ..., description="Service operational status", examples=["operational"]
    )
    docs: str = Field(
        ..., description="API documentation URL or status", examples=["/docs"]
    )
    health: str = Field(
        ..., description="Health check endpoint URL", examples=["/api/v1/health"]
    )
