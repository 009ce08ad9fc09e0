"""Rate limiting using SlowAPI.

This module provides:
- The application limiter (storage configured by ``rate_limiting.storage_uri``)
- An IP-keyed limit for authentication endpoints
- The 429 exception handler
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi.responses import ORJSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from microblog.core.config import get_settings
from microblog.core.exceptions import ErrorResponse
from microblog.observability.logging import get_logger


if TYPE_CHECKING:
    from fastapi import FastAPI
    from starlette.requests import Request

logger = get_logger(__name__)


def _get_auth_rate_limit_key(request: Request) -> str:
    """Key auth endpoints by client IP to slow down credential guessing."""
    return f"auth:{get_remote_address(request)}"


def create_limiter() -> Limiter:
    """Create and configure the rate limiter."""
    settings = get_settings()

    return Limiter(
        key_func=get_remote_address,
        storage_uri=settings.rate_limiting.storage_uri,
        strategy="fixed-window",
        headers_enabled=True,
    )


# Global limiter instance
limiter = create_limiter()


async def rate_limit_exceeded_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """Handle rate limit exceeded exceptions."""
    assert isinstance(exc, RateLimitExceeded)
    retry_after = exc.limit.limit.get_expiry()
    logger.warning(
        "Rate limit exceeded",
        path=request.url.path,
        method=request.method,
        client_ip=get_remote_address(request),
        limit=str(exc.detail),
    )

    body = ErrorResponse(
        error="RATE_LIMIT_EXCEEDED",
        message=f"Too many requests. Limit is {exc.detail}.",
        request_id=getattr(request.state, "request_id", None),
    )
    return ORJSONResponse(
        status_code=429,
        content=body.model_dump(by_alias=True),
        headers={"Retry-After": str(retry_after)},
    )


def setup_rate_limiting(app: FastAPI) -> None:
    """Attach the limiter to the application and register the 429 handler."""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    logger.debug("Rate limiting configured")


def rate_limit_auth() -> Any:
    """Apply the auth-specific rate limit (stricter, IP-based).

    Returns:
        Rate limit decorator (slowapi Limiter.limit return type).

    Example:
        @router.post("/signin")
        @rate_limit_auth()
        async def signin(request: Request, response: Response): ...
    """
    settings = get_settings()
    return limiter.limit(
        settings.rate_limiting.auth, key_func=_get_auth_rate_limit_key
    )
