"""Request logging middleware.

This middleware:
- Binds method, path and client IP to the logging context
- Logs one line when a request starts and one when it completes
- Records the handling time in milliseconds
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from microblog.observability.logging import bind_context, get_logger


if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.types import ASGIApp

logger = get_logger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for structured request/response logging."""

    def __init__(
        self,
        app: ASGIApp,
        *,
        exclude_paths: set[str] | None = None,
    ) -> None:
        super().__init__(app)
        self.exclude_paths = exclude_paths or {"/favicon.ico"}

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Log request and response."""
        if request.url.path in self.exclude_paths:
            return await call_next(request)

        bind_context(
            method=request.method,
            path=request.url.path,
            client_ip=self._get_client_ip(request),
        )
        logger.info(
            "Request started",
            query_params=str(request.query_params) if request.query_params else None,
        )

        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = round((time.perf_counter() - start) * 1000, 2)

        logger.info(
            "Request completed",
            status_code=response.status_code,
            duration_ms=duration_ms,
        )
        return response

    @staticmethod
    def _get_client_ip(request: Request) -> str:
        """Extract client IP from request, considering proxies."""
        forwarded_for = request.headers.get("x-forwarded-for")
        if forwarded_for:
            # First address in the chain is the original client
            return forwarded_for.split(",")[0].strip()

        real_ip = request.headers.get("x-real-ip")
        if real_ip:
            return real_ip

        if request.client:
            return request.client.host

        return "unknown"
