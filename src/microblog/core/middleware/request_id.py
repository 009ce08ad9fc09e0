"""Request ID middleware for request tracing.

This middleware:
- Generates or propagates request IDs for each request
- Attaches request ID to request state for use in handlers
- Adds request ID to response headers
- Binds request ID to logging context for correlation
"""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from microblog.observability.logging import bind_context, clear_context


if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.types import ASGIApp


REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Propagate an incoming X-Request-ID header or generate a new one."""

    def __init__(self, app: ASGIApp, header_name: str = REQUEST_ID_HEADER) -> None:
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process request and add request ID."""
        # Each request starts with a fresh logging context
        clear_context()

        request_id = request.headers.get(self.header_name) or str(uuid.uuid4())
        request.state.request_id = request_id
        bind_context(request_id=request_id)

        response = await call_next(request)
        response.headers[self.header_name] = request_id
        return response
