"""Application exceptions and exception handlers.

Every error leaves the service in one envelope::

    {"error": "NOT_FOUND", "message": "...", "details": [...], "requestId": "..."}

Services raise subclasses of ``AppException``; the handlers registered by
``setup_exception_handlers`` render them, along with request validation
failures, plain HTTP errors and anything unexpected.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from pydantic import Field
from starlette.exceptions import HTTPException as StarletteHTTPException

from microblog.observability.logging import get_logger
from microblog.schemas.base import APIResponse


if TYPE_CHECKING:
    from fastapi import Request

logger = get_logger(__name__)


class ErrorDetail(APIResponse):
    """A single field-level error."""

    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Full, human-readable message")
    field: str | None = Field(default=None, description="Offending field")


class ErrorResponse(APIResponse):
    """Error envelope returned for every failed request."""

    error: str
    message: str
    details: list[ErrorDetail] | None = None
    request_id: str | None = None


class AppException(Exception):
    """Base application exception.

    All domain exceptions inherit from this class so that a single handler
    can render them.
    """

    def __init__(
        self,
        status_code: int,
        error: str,
        message: str,
        details: list[ErrorDetail] | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.status_code = status_code
        self.error = error
        self.message = message
        self.details = details
        self.headers = headers
        super().__init__(message)


class NotFoundException(AppException):
    """Resource not found exception."""

    def __init__(self, resource: str, identifier: Any) -> None:
        self.resource = resource
        self.identifier = identifier
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            error="NOT_FOUND",
            message=f"{resource} with identifier '{identifier}' not found",
        )


class UnauthorizedException(AppException):
    """Missing or invalid credentials."""

    def __init__(self, message: str = "Could not validate credentials") -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            error="UNAUTHORIZED",
            message=message,
            headers={"WWW-Authenticate": "Bearer"},
        )


class ForbiddenException(AppException):
    """Authenticated, but not allowed to act on the resource."""

    def __init__(self, message: str = "Insufficient permissions") -> None:
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            error="FORBIDDEN",
            message=message,
        )


class ConflictException(AppException):
    """Resource conflict exception (uniqueness violations)."""

    def __init__(self, message: str) -> None:
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            error="CONFLICT",
            message=message,
        )


class BadRequestException(AppException):
    """Bad request exception."""

    def __init__(self, message: str) -> None:
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            error="BAD_REQUEST",
            message=message,
        )


class UnprocessableEntityException(AppException):
    """Well-formed request whose content failed domain validation."""

    def __init__(self, message: str, details: list[ErrorDetail]) -> None:
        super().__init__(
            status_code=422,
            error="VALIDATION_ERROR",
            message=message,
            details=details,
        )


class ServiceUnavailableException(AppException):
    """A dependency (usually the database) is not available."""

    def __init__(self, message: str = "Service temporarily unavailable") -> None:
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            error="SERVICE_UNAVAILABLE",
            message=message,
        )


def _get_request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


def _render(
    request: Request,
    status_code: int,
    body: ErrorResponse,
    headers: dict[str, str] | None = None,
) -> ORJSONResponse:
    body.request_id = _get_request_id(request)
    return ORJSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True),
        headers=headers,
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with the FastAPI application."""

    @app.exception_handler(AppException)
    async def app_exception_handler(
        request: Request,
        exc: AppException,
    ) -> ORJSONResponse:
        """Handle domain exceptions."""
        if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error("Request failed", error=exc.error, detail=exc.message)
        else:
            logger.info("Request rejected", error=exc.error, detail=exc.message)
        return _render(
            request,
            exc.status_code,
            ErrorResponse(error=exc.error, message=exc.message, details=exc.details),
            headers=exc.headers,
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> ORJSONResponse:
        """Handle plain HTTP exceptions (404 routes, 405 methods, ...)."""
        return _render(
            request,
            exc.status_code,
            ErrorResponse(error="HTTP_ERROR", message=str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> ORJSONResponse:
        """Handle request-shape validation errors raised by FastAPI."""
        details = [
            ErrorDetail(
                code="INVALID_REQUEST",
                message=error["msg"],
                field=".".join(str(loc) for loc in error["loc"]),
            )
            for error in exc.errors()
        ]
        return _render(
            request,
            422,
            ErrorResponse(
                error="VALIDATION_ERROR",
                message="Request validation failed",
                details=details,
            ),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> ORJSONResponse:
        """Handle unexpected exceptions."""
        logger.opt(exception=exc).error("Unhandled exception")
        return _render(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            ErrorResponse(
                error="INTERNAL_SERVER_ERROR",
                message="An unexpected error occurred",
            ),
        )
