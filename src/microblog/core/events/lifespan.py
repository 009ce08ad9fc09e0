"""Application lifespan event handlers.

This module defines the lifespan context manager that handles:
- Application startup: configure logging, open the database pool, apply schema
- Application shutdown: close the database pool
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from microblog.core.config import Settings, get_settings
from microblog.database.connection import close_database_pool, init_database_pool
from microblog.database.schema import apply_schema
from microblog.observability.logging import get_logger, setup_logging


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI

logger = get_logger(__name__)


async def _startup(app: FastAPI, settings: Settings) -> None:
    """Initialize application resources.

    The database is critical: startup fails if it cannot be reached.
    """
    setup_logging(
        log_level=settings.logging.level,
        log_format=settings.logging.format,
        is_development=settings.is_development,
        log_file=settings.logging.file,
    )

    logger.info(
        "Starting application",
        app_name=settings.app.name,
        environment=settings.APP_ENV,
        debug=settings.app.debug,
    )

    try:
        pool = await init_database_pool(settings)
    except Exception:
        logger.exception("Failed to initialize database pool")
        raise

    if settings.database.apply_schema:
        await apply_schema(pool)

    logger.info("Application startup complete")


async def _shutdown(app: FastAPI) -> None:
    logger.info("Shutting down application")
    await close_database_pool()
    logger.info("Application shutdown complete")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None - control returns to the application to handle requests.
    """
    settings: Settings = getattr(app.state, "settings", None) or get_settings()
    await _startup(app, settings)
    try:
        yield
    finally:
        await _shutdown(app)
