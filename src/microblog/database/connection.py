"""PostgreSQL connection pool management.

This module provides:
- Async connection pool management via asyncpg
- Connection lifecycle management via lifespan events
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import asyncpg

from microblog.core.config import get_settings
from microblog.observability.logging import get_logger


if TYPE_CHECKING:
    from asyncpg import Pool

    from microblog.core.config import Settings

logger = get_logger(__name__)

# Global connection pool
_pool: Pool | None = None


async def init_database_pool(settings: Settings | None = None) -> Pool:
    """Create the global PostgreSQL connection pool and verify it.

    Should be called during application startup (lifespan).
    """
    global _pool  # noqa: PLW0603

    if settings is None:
        settings = get_settings()
    db = settings.database

    logger.info(
        "Initializing database connection pool",
        host=db.host,
        port=db.port,
        database=db.name,
    )

    _pool = await asyncpg.create_pool(
        host=db.host,
        port=db.port,
        database=db.name,
        user=db.user,
        password=settings.DATABASE_PASSWORD or None,
        min_size=db.min_pool_size,
        max_size=db.max_pool_size,
        command_timeout=db.command_timeout,
        ssl=db.ssl if db.ssl else None,
    )

    try:
        async with _pool.acquire() as conn:
            await conn.fetchval("SELECT 1")
    except asyncpg.PostgresError:
        logger.exception("Failed to connect to database")
        raise

    logger.info("Database connection established successfully")
    return _pool


async def close_database_pool() -> None:
    """Close the global connection pool (lifespan shutdown)."""
    global _pool  # noqa: PLW0603

    if _pool is None:
        return

    logger.info("Closing database connection pool")
    await _pool.close()
    _pool = None
    logger.info("Database connection pool closed")


def get_database_pool() -> Pool:
    """Get the database connection pool.

    Raises:
        RuntimeError: If pool is not initialized.
    """
    if _pool is None:
        msg = "Database pool not initialized. Call init_database_pool() first."
        raise RuntimeError(msg)
    return _pool


async def check_database_health() -> dict[str, str]:
    """Ping the database.

    Returns:
        ``{"database": "healthy" | "unhealthy" | "not_initialized"}``
    """
    if _pool is None:
        return {"database": "not_initialized"}

    try:
        async with _pool.acquire() as conn:
            await conn.fetchval("SELECT 1")
    except (asyncpg.PostgresError, OSError) as e:
        logger.warning("Database health check failed", error=str(e))
        return {"database": "unhealthy"}
    return {"database": "healthy"}
