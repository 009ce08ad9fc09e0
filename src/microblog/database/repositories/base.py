"""Shared repository plumbing."""

from __future__ import annotations

from typing import TYPE_CHECKING

from microblog.database.connection import get_database_pool


if TYPE_CHECKING:
    from asyncpg import Pool


class BaseRepository:
    """Repository backed by an asyncpg pool.

    Uses raw asyncpg queries against the ``microblog`` schema.
    """

    def __init__(self, pool: Pool | None = None) -> None:
        """Initialize repository with optional connection pool.

        Args:
            pool: asyncpg connection pool. If None, uses global pool.
        """
        self._pool = pool

    @property
    def pool(self) -> Pool:
        """Get the database connection pool."""
        if self._pool is not None:
            return self._pool
        return get_database_pool()
