"""Micropost data repository."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

import asyncpg
from pydantic import BaseModel

from microblog.database.exceptions import MissingReferenceError
from microblog.database.repositories.base import BaseRepository
from microblog.observability.logging import get_logger


if TYPE_CHECKING:
    from asyncpg import Record

logger = get_logger(__name__)


# =============================================================================
# Data Transfer Objects
# =============================================================================


class MicropostData(BaseModel):
    """A row of ``microblog.microposts``."""

    id: int
    user_id: int
    content: str
    created_at: datetime
    updated_at: datetime


class FeedItemData(MicropostData):
    """A micropost joined with its author's display name."""

    user_name: str


# =============================================================================
# Repository
# =============================================================================


_MICROPOST_COLUMNS = "m.id, m.user_id, m.content, m.created_at, m.updated_at"

# Newest first; id breaks ties between posts created in the same instant.
_NEWEST_FIRST = "ORDER BY m.created_at DESC, m.id DESC"

# Posts by the user and by everyone the user follows, in one statement.
_FEED_FILTER = """
    WHERE m.user_id IN (
        SELECT followed_id FROM microblog.relationships WHERE follower_id = $1
    )
    OR m.user_id = $1
"""


class MicropostRepository(BaseRepository):
    """Data access for microposts and the status feed."""

    async def create(self, *, user_id: int, content: str) -> MicropostData:
        """Insert a micropost.

        Raises:
            MissingReferenceError: If the author does not exist.
        """
        query = f"""
            INSERT INTO microblog.microposts AS m (user_id, content)
            VALUES ($1, $2)
            RETURNING {_MICROPOST_COLUMNS}
        """  # noqa: S608
        try:
            async with self.pool.acquire() as conn:
                row = await conn.fetchrow(query, user_id, content)
        except asyncpg.ForeignKeyViolationError as e:
            raise MissingReferenceError(
                "User does not exist", constraint=e.constraint_name
            ) from e

        assert row is not None
        logger.debug("Micropost created", micropost_id=row["id"], user_id=user_id)
        return self._row_to_micropost(row)

    async def get_by_id(self, micropost_id: int) -> MicropostData | None:
        """Fetch a micropost by primary key."""
        query = f"""
            SELECT {_MICROPOST_COLUMNS} FROM microblog.microposts m WHERE m.id = $1
        """  # noqa: S608
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(query, micropost_id)
        return self._row_to_micropost(row) if row else None

    async def delete_owned(self, micropost_id: int, user_id: int) -> bool:
        """Delete a micropost only if ``user_id`` wrote it.

        Returns:
            True if a row was deleted.
        """
        query = "DELETE FROM microblog.microposts WHERE id = $1 AND user_id = $2"
        async with self.pool.acquire() as conn:
            status = await conn.execute(query, micropost_id, user_id)
        return status == "DELETE 1"

    async def list_by_user(
        self, user_id: int, *, limit: int, offset: int
    ) -> list[MicropostData]:
        """Page through one user's microposts, newest first."""
        query = f"""
            SELECT {_MICROPOST_COLUMNS}
            FROM microblog.microposts m
            WHERE m.user_id = $1
            {_NEWEST_FIRST}
            LIMIT $2 OFFSET $3
        """  # noqa: S608
        async with self.pool.acquire() as conn:
            rows = await conn.fetch(query, user_id, limit, offset)
        return [self._row_to_micropost(row) for row in rows]

    async def count_by_user(self, user_id: int) -> int:
        """Count one user's microposts."""
        async with self.pool.acquire() as conn:
            return int(
                await conn.fetchval(
                    "SELECT COUNT(*) FROM microblog.microposts WHERE user_id = $1",
                    user_id,
                )
            )

    async def feed(self, user_id: int, *, limit: int, offset: int) -> list[FeedItemData]:
        """Page through a user's status feed, newest first.

        The feed holds the user's own posts plus posts by every user they
        follow. Followers of the user are not included.
        """
        query = f"""
            SELECT {_MICROPOST_COLUMNS}, u.name AS user_name
            FROM microblog.microposts m
            JOIN microblog.users u ON u.id = m.user_id
            {_FEED_FILTER}
            {_NEWEST_FIRST}
            LIMIT $2 OFFSET $3
        """  # noqa: S608
        async with self.pool.acquire() as conn:
            rows = await conn.fetch(query, user_id, limit, offset)
        return [self._row_to_feed_item(row) for row in rows]

    async def count_feed(self, user_id: int) -> int:
        """Count the microposts in a user's status feed."""
        query = f"SELECT COUNT(*) FROM microblog.microposts m {_FEED_FILTER}"  # noqa: S608
        async with self.pool.acquire() as conn:
            return int(await conn.fetchval(query, user_id))

    @staticmethod
    def _row_to_micropost(row: Record) -> MicropostData:
        """Convert database row to MicropostData DTO."""
        return MicropostData(
            id=row["id"],
            user_id=row["user_id"],
            content=row["content"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    @staticmethod
    def _row_to_feed_item(row: Record) -> FeedItemData:
        return FeedItemData(
            id=row["id"],
            user_id=row["user_id"],
            content=row["content"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
            user_name=row["user_name"],
        )
