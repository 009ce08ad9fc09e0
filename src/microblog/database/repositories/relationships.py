"""Relationship (follow graph) data repository."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

import asyncpg
from pydantic import BaseModel

from microblog.database.exceptions import DuplicateRecordError, MissingReferenceError
from microblog.database.repositories.base import BaseRepository
from microblog.database.repositories.users import USER_COLUMNS, UserData, UserRepository
from microblog.observability.logging import get_logger


if TYPE_CHECKING:
    from asyncpg import Record

logger = get_logger(__name__)


class RelationshipData(BaseModel):
    """A directed follow edge: ``follower_id`` follows ``followed_id``."""

    id: int
    follower_id: int
    followed_id: int
    created_at: datetime
    updated_at: datetime


class RelationshipRepository(BaseRepository):
    """Data access for follow relationships."""

    async def create(self, follower_id: int, followed_id: int) -> RelationshipData:
        """Insert a follow edge.

        Raises:
            DuplicateRecordError: If the edge already exists.
            MissingReferenceError: If either user does not exist.
        """
        query = """
            INSERT INTO microblog.relationships (follower_id, followed_id)
            VALUES ($1, $2)
            RETURNING id, follower_id, followed_id, created_at, updated_at
        """
        try:
            async with self.pool.acquire() as conn:
                row = await conn.fetchrow(query, follower_id, followed_id)
        except asyncpg.UniqueViolationError as e:
            raise DuplicateRecordError(
                "Relationship already exists", constraint=e.constraint_name
            ) from e
        except asyncpg.ForeignKeyViolationError as e:
            raise MissingReferenceError(
                "User does not exist", constraint=e.constraint_name
            ) from e

        assert row is not None
        logger.debug(
            "Relationship created", follower_id=follower_id, followed_id=followed_id
        )
        return self._row_to_relationship(row)

    async def delete(self, follower_id: int, followed_id: int) -> bool:
        """Remove a follow edge.

        Returns:
            True if the edge existed.
        """
        query = """
            DELETE FROM microblog.relationships
            WHERE follower_id = $1 AND followed_id = $2
        """
        async with self.pool.acquire() as conn:
            status = await conn.execute(query, follower_id, followed_id)
        return status == "DELETE 1"

    async def exists(self, follower_id: int, followed_id: int) -> bool:
        """Check whether ``follower_id`` follows ``followed_id``."""
        query = """
            SELECT EXISTS (
                SELECT 1 FROM microblog.relationships
                WHERE follower_id = $1 AND followed_id = $2
            )
        """
        async with self.pool.acquire() as conn:
            return bool(await conn.fetchval(query, follower_id, followed_id))

    async def followed_users(
        self, follower_id: int, *, limit: int, offset: int
    ) -> list[UserData]:
        """Page through the users that ``follower_id`` follows, in id order."""
        query = f"""
            SELECT {USER_COLUMNS}
            FROM microblog.relationships r
            JOIN microblog.users u ON u.id = r.followed_id
            WHERE r.follower_id = $1
            ORDER BY u.id
            LIMIT $2 OFFSET $3
        """  # noqa: S608
        async with self.pool.acquire() as conn:
            rows = await conn.fetch(query, follower_id, limit, offset)
        return [UserRepository._row_to_user(row) for row in rows]

    async def followers(
        self, followed_id: int, *, limit: int, offset: int
    ) -> list[UserData]:
        """Page through the users following ``followed_id``, in id order."""
        query = f"""
            SELECT {USER_COLUMNS}
            FROM microblog.relationships r
            JOIN microblog.users u ON u.id = r.follower_id
            WHERE r.followed_id = $1
            ORDER BY u.id
            LIMIT $2 OFFSET $3
        """  # noqa: S608
        async with self.pool.acquire() as conn:
            rows = await conn.fetch(query, followed_id, limit, offset)
        return [UserRepository._row_to_user(row) for row in rows]

    async def count_followed_users(self, follower_id: int) -> int:
        query = "SELECT COUNT(*) FROM microblog.relationships WHERE follower_id = $1"
        async with self.pool.acquire() as conn:
            return int(await conn.fetchval(query, follower_id))

    async def count_followers(self, followed_id: int) -> int:
        query = "SELECT COUNT(*) FROM microblog.relationships WHERE followed_id = $1"
        async with self.pool.acquire() as conn:
            return int(await conn.fetchval(query, followed_id))

    @staticmethod
    def _row_to_relationship(row: Record) -> RelationshipData:
        """Convert database row to RelationshipData DTO."""
        return RelationshipData(
            id=row["id"],
            follower_id=row["follower_id"],
            followed_id=row["followed_id"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
