"""User data repository."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

import asyncpg
from pydantic import BaseModel

from microblog.database.exceptions import DuplicateRecordError
from microblog.database.repositories.base import BaseRepository
from microblog.observability.logging import get_logger


if TYPE_CHECKING:
    from asyncpg import Record

logger = get_logger(__name__)


# =============================================================================
# Data Transfer Objects
# =============================================================================


class UserData(BaseModel):
    """A row of ``microblog.users``."""

    id: int
    name: str
    email: str
    password_digest: str
    remember_token: str | None
    admin: bool
    created_at: datetime
    updated_at: datetime


# =============================================================================
# Repository
# =============================================================================


USER_COLUMNS = (
    "u.id, u.name, u.email, u.password_digest, u.remember_token, "
    "u.admin, u.created_at, u.updated_at"
)

_SELECT_USER = f"SELECT {USER_COLUMNS} FROM microblog.users u"  # noqa: S608


class UserRepository(BaseRepository):
    """Data access for user accounts."""

    async def create(
        self,
        *,
        name: str,
        email: str,
        password_digest: str,
        remember_token: str,
        admin: bool = False,
    ) -> UserData:
        """Insert a user.

        Raises:
            DuplicateRecordError: If the email is already taken (any case).
        """
        query = f"""
            INSERT INTO microblog.users AS u
                (name, email, password_digest, remember_token, admin)
            VALUES ($1, $2, $3, $4, $5)
            RETURNING {USER_COLUMNS}
        """  # noqa: S608
        try:
            async with self.pool.acquire() as conn:
                row = await conn.fetchrow(
                    query, name, email, password_digest, remember_token, admin
                )
        except asyncpg.UniqueViolationError as e:
            raise DuplicateRecordError(
                "Email has already been taken", constraint=e.constraint_name
            ) from e

        assert row is not None
        logger.debug("User created", user_id=row["id"])
        return self._row_to_user(row)

    async def get_by_id(self, user_id: int) -> UserData | None:
        """Fetch a user by primary key."""
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(f"{_SELECT_USER} WHERE u.id = $1", user_id)
        return self._row_to_user(row) if row else None

    async def get_by_email(self, email: str) -> UserData | None:
        """Fetch a user by email, ignoring case."""
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(
                f"{_SELECT_USER} WHERE LOWER(u.email) = LOWER($1)", email
            )
        return self._row_to_user(row) if row else None

    async def get_by_remember_token(self, token_digest: str) -> UserData | None:
        """Fetch the user whose stored remember token digest matches."""
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(
                f"{_SELECT_USER} WHERE u.remember_token = $1", token_digest
            )
        return self._row_to_user(row) if row else None

    async def email_taken(self, email: str, exclude_id: int | None = None) -> bool:
        """Check whether another account already uses ``email`` (any case)."""
        query = """
            SELECT EXISTS (
                SELECT 1 FROM microblog.users
                WHERE LOWER(email) = LOWER($1)
                  AND ($2::bigint IS NULL OR id <> $2::bigint)
            )
        """
        async with self.pool.acquire() as conn:
            return bool(await conn.fetchval(query, email, exclude_id))

    async def update_profile(
        self,
        user_id: int,
        *,
        name: str,
        email: str,
        password_digest: str,
    ) -> UserData | None:
        """Overwrite the editable profile columns.

        Returns:
            The updated user, or None if it no longer exists.

        Raises:
            DuplicateRecordError: If the new email is already taken.
        """
        query = f"""
            UPDATE microblog.users AS u
            SET name = $2, email = $3, password_digest = $4, updated_at = NOW()
            WHERE u.id = $1
            RETURNING {USER_COLUMNS}
        """  # noqa: S608
        try:
            async with self.pool.acquire() as conn:
                row = await conn.fetchrow(query, user_id, name, email, password_digest)
        except asyncpg.UniqueViolationError as e:
            raise DuplicateRecordError(
                "Email has already been taken", constraint=e.constraint_name
            ) from e
        return self._row_to_user(row) if row else None

    async def update_remember_token(self, user_id: int, token_digest: str) -> bool:
        """Replace the stored remember token digest.

        Returns:
            True if the user exists.
        """
        query = """
            UPDATE microblog.users
            SET remember_token = $2, updated_at = NOW()
            WHERE id = $1
        """
        async with self.pool.acquire() as conn:
            status = await conn.execute(query, user_id, token_digest)
        return status.endswith(" 1")

    async def delete(self, user_id: int) -> bool:
        """Delete a user.

        Microposts and relationships in either direction go with it through
        ``ON DELETE CASCADE``.

        Returns:
            True if a row was deleted.
        """
        async with self.pool.acquire() as conn:
            status = await conn.execute(
                "DELETE FROM microblog.users WHERE id = $1", user_id
            )
        return status == "DELETE 1"

    async def list(self, *, limit: int, offset: int) -> list[UserData]:
        """Page through all users in id order."""
        async with self.pool.acquire() as conn:
            rows = await conn.fetch(
                f"{_SELECT_USER} ORDER BY u.id LIMIT $1 OFFSET $2", limit, offset
            )
        return [self._row_to_user(row) for row in rows]

    async def count(self) -> int:
        """Count all users."""
        async with self.pool.acquire() as conn:
            return int(await conn.fetchval("SELECT COUNT(*) FROM microblog.users"))

    @staticmethod
    def _row_to_user(row: Record) -> UserData:
        """Convert database row to UserData DTO."""
        return UserData(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            password_digest=row["password_digest"],
            remember_token=row["remember_token"],
            admin=row["admin"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
