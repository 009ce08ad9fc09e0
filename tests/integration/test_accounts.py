"""Integration tests for accounts against PostgreSQL."""

from __future__ import annotations

from typing import TYPE_CHECKING

import asyncpg
import pytest

from microblog.auth.tokens import digest
from microblog.database.repositories.users import UserRepository
from microblog.services.users.exceptions import (
    AccountValidationError,
    ForbiddenAttributeError,
    InvalidCredentialsError,
)


if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from microblog.database.repositories.users import UserData
    from microblog.services.users import UserService


pytestmark = pytest.mark.integration


async def _user_count(pool: asyncpg.Pool) -> int:
    async with pool.acquire() as conn:
        return int(await conn.fetchval("SELECT COUNT(*) FROM microblog.users"))


class TestSignup:
    """Signup writes exactly one row, or none."""

    async def test_valid_signup_creates_one_user(
        self, pool: asyncpg.Pool, user_service: UserService
    ) -> None:
        """Should create exactly one user."""
        user = await user_service.create(
            name="Example User",
            email="User@Example.com",
            password="foobar",
            password_confirmation="foobar",
        )

        assert await _user_count(pool) == 1
        assert user.email == "user@example.com"
        assert user.admin is False
        assert user.remember_token is not None

    async def test_invalid_signup_creates_nothing(
        self, pool: asyncpg.Pool, user_service: UserService
    ) -> None:
        """Should not write anything when validation fails."""
        with pytest.raises(AccountValidationError):
            await user_service.create(
                name="",
                email="user@invalid",
                password="foo",
                password_confirmation="bar",
            )

        assert await _user_count(pool) == 0

    async def test_email_unique_ignoring_case(
        self,
        pool: asyncpg.Pool,
        user_service: UserService,
        make_user: Callable[..., Awaitable[UserData]],
    ) -> None:
        """Should reject an address differing only in case."""
        await make_user("First", "dup@example.com")

        with pytest.raises(AccountValidationError) as exc_info:
            await user_service.create(
                name="Second",
                email="DUP@EXAMPLE.COM",
                password="foobar",
                password_confirmation="foobar",
            )

        assert exc_info.value.full_messages == ["Email has already been taken"]
        assert await _user_count(pool) == 1

    async def test_index_enforces_case_insensitive_uniqueness(
        self, pool: asyncpg.Pool, make_user: Callable[..., Awaitable[UserData]]
    ) -> None:
        """Should reject mixed-case duplicates at the database level too."""
        await make_user("First", "dup@example.com")

        with pytest.raises(asyncpg.UniqueViolationError):
            async with pool.acquire() as conn:
                await conn.execute(
                    "INSERT INTO microblog.users (name, email, password_digest) "
                    "VALUES ('X', 'Dup@Example.com', 'x')"
                )


class TestCredentials:
    """Authentication and remember tokens."""

    async def test_authenticate(
        self,
        user_service: UserService,
        make_user: Callable[..., Awaitable[UserData]],
    ) -> None:
        """Should accept the right password only."""
        user = await make_user("Example", "user@example.com")

        assert (await user_service.authenticate("USER@example.com", "foobar")).id == user.id
        with pytest.raises(InvalidCredentialsError):
            await user_service.authenticate("user@example.com", "wrong!")

    async def test_remember_and_forget(
        self,
        user_service: UserService,
        make_user: Callable[..., Awaitable[UserData]],
    ) -> None:
        """Should resolve the user by token digest until forgotten."""
        user = await make_user("Example", "user@example.com")
        repository = UserRepository()

        token = await user_service.remember(user)
        found = await repository.get_by_remember_token(digest(token))
        assert found is not None
        assert found.id == user.id

        await user_service.forget(user)
        assert await repository.get_by_remember_token(digest(token)) is None


class TestProfileEdits:
    """Profile edits against real rows."""

    async def test_update_keeps_own_email(
        self,
        user_service: UserService,
        make_user: Callable[..., Awaitable[UserData]],
    ) -> None:
        """Should not treat the user's own email as taken."""
        user = await make_user("Example", "user@example.com")

        updated = await user_service.update(
            user,
            user.id,
            {"name": "Renamed", "password": "secret", "password_confirmation": "secret"},
        )

        assert updated.name == "Renamed"
        assert updated.email == "user@example.com"
        assert (await user_service.authenticate("user@example.com", "secret")).id == user.id

    async def test_admin_flag_unchanged(
        self,
        user_service: UserService,
        make_user: Callable[..., Awaitable[UserData]],
    ) -> None:
        """Should never grant admin through a profile edit."""
        user = await make_user("Example", "user@example.com")

        with pytest.raises(ForbiddenAttributeError):
            await user_service.update(
                user,
                user.id,
                {"password": "secret", "password_confirmation": "secret", "admin": True},
            )

        assert (await user_service.get(user.id)).admin is False
