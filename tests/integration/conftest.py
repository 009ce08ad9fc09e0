"""Integration test fixtures.

Provides a real PostgreSQL via testcontainers. The container lives for the
session; each test gets its own pool, a freshly applied schema and empty
tables.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import asyncpg
import pytest
from httpx import ASGITransport, AsyncClient
from testcontainers.postgres import PostgresContainer

import microblog.database.connection as db_module
from microblog.database.schema import apply_schema
from microblog.factory import create_app
from microblog.services.follows import FollowService
from microblog.services.microposts import MicropostService
from microblog.services.users import UserService


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Awaitable, Callable, Generator

    from fastapi import FastAPI

    from microblog.core.config import Settings
    from microblog.database.repositories.users import UserData


pytestmark = pytest.mark.integration


@pytest.fixture(scope="session")
def postgres_container() -> Generator[PostgresContainer]:
    """Start a PostgreSQL container for the test session."""
    with PostgresContainer("postgres:16-alpine", driver=None) as postgres:
        yield postgres


@pytest.fixture
async def pool(postgres_container: PostgresContainer) -> AsyncGenerator[asyncpg.Pool]:
    """A pool installed as the application pool, over an empty schema."""
    pool = await asyncpg.create_pool(
        host=postgres_container.get_container_host_ip(),
        port=int(postgres_container.get_exposed_port(5432)),
        user=postgres_container.username,
        password=postgres_container.password,
        database=postgres_container.dbname,
        min_size=1,
        max_size=4,
    )
    await apply_schema(pool)
    db_module._pool = pool
    try:
        yield pool
    finally:
        async with pool.acquire() as conn:
            await conn.execute(
                "TRUNCATE microblog.relationships, microblog.microposts, "
                "microblog.users RESTART IDENTITY CASCADE"
            )
        db_module._pool = None
        await pool.close()


@pytest.fixture
def user_service(pool: asyncpg.Pool) -> UserService:
    return UserService()


@pytest.fixture
def follow_service(pool: asyncpg.Pool) -> FollowService:
    return FollowService()


@pytest.fixture
def micropost_service(pool: asyncpg.Pool) -> MicropostService:
    return MicropostService()


@pytest.fixture
def make_user(user_service: UserService) -> Callable[..., Awaitable[UserData]]:
    """Sign up a valid user; the password is always ``foobar``."""

    async def _make_user(name: str, email: str) -> UserData:
        return await user_service.create(
            name=name,
            email=email,
            password="foobar",
            password_confirmation="foobar",
        )

    return _make_user


@pytest.fixture
def app(settings: Settings, pool: asyncpg.Pool) -> FastAPI:
    """Application wired to the container database."""
    return create_app(settings)


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for testing."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
