"""API test fixtures.

The application is built by ``create_app``; services and the repository used
for authentication are replaced through ``app.dependency_overrides``. Requests
authenticate with real access tokens.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from microblog.api.dependencies import (
    get_follow_service,
    get_micropost_service,
    get_user_service,
)
from microblog.auth.dependencies import get_user_repository
from microblog.auth.jwt import create_access_token
from microblog.auth.permissions import roles_for
from microblog.factory import create_app
from microblog.services.follows import FollowService
from microblog.services.microposts import MicropostService
from microblog.services.users import UserService
from tests.factories.users import UserDataFactory


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Callable

    from fastapi import FastAPI

    from microblog.core.config import Settings
    from microblog.database.repositories.users import UserData


@pytest.fixture
def current_user() -> UserData:
    """The signed-in user."""
    return UserDataFactory.build(
        id=1, name="Michael Example", email="michael@example.com", admin=False
    )


@pytest.fixture
def known_users(current_user: UserData) -> dict[int, UserData]:
    """Users the authentication repository can resolve, by id."""
    return {current_user.id: current_user}


@pytest.fixture
def user_repository(known_users: dict[int, UserData]) -> MagicMock:
    """Repository used by the authentication dependencies."""
    repo = MagicMock()
    repo.get_by_id = AsyncMock(side_effect=lambda user_id: known_users.get(user_id))
    repo.get_by_remember_token = AsyncMock(return_value=None)
    return repo


@pytest.fixture
def user_service() -> MagicMock:
    return MagicMock(spec=UserService)


@pytest.fixture
def follow_service() -> MagicMock:
    return MagicMock(spec=FollowService)


@pytest.fixture
def micropost_service() -> MagicMock:
    return MagicMock(spec=MicropostService)


@pytest.fixture
def bearer() -> Callable[[UserData], dict[str, str]]:
    """Build an Authorization header for a user."""

    def _bearer(user: UserData) -> dict[str, str]:
        token = create_access_token(str(user.id), roles=roles_for(user))
        return {"Authorization": f"Bearer {token}"}

    return _bearer


@pytest.fixture
def auth_headers(
    current_user: UserData, bearer: Callable[[UserData], dict[str, str]]
) -> dict[str, str]:
    """Authorization header for ``current_user``."""
    return bearer(current_user)


@pytest.fixture
def app(
    settings: Settings,
    user_repository: MagicMock,
    user_service: MagicMock,
    follow_service: MagicMock,
    micropost_service: MagicMock,
) -> FastAPI:
    """Application with mocked services."""
    app = create_app(settings)
    app.dependency_overrides[get_user_repository] = lambda: user_repository
    app.dependency_overrides[get_user_service] = lambda: user_service
    app.dependency_overrides[get_follow_service] = lambda: follow_service
    app.dependency_overrides[get_micropost_service] = lambda: micropost_service
    return app


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[httpx.AsyncClient]:
    """HTTP client bound to the application."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
