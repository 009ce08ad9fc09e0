"""Unit tests for the micropost endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from microblog.core.exceptions import ErrorDetail
from microblog.services.microposts.exceptions import (
    MicropostNotFoundError,
    MicropostValidationError,
)
from tests.factories.users import MicropostDataFactory


if TYPE_CHECKING:
    from unittest.mock import MagicMock

    import httpx


pytestmark = pytest.mark.unit

MICROPOSTS = "/api/v1/microposts"


class TestCreateMicropost:
    """Tests for POST /microposts."""

    async def test_creates(
        self,
        client: httpx.AsyncClient,
        micropost_service: MagicMock,
        auth_headers: dict[str, str],
    ) -> None:
        """Should post as the current user."""
        micropost = MicropostDataFactory.build(id=7, user_id=1, content="Hello")
        micropost_service.create.return_value = micropost

        response = await client.post(
            MICROPOSTS, json={"content": "Hello"}, headers=auth_headers
        )

        assert response.status_code == 201
        body = response.json()
        assert body["id"] == 7
        assert body["userId"] == 1
        assert body["content"] == "Hello"
        micropost_service.create.assert_awaited_once_with(1, "Hello")

    async def test_invalid_content(
        self,
        client: httpx.AsyncClient,
        micropost_service: MagicMock,
        auth_headers: dict[str, str],
    ) -> None:
        """Should return 422 with the content message."""
        micropost_service.create.side_effect = MicropostValidationError(
            [ErrorDetail(code="blank", message="Content can't be blank", field="content")]
        )

        response = await client.post(
            MICROPOSTS, json={"content": " "}, headers=auth_headers
        )

        assert response.status_code == 422
        assert response.json()["message"] == "Content can't be blank"

    async def test_requires_auth(
        self, client: httpx.AsyncClient, micropost_service: MagicMock
    ) -> None:
        """Should reject anonymous posts."""
        response = await client.post(MICROPOSTS, json={"content": "Hello"})

        assert response.status_code == 401
        micropost_service.create.assert_not_awaited()


class TestDeleteMicropost:
    """Tests for DELETE /microposts/{id}."""

    async def test_deletes(
        self,
        client: httpx.AsyncClient,
        micropost_service: MagicMock,
        auth_headers: dict[str, str],
    ) -> None:
        """Should delete as the current user."""
        response = await client.delete(f"{MICROPOSTS}/7", headers=auth_headers)

        assert response.status_code == 204
        micropost_service.delete.assert_awaited_once_with(1, 7)

    async def test_not_owner(
        self,
        client: httpx.AsyncClient,
        micropost_service: MagicMock,
        auth_headers: dict[str, str],
    ) -> None:
        """Should return 404 for other users' posts."""
        micropost_service.delete.side_effect = MicropostNotFoundError(7)

        response = await client.delete(f"{MICROPOSTS}/7", headers=auth_headers)

        assert response.status_code == 404

    async def test_requires_auth(self, client: httpx.AsyncClient) -> None:
        """Should reject anonymous deletes."""
        assert (await client.delete(f"{MICROPOSTS}/7")).status_code == 401
