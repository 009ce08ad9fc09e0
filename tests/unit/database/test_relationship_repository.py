"""Unit tests for RelationshipRepository."""

from __future__ import annotations

from datetime import UTC, datetime
from unittest.mock import MagicMock

import asyncpg
import pytest

from microblog.database.exceptions import DuplicateRecordError, MissingReferenceError
from microblog.database.repositories.relationships import RelationshipRepository


pytestmark = pytest.mark.unit

NOW = datetime(2024, 1, 1, tzinfo=UTC)


@pytest.fixture
def repository(mock_pool: MagicMock) -> RelationshipRepository:
    """Create RelationshipRepository with mocked pool."""
    return RelationshipRepository(pool=mock_pool)


def _user_row(user_id: int) -> dict[str, object]:
    return {
        "id": user_id,
        "name": f"User {user_id}",
        "email": f"user{user_id}@example.com",
        "password_digest": "d",
        "remember_token": None,
        "admin": False,
        "created_at": NOW,
        "updated_at": NOW,
    }


class TestCreate:
    """Tests for create."""

    async def test_returns_relationship(
        self, repository: RelationshipRepository, mock_conn: MagicMock
    ) -> None:
        """Should insert the directed edge."""
        mock_conn.fetchrow.return_value = {
            "id": 1,
            "follower_id": 1,
            "followed_id": 2,
            "created_at": NOW,
            "updated_at": NOW,
        }

        relationship = await repository.create(1, 2)

        assert relationship.follower_id == 1
        assert relationship.followed_id == 2
        assert mock_conn.fetchrow.call_args.args[1:] == (1, 2)

    async def test_duplicate_edge(
        self, repository: RelationshipRepository, mock_conn: MagicMock
    ) -> None:
        """Should translate the unique pair violation."""
        mock_conn.fetchrow.side_effect = asyncpg.UniqueViolationError("dup")

        with pytest.raises(DuplicateRecordError):
            await repository.create(1, 2)

    async def test_missing_user(
        self, repository: RelationshipRepository, mock_conn: MagicMock
    ) -> None:
        """Should translate foreign key violations."""
        mock_conn.fetchrow.side_effect = asyncpg.ForeignKeyViolationError("fk")

        with pytest.raises(MissingReferenceError):
            await repository.create(1, 999)


class TestDeleteAndExists:
    """Tests for delete and exists."""

    async def test_delete(
        self, repository: RelationshipRepository, mock_conn: MagicMock
    ) -> None:
        """Should report whether the edge existed."""
        mock_conn.execute.return_value = "DELETE 1"
        assert await repository.delete(1, 2) is True

        mock_conn.execute.return_value = "DELETE 0"
        assert await repository.delete(1, 2) is False

    async def test_exists(
        self, repository: RelationshipRepository, mock_conn: MagicMock
    ) -> None:
        """Should check the directed pair."""
        mock_conn.fetchval.return_value = True

        assert await repository.exists(1, 2) is True
        assert mock_conn.fetchval.call_args.args[1:] == (1, 2)


class TestDerivedRelations:
    """Tests for followed_users / followers and their counts."""

    async def test_followed_users_joins_on_followed_id(
        self, repository: RelationshipRepository, mock_conn: MagicMock
    ) -> None:
        """Should return the users on the followed end."""
        mock_conn.fetch.return_value = [_user_row(2), _user_row(3)]

        users = await repository.followed_users(1, limit=30, offset=0)

        assert [u.id for u in users] == [2, 3]
        query = mock_conn.fetch.call_args.args[0]
        assert "u.id = r.followed_id" in query
        assert "r.follower_id = $1" in query

    async def test_followers_joins_on_follower_id(
        self, repository: RelationshipRepository, mock_conn: MagicMock
    ) -> None:
        """Should return the users on the follower end."""
        mock_conn.fetch.return_value = [_user_row(4)]

        users = await repository.followers(1, limit=30, offset=0)

        assert [u.id for u in users] == [4]
        query = mock_conn.fetch.call_args.args[0]
        assert "u.id = r.follower_id" in query
        assert "r.followed_id = $1" in query

    async def test_counts(
        self, repository: RelationshipRepository, mock_conn: MagicMock
    ) -> None:
        """Should count each direction."""
        mock_conn.fetchval.return_value = 5
        assert await repository.count_followed_users(1) == 5
        assert await repository.count_followers(1) == 5
