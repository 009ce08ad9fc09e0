"""Follow-graph service.

Relationships are directed: ``follower`` follows ``followed``. Each pair is
stored at most once.
"""

from __future__ import annotations

from pydantic import BaseModel

from microblog.database.exceptions import DuplicateRecordError, MissingReferenceError
from microblog.database.repositories.relationships import (
    RelationshipData,
    RelationshipRepository,
)
from microblog.database.repositories.users import UserData, UserRepository
from microblog.observability.logging import get_logger
from microblog.observability.metrics import RELATIONSHIPS_TOTAL
from microblog.services.follows.exceptions import (
    AlreadyFollowingError,
    RelationshipNotFoundError,
    SelfFollowError,
)
from microblog.services.pagination import Page, page_window
from microblog.services.users.exceptions import UserNotFoundError


logger = get_logger(__name__)


class FollowCounts(BaseModel):
    """How many users someone follows and is followed by."""

    following: int
    followers: int


class FollowService:
    """Service for following and unfollowing users."""

    def __init__(
        self,
        repository: RelationshipRepository | None = None,
        user_repository: UserRepository | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            repository: Optional RelationshipRepository instance.
            user_repository: Optional UserRepository used for existence checks.
        """
        self._repository = repository or RelationshipRepository()
        self._users = user_repository or UserRepository()

    async def _require_user(self, user_id: int) -> None:
        if await self._users.get_by_id(user_id) is None:
            raise UserNotFoundError(user_id)

    async def follow(self, follower_id: int, followed_id: int) -> RelationshipData:
        """Make ``follower_id`` follow ``followed_id``.

        Raises:
            SelfFollowError: If both ids are the same.
            UserNotFoundError: If the followed user does not exist.
            AlreadyFollowingError: If the edge already exists.
        """
        if follower_id == followed_id:
            raise SelfFollowError

        await self._require_user(followed_id)

        try:
            relationship = await self._repository.create(follower_id, followed_id)
        except DuplicateRecordError:
            raise AlreadyFollowingError(follower_id, followed_id) from None
        except MissingReferenceError:
            # One of the users was deleted after the existence check.
            raise UserNotFoundError(followed_id) from None

        RELATIONSHIPS_TOTAL.labels(action="follow").inc()
        logger.info("User followed", follower_id=follower_id, followed_id=followed_id)
        return relationship

    async def unfollow(self, follower_id: int, followed_id: int) -> None:
        """Remove the edge ``follower_id`` -> ``followed_id``.

        Raises:
            RelationshipNotFoundError: If there is no such edge.
        """
        if not await self._repository.delete(follower_id, followed_id):
            raise RelationshipNotFoundError(follower_id, followed_id)

        RELATIONSHIPS_TOTAL.labels(action="unfollow").inc()
        logger.info(
            "User unfollowed", follower_id=follower_id, followed_id=followed_id
        )

    async def is_following(self, follower_id: int, followed_id: int) -> bool:
        return await self._repository.exists(follower_id, followed_id)

    async def following(
        self, user_id: int, page: int = 1, per_page: int | None = None
    ) -> Page[UserData]:
        """Users that ``user_id`` follows, in id order."""
        await self._require_user(user_id)
        page, per_page, offset = page_window(page, per_page)
        items = await self._repository.followed_users(
            user_id, limit=per_page, offset=offset
        )
        total = await self._repository.count_followed_users(user_id)
        return Page(items=items, total=total, page=page, per_page=per_page)

    async def followers(
        self, user_id: int, page: int = 1, per_page: int | None = None
    ) -> Page[UserData]:
        """Users following ``user_id``, in id order."""
        await self._require_user(user_id)
        page, per_page, offset = page_window(page, per_page)
        items = await self._repository.followers(
            user_id, limit=per_page, offset=offset
        )
        total = await self._repository.count_followers(user_id)
        return Page(items=items, total=total, page=page, per_page=per_page)

    async def counts(self, user_id: int) -> FollowCounts:
        return FollowCounts(
            following=await self._repository.count_followed_users(user_id),
            followers=await self._repository.count_followers(user_id),
        )
