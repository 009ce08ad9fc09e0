"""Micropost service: posting, deleting, per-user listings and the feed.

Provides methods for:
- Creating microposts with content validation
- Owner-only deletion
- A user's own microposts, newest first
- The status feed: the user's posts plus posts by everyone they follow
"""

from __future__ import annotations

from microblog.core.exceptions import ErrorDetail
from microblog.database.exceptions import MissingReferenceError
from microblog.database.repositories.microposts import (
    FeedItemData,
    MicropostData,
    MicropostRepository,
)
from microblog.database.repositories.users import UserRepository
from microblog.observability.logging import get_logger
from microblog.observability.metrics import MICROPOSTS_TOTAL
from microblog.services.microposts.constants import CONTENT_MAX_LENGTH
from microblog.services.microposts.exceptions import (
    MicropostNotFoundError,
    MicropostValidationError,
)
from microblog.services.pagination import Page, page_window
from microblog.services.users.exceptions import UserNotFoundError


logger = get_logger(__name__)


def validate_content(content: str | None) -> list[ErrorDetail]:
    """Content must be non-blank and at most 140 characters."""
    if content is None or not content.strip():
        return [
            ErrorDetail(code="blank", message="Content can't be blank", field="content")
        ]
    if len(content) > CONTENT_MAX_LENGTH:
        return [
            ErrorDetail(
                code="too_long",
                message=(
                    f"Content is too long (maximum is {CONTENT_MAX_LENGTH} characters)"
                ),
                field="content",
            )
        ]
    return []


class MicropostService:
    """Service for microposts and status feeds."""

    def __init__(
        self,
        repository: MicropostRepository | None = None,
        user_repository: UserRepository | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            repository: Optional MicropostRepository instance.
            user_repository: Optional UserRepository used for existence checks.
        """
        self._repository = repository or MicropostRepository()
        self._users = user_repository or UserRepository()

    async def create(self, user_id: int, content: str | None) -> MicropostData:
        """Post a micropost as ``user_id``.

        Raises:
            MicropostValidationError: If the content is blank or too long.
            UserNotFoundError: If the author does not exist.
        """
        errors = validate_content(content)
        if errors:
            raise MicropostValidationError(errors)
        assert content is not None

        try:
            micropost = await self._repository.create(user_id=user_id, content=content)
        except MissingReferenceError:
            raise UserNotFoundError(user_id) from None

        MICROPOSTS_TOTAL.labels(action="create").inc()
        logger.info("Micropost created", micropost_id=micropost.id, user_id=user_id)
        return micropost

    async def delete(self, user_id: int, micropost_id: int) -> None:
        """Delete one of ``user_id``'s microposts.

        Raises:
            MicropostNotFoundError: If the micropost does not exist or is
                owned by someone else.
        """
        if not await self._repository.delete_owned(micropost_id, user_id):
            logger.info(
                "Micropost delete refused", micropost_id=micropost_id, user_id=user_id
            )
            raise MicropostNotFoundError(micropost_id)

        MICROPOSTS_TOTAL.labels(action="delete").inc()
        logger.info("Micropost deleted", micropost_id=micropost_id, user_id=user_id)

    async def list_for_user(
        self, user_id: int, page: int = 1, per_page: int | None = None
    ) -> Page[MicropostData]:
        """One user's microposts, newest first.

        Raises:
            UserNotFoundError: If the user does not exist.
        """
        if await self._users.get_by_id(user_id) is None:
            raise UserNotFoundError(user_id)

        page, per_page, offset = page_window(page, per_page)
        items = await self._repository.list_by_user(
            user_id, limit=per_page, offset=offset
        )
        total = await self._repository.count_by_user(user_id)
        return Page(items=items, total=total, page=page, per_page=per_page)

    async def count_for_user(self, user_id: int) -> int:
        return await self._repository.count_by_user(user_id)

    async def feed(
        self, user_id: int, page: int = 1, per_page: int | None = None
    ) -> Page[FeedItemData]:
        """The status feed for ``user_id``, newest first."""
        page, per_page, offset = page_window(page, per_page)
        items = await self._repository.feed(user_id, limit=per_page, offset=offset)
        total = await self._repository.count_feed(user_id)
        logger.debug("Feed loaded", user_id=user_id, page=page, total=total)
        return Page(items=items, total=total, page=page, per_page=per_page)
