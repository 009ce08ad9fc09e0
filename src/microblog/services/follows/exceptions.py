"""Exceptions for the follow service."""

from __future__ import annotations

from microblog.core.exceptions import (
    BadRequestException,
    ConflictException,
    NotFoundException,
)


class SelfFollowError(BadRequestException):
    """Raised when a user tries to follow themselves."""

    def __init__(self) -> None:
        super().__init__("Users cannot follow themselves")


class AlreadyFollowingError(ConflictException):
    """Raised when the follow edge already exists."""

    def __init__(self, follower_id: int, followed_id: int) -> None:
        self.follower_id = follower_id
        self.followed_id = followed_id
        super().__init__(f"User {follower_id} already follows user {followed_id}")


class RelationshipNotFoundError(NotFoundException):
    """Raised when unfollowing a user who is not followed."""

    def __init__(self, follower_id: int, followed_id: int) -> None:
        super().__init__("Relationship", f"{follower_id}->{followed_id}")
