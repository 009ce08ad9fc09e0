"""User request/response schemas.

Request fields are optional at the schema level so that missing values are
reported by account validation with full messages rather than as generic
request errors.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from pydantic import Field

from microblog.schemas.base import APIRequest, APIResponse
from microblog.schemas.pagination import PaginationMeta


if TYPE_CHECKING:
    from microblog.database.repositories.users import UserData
    from microblog.services.follows import FollowCounts
    from microblog.services.pagination import Page


# =============================================================================
# Requests
# =============================================================================


class SignupRequest(APIRequest):
    """Signup form."""

    name: str | None = Field(default=None, description="Display name", examples=["Example User"])
    email: str | None = Field(default=None, description="Email address", examples=["user@example.com"])
    password: str | None = Field(default=None, description="Password (at least 6 characters, at most 72 bytes)")
    password_confirmation: str | None = Field(
        default=None, description="Must equal password"
    )


class UserUpdateRequest(APIRequest):
    """Profile edit form.

    ``admin`` is declared only so that attempts to set it are rejected
    instead of silently dropped.
    """

    name: str | None = Field(default=None, description="Display name")
    email: str | None = Field(default=None, description="Email address")
    password: str | None = Field(default=None, description="Password (at least 6 characters, at most 72 bytes)")
    password_confirmation: str | None = Field(
        default=None, description="Must equal password"
    )
    admin: bool | None = Field(
        default=None,
        description="Not assignable; supplying it is rejected with 403",
        json_schema_extra={"deprecated": True},
    )


# =============================================================================
# Responses
# =============================================================================


class UserResponse(APIResponse):
    """Public view of a user."""

    id: int = Field(..., description="User ID")
    name: str = Field(..., description="Display name")
    admin: bool = Field(..., description="Whether the user is an administrator")
    created_at: datetime = Field(..., description="Signup time")

    @classmethod
    def from_user(cls, user: UserData) -> UserResponse:
        return cls(
            id=user.id,
            name=user.name,
            admin=user.admin,
            created_at=user.created_at,
        )


class CurrentUserResponse(UserResponse):
    """The signed-in user's own account, including email."""

    email: str = Field(..., description="Email address")

    @classmethod
    def from_user(cls, user: UserData) -> CurrentUserResponse:
        return cls(
            id=user.id,
            name=user.name,
            admin=user.admin,
            created_at=user.created_at,
            email=user.email,
        )


class UserProfileResponse(UserResponse):
    """A user's profile page with follow and post counts."""

    micropost_count: int = Field(..., ge=0, description="Microposts written")
    following_count: int = Field(..., ge=0, description="Users this user follows")
    followers_count: int = Field(..., ge=0, description="Users following this user")
    is_following: bool | None = Field(
        default=None,
        description="Whether the viewer follows this user; null when anonymous or self",
    )

    @classmethod
    def build(
        cls,
        user: UserData,
        *,
        micropost_count: int,
        counts: FollowCounts,
        is_following: bool | None,
    ) -> UserProfileResponse:
        return cls(
            id=user.id,
            name=user.name,
            admin=user.admin,
            created_at=user.created_at,
            micropost_count=micropost_count,
            following_count=counts.following,
            followers_count=counts.followers,
            is_following=is_following,
        )


class UserListResponse(APIResponse):
    """A page of users."""

    items: list[UserResponse]
    pagination: PaginationMeta

    @classmethod
    def from_page(cls, page: Page[UserData]) -> UserListResponse:
        return cls(
            items=[UserResponse.from_user(user) for user in page.items],
            pagination=PaginationMeta.from_page(page),
        )
