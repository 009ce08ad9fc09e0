"""Follow relationship schemas."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from pydantic import Field

from microblog.schemas.base import APIRequest, APIResponse


if TYPE_CHECKING:
    from microblog.database.repositories.relationships import RelationshipData


class FollowRequest(APIRequest):
    """Follow another user."""

    followed_id: int = Field(..., description="ID of the user to follow", examples=[2])


class RelationshipResponse(APIResponse):
    """A directed follow edge."""

    follower_id: int = Field(..., description="The follower")
    followed_id: int = Field(..., description="The user being followed")
    created_at: datetime = Field(..., description="When the follow happened")

    @classmethod
    def from_relationship(cls, relationship: RelationshipData) -> RelationshipResponse:
        return cls(
            follower_id=relationship.follower_id,
            followed_id=relationship.followed_id,
            created_at=relationship.created_at,
        )


class FollowStatusResponse(APIResponse):
    """Whether the current user follows a given user."""

    follower_id: int
    followed_id: int
    following: bool
