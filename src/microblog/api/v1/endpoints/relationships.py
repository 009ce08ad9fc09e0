"""Follow / unfollow endpoints.

The current user is always the follower.
"""

from __future__ import annotations

from fastapi import APIRouter, status

from microblog.api.dependencies import FollowServiceDep
from microblog.auth.dependencies import CurrentUser
from microblog.core.exceptions import ErrorResponse
from microblog.schemas.relationship import (
    FollowRequest,
    FollowStatusResponse,
    RelationshipResponse,
)


router = APIRouter(prefix="/relationships", tags=["Relationships"])


@router.post(
    "",
    response_model=RelationshipResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Follow a user",
    responses={
        400: {"model": ErrorResponse, "description": "Cannot follow yourself"},
        404: {"model": ErrorResponse, "description": "User not found"},
        409: {"model": ErrorResponse, "description": "Already following"},
    },
)
async def follow(
    body: FollowRequest,
    user: CurrentUser,
    service: FollowServiceDep,
) -> RelationshipResponse:
    relationship = await service.follow(user.id, body.followed_id)
    return RelationshipResponse.from_relationship(relationship)


@router.get(
    "/{followed_id}",
    response_model=FollowStatusResponse,
    summary="Is following",
    description="Whether the current user follows the given user.",
)
async def follow_status(
    followed_id: int,
    user: CurrentUser,
    service: FollowServiceDep,
) -> FollowStatusResponse:
    return FollowStatusResponse(
        follower_id=user.id,
        followed_id=followed_id,
        following=await service.is_following(user.id, followed_id),
    )


@router.delete(
    "/{followed_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Unfollow a user",
    responses={404: {"model": ErrorResponse, "description": "Not following"}},
)
async def unfollow(
    followed_id: int,
    user: CurrentUser,
    service: FollowServiceDep,
) -> None:
    await service.unfollow(user.id, followed_id)
