"""User endpoints.

Provides signup, the user index, profiles, profile edits, admin deletion,
and the per-user micropost and follow listings.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from microblog.api.dependencies import (
    FollowServiceDep,
    MicropostServiceDep,
    Pagination,
    UserServiceDep,
)
from microblog.api.v1.endpoints.auth import start_session
from microblog.auth.dependencies import AdminUser, CurrentUser, OptionalUser
from microblog.core.config import Settings, get_settings
from microblog.core.exceptions import ErrorResponse
from microblog.schemas.auth import TokenResponse
from microblog.schemas.micropost import MicropostListResponse
from microblog.schemas.user import (
    CurrentUserResponse,
    SignupRequest,
    UserListResponse,
    UserProfileResponse,
    UserUpdateRequest,
)


router = APIRouter(prefix="/users", tags=["Users"])

_NOT_FOUND = {404: {"model": ErrorResponse, "description": "User not found"}}


@router.post(
    "",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Sign up",
    description="Create an account and sign it in.",
    responses={422: {"model": ErrorResponse, "description": "Invalid signup data"}},
)
async def signup(
    body: SignupRequest,
    response: Response,
    service: UserServiceDep,
    settings: Annotated[Settings, Depends(get_settings)],
) -> TokenResponse:
    user = await service.create(
        name=body.name,
        email=body.email,
        password=body.password,
        password_confirmation=body.password_confirmation,
    )
    return await start_session(user, service, response, settings)


@router.get(
    "",
    response_model=UserListResponse,
    summary="List users",
    description="All users in signup order. Requires sign-in.",
)
async def list_users(
    _: CurrentUser,
    service: UserServiceDep,
    paging: Pagination,
) -> UserListResponse:
    page = await service.list(paging.page, paging.per_page)
    return UserListResponse.from_page(page)


@router.get(
    "/{user_id}",
    response_model=UserProfileResponse,
    summary="User profile",
    description=(
        "A user's profile with micropost, following and follower counts. "
        "When signed in, also reports whether the viewer follows this user."
    ),
    responses=_NOT_FOUND,
)
async def get_user(
    user_id: int,
    viewer: OptionalUser,
    users: UserServiceDep,
    follows: FollowServiceDep,
    microposts: MicropostServiceDep,
) -> UserProfileResponse:
    user = await users.get(user_id)

    is_following: bool | None = None
    if viewer is not None and viewer.id != user.id:
        is_following = await follows.is_following(viewer.id, user.id)

    return UserProfileResponse.build(
        user,
        micropost_count=await microposts.count_for_user(user.id),
        counts=await follows.counts(user.id),
        is_following=is_following,
    )


@router.patch(
    "/{user_id}",
    response_model=CurrentUserResponse,
    summary="Edit profile",
    description=(
        "Change name, email or password. Only the account owner may edit, "
        "and the admin flag can never be set."
    ),
    responses={
        403: {"model": ErrorResponse, "description": "Wrong user or forbidden attribute"},
        422: {"model": ErrorResponse, "description": "Invalid profile data"},
        **_NOT_FOUND,
    },
)
async def update_user(
    user_id: int,
    body: UserUpdateRequest,
    current_user: CurrentUser,
    service: UserServiceDep,
) -> CurrentUserResponse:
    attributes = body.model_dump(exclude_unset=True, by_alias=False)
    user = await service.update(current_user, user_id, attributes)
    return CurrentUserResponse.from_user(user)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete user",
    description="Admin only. Removes the user's microposts and relationships too.",
    responses={
        403: {"model": ErrorResponse, "description": "Not an admin, or self-deletion"},
        **_NOT_FOUND,
    },
)
async def delete_user(
    user_id: int,
    admin: AdminUser,
    service: UserServiceDep,
) -> None:
    await service.delete(admin, user_id)


@router.get(
    "/{user_id}/microposts",
    response_model=MicropostListResponse,
    summary="User's microposts",
    description="A user's microposts, newest first.",
    responses=_NOT_FOUND,
)
async def list_user_microposts(
    user_id: int,
    service: MicropostServiceDep,
    paging: Pagination,
) -> MicropostListResponse:
    page = await service.list_for_user(user_id, paging.page, paging.per_page)
    return MicropostListResponse.from_page(page)


@router.get(
    "/{user_id}/following",
    response_model=UserListResponse,
    summary="Followed users",
    description="Users this user follows. Requires sign-in.",
    responses=_NOT_FOUND,
)
async def list_following(
    user_id: int,
    _: CurrentUser,
    service: FollowServiceDep,
    paging: Pagination,
) -> UserListResponse:
    page = await service.following(user_id, paging.page, paging.per_page)
    return UserListResponse.from_page(page)


@router.get(
    "/{user_id}/followers",
    response_model=UserListResponse,
    summary="Followers",
    description="Users following this user. Requires sign-in.",
    responses=_NOT_FOUND,
)
async def list_followers(
    user_id: int,
    _: CurrentUser,
    service: FollowServiceDep,
    paging: Pagination,
) -> UserListResponse:
    page = await service.followers(user_id, paging.page, paging.per_page)
    return UserListResponse.from_page(page)
