"""Pydantic schemas for request/response validation."""

from microblog.schemas.auth import TokenResponse
from microblog.schemas.base import APIRequest, APIResponse
from microblog.schemas.enums import HealthStatus
from microblog.schemas.health import HealthResponse, ReadinessResponse
from microblog.schemas.micropost import (
    FeedItemResponse,
    FeedResponse,
    MicropostCreateRequest,
    MicropostListResponse,
    MicropostResponse,
)
from microblog.schemas.pagination import PaginationMeta
from microblog.schemas.relationship import (
    FollowRequest,
    FollowStatusResponse,
    RelationshipResponse,
)
from microblog.schemas.root import RootResponse
from microblog.schemas.user import (
    CurrentUserResponse,
    SignupRequest,
    UserListResponse,
    UserProfileResponse,
    UserResponse,
    UserUpdateRequest,
)


__all__ = [
    "APIRequest",
    "APIResponse",
    "CurrentUserResponse",
    "FeedItemResponse",
    "FeedResponse",
    "FollowRequest",
    "FollowStatusResponse",
    "HealthResponse",
    "HealthStatus",
    "MicropostCreateRequest",
    "MicropostListResponse",
    "MicropostResponse",
    "PaginationMeta",
    "ReadinessResponse",
    "RelationshipResponse",
    "RootResponse",
    "SignupRequest",
    "TokenResponse",
    "UserListResponse",
    "UserProfileResponse",
    "UserResponse",
    "UserUpdateRequest",
]
