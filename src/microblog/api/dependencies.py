"""FastAPI dependencies for service access.

Services are stateless wrappers around repositories that resolve the global
database pool lazily, so a fresh instance per request is cheap. Tests swap
them out through ``app.dependency_overrides``.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Query

from microblog.core.config import get_settings
from microblog.services.follows import FollowService
from microblog.services.microposts import MicropostService
from microblog.services.users import UserService


def get_user_service() -> UserService:
    return UserService()


def get_follow_service() -> FollowService:
    return FollowService()


def get_micropost_service() -> MicropostService:
    return MicropostService()


class PageParams:
    """``?page=&perPage=`` query parameters."""

    def __init__(
        self,
        page: Annotated[int, Query(ge=1, description="1-based page number")] = 1,
        per_page: Annotated[
            int | None,
            Query(
                alias="perPage",
                ge=1,
                le=get_settings().pagination.max_per_page,
                description="Items per page",
            ),
        ] = None,
    ) -> None:
        self.page = page
        self.per_page = per_page


UserServiceDep = Annotated[UserService, Depends(get_user_service)]
FollowServiceDep = Annotated[FollowService, Depends(get_follow_service)]
MicropostServiceDep = Annotated[MicropostService, Depends(get_micropost_service)]
Pagination = Annotated[PageParams, Depends()]
