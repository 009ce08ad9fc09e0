"""Status feed endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from microblog.api.dependencies import MicropostServiceDep, Pagination
from microblog.auth.dependencies import CurrentUser
from microblog.schemas.micropost import FeedResponse


router = APIRouter(tags=["Feed"])


@router.get(
    "/feed",
    response_model=FeedResponse,
    summary="Status feed",
    description=(
        "The current user's microposts together with those of every user "
        "they follow, newest first."
    ),
)
async def get_feed(
    user: CurrentUser,
    service: MicropostServiceDep,
    paging: Pagination,
) -> FeedResponse:
    page = await service.feed(user.id, paging.page, paging.per_page)
    return FeedResponse.from_page(page)
