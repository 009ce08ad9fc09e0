"""Micropost and feed schemas."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from pydantic import Field

from microblog.schemas.base import APIRequest, APIResponse
from microblog.schemas.pagination import PaginationMeta


if TYPE_CHECKING:
    from microblog.database.repositories.microposts import FeedItemData, MicropostData
    from microblog.services.pagination import Page


class MicropostCreateRequest(APIRequest):
    """New micropost."""

    content: str | None = Field(
        default=None,
        description="Post text, 1-140 characters",
        examples=["Lorem ipsum dolor sit amet"],
    )


class MicropostResponse(APIResponse):
    """A single micropost."""

    id: int = Field(..., description="Micropost ID")
    user_id: int = Field(..., description="Author ID")
    content: str = Field(..., description="Post text")
    created_at: datetime = Field(..., description="Creation time")

    @classmethod
    def from_micropost(cls, micropost: MicropostData) -> MicropostResponse:
        return cls(
            id=micropost.id,
            user_id=micropost.user_id,
            content=micropost.content,
            created_at=micropost.created_at,
        )


class FeedItemResponse(MicropostResponse):
    """A feed entry: a micropost and its author's name."""

    user_name: str = Field(..., description="Author display name")

    @classmethod
    def from_feed_item(cls, item: FeedItemData) -> FeedItemResponse:
        return cls(
            id=item.id,
            user_id=item.user_id,
            content=item.content,
            created_at=item.created_at,
            user_name=item.user_name,
        )


class MicropostListResponse(APIResponse):
    """A page of one user's microposts, newest first."""

    items: list[MicropostResponse]
    pagination: PaginationMeta

    @classmethod
    def from_page(cls, page: Page[MicropostData]) -> MicropostListResponse:
        return cls(
            items=[MicropostResponse.from_micropost(m) for m in page.items],
            pagination=PaginationMeta.from_page(page),
        )


class FeedResponse(APIResponse):
    """A page of the status feed, newest first."""

    items: list[FeedItemResponse]
    pagination: PaginationMeta

    @classmethod
    def from_page(cls, page: Page[FeedItemData]) -> FeedResponse:
        return cls(
            items=[FeedItemResponse.from_feed_item(item) for item in page.items],
            pagination=PaginationMeta.from_page(page),
        )
