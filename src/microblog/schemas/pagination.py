"""Pagination metadata shared by list responses."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import Field

from microblog.schemas.base import APIResponse


if TYPE_CHECKING:
    from microblog.services.pagination import Page


class PaginationMeta(APIResponse):
    """Where a page sits in the full result set."""

    page: int = Field(..., ge=1, description="1-based page number")
    per_page: int = Field(..., ge=1, description="Items per page")
    total: int = Field(..., ge=0, description="Total items across all pages")
    total_pages: int = Field(..., ge=0, description="Number of pages")

    @classmethod
    def from_page(cls, page: Page[Any]) -> PaginationMeta:
        return cls(
            page=page.page,
            per_page=page.per_page,
            total=page.total,
            total_pages=page.total_pages,
        )
