"""Page-based pagination shared by the services."""

from __future__ import annotations

from math import ceil
from typing import Generic, TypeVar

from pydantic import BaseModel

from microblog.core.config import get_settings


T = TypeVar("T")

# OFFSET is a bigint parameter
MAX_OFFSET = 2**63 - 1


class Page(BaseModel, Generic[T]):
    """One page of an ordered result set."""

    items: list[T]
    total: int
    page: int
    per_page: int

    @property
    def total_pages(self) -> int:
        return ceil(self.total / self.per_page) if self.per_page else 0


def page_window(page: int, per_page: int | None) -> tuple[int, int, int]:
    """Normalize paging arguments.

    ``per_page`` falls back to ``pagination.per_page`` and is capped at
    ``pagination.max_per_page``; ``page`` is 1-based and clamped so that the
    offset stays within ``MAX_OFFSET``.

    Returns:
        ``(page, per_page, offset)``
    """
    settings = get_settings().pagination
    page = max(page, 1)
    if per_page is None or per_page < 1:
        per_page = settings.per_page
    per_page = min(per_page, settings.max_per_page)
    page = min(page, MAX_OFFSET // per_page)
    return page, per_page, (page - 1) * per_page
