"""Envelope schemas shared across endpoints."""

from typing import Generic, List, Sequence, TypeVar

from pydantic import BaseModel

from blog_backend.utils.pagination import PageInfo, paginate

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    """Paginated list response."""
    data: List[T]
    pagination: PageInfo

    @classmethod
    def build(cls, items: Sequence[T], *, page: int, page_size: int, total: int) -> "Page[T]":
        return cls(data=list(items), pagination=paginate(page, page_size, total))
