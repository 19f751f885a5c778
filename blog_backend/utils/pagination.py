"""Pagination helpers shared by every list operation."""

import math
from typing import Optional, Tuple

from pydantic import BaseModel

from blog_backend.config import settings
from blog_backend.core.exceptions import ValidationError


class PageInfo(BaseModel):
    """Normalized page descriptor returned next to every list payload."""
    current_page: int
    next_page: Optional[int] = None
    prev_page: Optional[int] = None
    total_pages: int
    total_docs: int


def normalize_page_params(page: Optional[int] = None, page_size: Optional[int] = None) -> Tuple[int, int]:
    """Apply defaults, reject non-positive values and clamp oversized pages.

    Raises:
        ValidationError: If ``page`` or ``page_size`` is lower than 1
    """
    page = 1 if page is None else page
    page_size = settings.DEFAULT_PAGE_SIZE if page_size is None else page_size
    if page < 1:
        raise ValidationError("page must be greater than or equal to 1")
    if page_size < 1:
        raise ValidationError("page_size must be greater than or equal to 1")
    return page, min(page_size, settings.MAX_PAGE_SIZE)


def page_offset(page: int, page_size: int) -> int:
    return (page - 1) * page_size


def paginate(page: int, page_size: int, total: int) -> PageInfo:
    """Build the page descriptor for ``total`` rows split in ``page_size`` chunks."""
    if page < 1 or page_size < 1:
        raise ValidationError("page and page_size must be greater than or equal to 1")
    total_pages = math.ceil(total / page_size)
    return PageInfo(
        current_page=page,
        next_page=page + 1 if page < total_pages else None,
        prev_page=page - 1 if page > 1 else None,
        total_pages=total_pages,
        total_docs=total,
    )
