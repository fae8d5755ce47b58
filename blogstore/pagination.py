"""Page windows over ordered sequences"""

import math
from collections.abc import Sequence
from typing import Generic, TypeVar

from blogstore.entities import ApiModel, PaginationInfo

T = TypeVar("T")


class Page(ApiModel, Generic[T]):
    data: list[T]
    pagination: PaginationInfo


def paginate(items: Sequence[T], page: int, limit: int) -> Page[T]:
    """
    Slice one page out of an ordered sequence.

    Args:
        items: The full ordered sequence
        page: Page number (1-based); values below 1 are treated as 1
        limit: Page size, must be 1 or greater

    Returns:
        The page window and its pagination metadata. A page past the end
        has empty data and still-valid metadata.
    """
    if limit < 1:
        raise ValueError("Per page count must be 1 or greater")
    page = max(page, 1)

    total = len(items)
    total_pages = math.ceil(total / limit)
    start = (page - 1) * limit

    return Page(
        data=list(items[start : start + limit]),
        pagination=PaginationInfo(
            page=page,
            limit=limit,
            total=total,
            total_pages=total_pages,
            has_next=page < total_pages,
            has_prev=page > 1,
        ),
    )
