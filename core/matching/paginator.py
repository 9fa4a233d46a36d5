"""
Pagination over a refined, ordered collection.
"""

import math
from typing import List, Optional, Sequence, Tuple, TypeVar

from core.matching.models import PaginationState

T = TypeVar("T")


def paginate(
    items: Sequence[T],
    page: int,
    limit: int,
    total: Optional[int] = None
) -> Tuple[List[T], PaginationState]:
    """
    Slice one page out of items and compute its metadata.

    Out-of-range pages yield an empty slice with accurate metadata; the page
    number is never clamped.

    Args:
        items: Fully filtered and ordered collection.
        page: 1-based page number.
        limit: Page size.
        total: Count before any filter. Defaults to len(items) for callers
            without a separate unfiltered count.

    Returns:
        Tuple of (page slice, PaginationState).

    Raises:
        ValueError: If page or limit is not positive, or total is smaller
            than the filtered count (a filtered count passed as total).
    """
    if page < 1 or limit < 1:
        raise ValueError(f"page and limit must be positive, got page={page} limit={limit}")

    total_filtered = len(items)
    if total is None:
        total = total_filtered
    if total < total_filtered:
        raise ValueError(
            f"total ({total}) is smaller than the filtered count ({total_filtered})"
        )

    offset = (page - 1) * limit
    page_items = list(items[offset:offset + limit])
    total_pages = math.ceil(total_filtered / limit)

    return page_items, PaginationState(
        page=page,
        limit=limit,
        total=total,
        total_filtered=total_filtered,
        total_pages=total_pages,
        has_next_page=page < total_pages,
        has_prev_page=page > 1,
    )
