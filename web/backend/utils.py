#!/usr/bin/env python3
"""
Utility functions for shaping API responses.
"""

import math
from datetime import date
from decimal import Decimal
from typing import Optional, Any

from core.matching.models import PaginationState
from .models.responses import PaginationInfo


def safe_float(value: Optional[Any], default: float = 0.0) -> float:
    """
    Safely convert value to float.

    Args:
        value: Value to convert (can be Decimal, int, float, or None).
        default: Default value if conversion fails, value is None or NaN.

    Returns:
        Float value.
    """
    if value is None:
        return default

    if isinstance(value, Decimal):
        value = float(value)

    try:
        result = float(value)
    except (ValueError, TypeError):
        return default
    return default if math.isnan(result) else result


def display_score(value: Optional[Any]) -> float:
    """Similarity score clipped to [0, 1] and rounded for display."""
    return round(max(0.0, min(1.0, safe_float(value))), 4)


def safe_datetime_iso(dt: Optional[date]) -> Optional[str]:
    """
    Safely convert a date or datetime to ISO format string.

    Returns:
        ISO format string or None.
    """
    if dt is None:
        return None
    return dt.isoformat()


def to_pagination_info(state: PaginationState) -> PaginationInfo:
    return PaginationInfo(
        page=state.page,
        limit=state.limit,
        total=state.total,
        total_filtered=state.total_filtered,
        total_pages=state.total_pages,
        has_next_page=state.has_next_page,
        has_prev_page=state.has_prev_page
    )
