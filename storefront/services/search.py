"""
Client-side search and pagination over an in-memory record snapshot.
"""

from __future__ import annotations

import math
from typing import List, Optional, Sequence, Tuple, TypeVar

from storefront.domain.models import PaginationState, UserRecord

T = TypeVar("T")

DEFAULT_WINDOW_SIZE = 5


def _contains(haystack: Optional[str], needle: str) -> bool:
    return haystack is not None and needle in haystack


def matches(record: UserRecord, term: str) -> bool:
    """
    Name and email are matched case-insensitively; phone is matched on the raw term.
    """
    needle = term.lower()
    return (
        _contains(record.name.lower() if record.name is not None else None, needle)
        or _contains(record.email.lower() if record.email is not None else None, needle)
        or _contains(record.phone, term)
    )


def filter_records(records: Sequence[UserRecord], term: str) -> List[UserRecord]:
    """Return records matching ``term``, preserving order. An empty term matches all."""
    if not term:
        return list(records)
    return [record for record in records if matches(record, term)]


def total_pages_for(count: int, page_size: int) -> int:
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")
    return math.ceil(count / page_size)


def clamp_page(page: int, total_pages: int) -> int:
    """Clamp ``page`` into ``[1, max(total_pages, 1)]``."""
    return min(max(page, 1), max(total_pages, 1))


def paginate(items: Sequence[T], page: int, page_size: int) -> Tuple[List[T], int]:
    """
    Slice one page out of ``items``.

    Returns the page items and the total page count. ``page`` must already be
    clamped with ``clamp_page``.

    Raises
    ------
    ValueError
        If ``page_size`` is below 1 or ``page`` is out of range.
    """
    total_pages = total_pages_for(len(items), page_size)
    if page != clamp_page(page, total_pages):
        raise ValueError(f"page {page} outside 1..{max(total_pages, 1)}")
    start = (page - 1) * page_size
    return list(items[start : start + page_size]), total_pages


def visible_page_window(
    current_page: int, total_pages: int, window_size: int = DEFAULT_WINDOW_SIZE
) -> List[int]:
    """
    Page numbers to render as buttons.

    Shows every page when they fit; otherwise pins the window to the start or
    end near the edges and centers it on ``current_page`` elsewhere.
    """
    if total_pages <= 0:
        return []
    if total_pages <= window_size:
        return list(range(1, total_pages + 1))
    half = window_size // 2
    if current_page <= half + 1:
        start = 1
    elif current_page >= total_pages - half:
        start = total_pages - window_size + 1
    else:
        start = current_page - half
    return list(range(start, start + window_size))


def build_pagination(total_items: int, page: int, items_per_page: int) -> PaginationState:
    """Build a PaginationState with ``page`` clamped into range."""
    total_pages = total_pages_for(total_items, items_per_page)
    return PaginationState(
        current_page=clamp_page(page, total_pages),
        items_per_page=items_per_page,
        total_items=total_items,
    )


def page_bounds(state: PaginationState) -> Tuple[int, int]:
    """1-based positions of the first and last item on the current page (0, 0 when empty)."""
    if state.total_items == 0:
        return 0, 0
    first = (state.current_page - 1) * state.items_per_page + 1
    last = min(state.current_page * state.items_per_page, state.total_items)
    return first, last


__all__ = [
    "DEFAULT_WINDOW_SIZE",
    "build_pagination",
    "clamp_page",
    "filter_records",
    "matches",
    "page_bounds",
    "paginate",
    "total_pages_for",
    "visible_page_window",
]
