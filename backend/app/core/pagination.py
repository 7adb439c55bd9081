"""Pagination Calculator: bounded page-number window for listing views.

Invariants:
    - Pure function: no IO, no async, no DB
    - current_page always within [1, max(total_pages, 1)]
    - Window is at most 5 pages wide: [page-2, page+2] clipped to [1, total_pages]
    - Window widened to 5 only when total_pages >= 5; with 1-4 pages it stays as clipped
    - previous/next page numbers are NOT clamped (may be 0 or total_pages+1);
      callers must check has_previous/has_next before rendering a link

Design Decisions:
    - Frozen dataclass output: safe to share, serializes via to_dict()
    - page_size < 1 normalized to 1 rather than raising
"""

from dataclasses import dataclass, field
import math

_WINDOW_RADIUS = 2
_MIN_WINDOW = 5


@dataclass(frozen=True)
class PaginationView:
    """Everything a listing needs to render its page controls."""
    current_page: int
    total_pages: int
    has_other_pages: bool
    has_previous: bool
    has_next: bool
    previous_page_number: int
    next_page_number: int
    page_range: list[int] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "current_page": self.current_page,
            "total_pages": self.total_pages,
            "has_other_pages": self.has_other_pages,
            "has_previous": self.has_previous,
            "has_next": self.has_next,
            "previous_page_number": self.previous_page_number,
            "next_page_number": self.next_page_number,
            "page_range": list(self.page_range),
        }


def _clamp_page(current_page: int, total_pages: int) -> int:
    if current_page < 1:
        return 1
    if current_page > max(total_pages, 1):
        return max(total_pages, 1)
    return current_page


def _window(current_page: int, total_pages: int) -> list[int]:
    start = max(current_page - _WINDOW_RADIUS, 1)
    end = min(current_page + _WINDOW_RADIUS, total_pages)

    if end - start + 1 < _MIN_WINDOW and total_pages >= _MIN_WINDOW:
        if start == 1:
            end = _MIN_WINDOW
        elif end == total_pages:
            start = total_pages - (_MIN_WINDOW - 1)

    return list(range(start, end + 1))


def paginate(current_page: int, total_items: int, page_size: int) -> PaginationView:
    """Compute the page window and navigation flags. Pure, never raises."""
    page_size = max(page_size, 1)
    total_items = max(total_items, 0)
    total_pages = math.ceil(total_items / page_size)
    page = _clamp_page(current_page, total_pages)

    return PaginationView(
        current_page=page,
        total_pages=total_pages,
        has_other_pages=total_pages > 1,
        has_previous=page > 1,
        has_next=page < total_pages,
        previous_page_number=page - 1,
        next_page_number=page + 1,
        page_range=_window(page, total_pages),
    )


def page_offset(current_page: int, page_size: int) -> int:
    """SQL offset for a requested page (pages below 1 read as page 1)."""
    return (max(current_page, 1) - 1) * max(page_size, 1)
