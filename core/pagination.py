"""Page slicing and the compact page-number window used by list controls."""

from __future__ import annotations

import math
from dataclasses import replace
from typing import Sequence, Union

from core.models import Expense, Page, PageState

__all__ = [
    "ELLIPSIS",
    "clamp_page",
    "first_page",
    "go_to_page",
    "last_page",
    "next_page",
    "page_window",
    "paginate",
    "previous_page",
    "total_pages",
]

ELLIPSIS = "…"

WindowEntry = Union[int, str]


def total_pages(item_count: int, page_size: int) -> int:
    """Number of pages needed for ``item_count`` items; ``0`` when there are none."""

    if page_size <= 0:
        raise ValueError("page_size must be a positive integer")
    if item_count <= 0:
        return 0
    return math.ceil(item_count / page_size)


def clamp_page(page: int, pages: int) -> int:
    return min(max(page, 1), max(pages, 1))


def page_window(current: int, pages: int) -> list[WindowEntry]:
    """Return page numbers to display around ``current``.

    The first and last page are always present together with the neighbours
    of the current page. Every run of skipped pages collapses into a single
    :data:`ELLIPSIS` marker.
    """

    if pages <= 0:
        return []

    current = clamp_page(current, pages)
    kept = {1, pages}
    kept.update(number for number in range(current - 1, current + 2) if 1 <= number <= pages)

    window: list[WindowEntry] = []
    previous = None
    for number in sorted(kept):
        if previous is not None and number - previous > 1:
            window.append(ELLIPSIS)
        window.append(number)
        previous = number
    return window


def paginate(expenses: Sequence[Expense], state: PageState) -> Page:
    """Slice ``expenses`` to the page requested by ``state``, clamped into range."""

    items = list(expenses)
    pages = total_pages(len(items), state.page_size)
    current = clamp_page(state.current_page, pages)
    start = (current - 1) * state.page_size
    return Page(
        items=tuple(items[start : start + state.page_size]),
        number=current,
        page_size=state.page_size,
        total_items=len(items),
        total_pages=pages,
        window=tuple(page_window(current, pages)),
    )


def go_to_page(state: PageState, page: int, pages: int) -> PageState:
    return replace(state, current_page=clamp_page(page, pages))


def first_page(state: PageState) -> PageState:
    return replace(state, current_page=1)


def previous_page(state: PageState, pages: int) -> PageState:
    return go_to_page(state, state.current_page - 1, pages)


def next_page(state: PageState, pages: int) -> PageState:
    return go_to_page(state, state.current_page + 1, pages)


def last_page(state: PageState, pages: int) -> PageState:
    return go_to_page(state, pages, pages)
