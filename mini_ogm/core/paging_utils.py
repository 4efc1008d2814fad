"""Conversions between caller paging types and session-native directives."""

from __future__ import annotations

from typing import Optional, Sequence, TypeVar

from .paging import Direction, Page, PageRequest, Sort
from .sort_order import SortOrder

T = TypeVar("T")


def convert_sort(sort: Optional[Sort]) -> SortOrder:
    """Translate a `Sort` into a `SortOrder`, preserving order and direction.

    `None` or an unsorted `Sort` yields an empty order.
    """

    sort_order = SortOrder()
    if sort is None:
        return sort_order
    for order in sort:
        if order.is_ascending:
            sort_order.add(order.property)
        else:
            sort_order.add(order.property, direction=Direction.DESC)
    return sort_order


def update_page(pageable: PageRequest, results: Sequence[T]) -> Page[T]:
    """Wrap one fetched page with an estimated total, without a count query.

    A full page is assumed to be followed by at least one more full page, so
    the estimate adds another `size` items. A short page is the last one and
    its total is exact.
    """

    size = pageable.size
    count = len(results)
    total = pageable.offset + count + (size if count == size else 0)
    return Page(list(results), pageable, total)
