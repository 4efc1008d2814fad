"""Sorting and paging primitives passed as control arguments to query methods.

`Sort` and `PageRequest` are never bound as query parameters. The dispatcher
recognizes them by type and turns them into a session sort order and
pagination directive instead.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Generic, Iterator, Optional, Sequence, TypeVar

T = TypeVar("T")
R = TypeVar("R")


class Direction(str, Enum):
    """Sort direction of one ordered property."""

    ASC = "ASC"
    DESC = "DESC"

    @classmethod
    def from_string(cls, value: str | Direction) -> Direction:
        """Normalize case-insensitive direction input into a `Direction`."""

        if isinstance(value, Direction):
            return value
        if isinstance(value, str):
            key = value.strip().upper()
            if key in cls._value2member_map_:
                return cls(key)
        allowed = sorted(cls._value2member_map_.keys())
        raise ValueError(f"Unsupported sort direction: {value!r}. Supported: {allowed}")


@dataclass(frozen=True)
class Order:
    """One ordered property.

    Attributes:
        property: Property name to order by.
        direction: Ascending by default.
    """

    property: str
    direction: Direction = Direction.ASC

    def __post_init__(self) -> None:
        if not isinstance(self.property, str) or not self.property.strip():
            raise ValueError("Order property must be a non-empty string.")
        object.__setattr__(self, "direction", Direction.from_string(self.direction))

    @property
    def is_ascending(self) -> bool:
        return self.direction is Direction.ASC

    @property
    def is_descending(self) -> bool:
        return self.direction is Direction.DESC

    def with_direction(self, direction: Direction | str) -> Order:
        return Order(self.property, Direction.from_string(direction))


@dataclass(frozen=True)
class Sort:
    """Ordered sequence of `Order` items; earlier items take precedence."""

    orders: tuple[Order, ...] = ()

    @classmethod
    def by(cls, *properties: str, direction: Direction | str = Direction.ASC) -> Sort:
        """Build a sort over properties sharing one direction."""

        normalized = Direction.from_string(direction)
        return cls(tuple(Order(name, normalized) for name in properties))

    @classmethod
    def by_orders(cls, *orders: Order) -> Sort:
        for item in orders:
            if not isinstance(item, Order):
                raise TypeError("Sort.by_orders() accepts Order instances only.")
        return cls(tuple(orders))

    @classmethod
    def unsorted(cls) -> Sort:
        return cls()

    @property
    def is_sorted(self) -> bool:
        return bool(self.orders)

    def and_(self, other: Sort) -> Sort:
        """Return a sort with `other` orders appended after this one."""

        return Sort(self.orders + tuple(other))

    def ascending(self) -> Sort:
        return Sort(tuple(item.with_direction(Direction.ASC) for item in self.orders))

    def descending(self) -> Sort:
        return Sort(tuple(item.with_direction(Direction.DESC) for item in self.orders))

    def order_for(self, property: str) -> Optional[Order]:
        for item in self.orders:
            if item.property == property:
                return item
        return None

    def __iter__(self) -> Iterator[Order]:
        return iter(self.orders)

    def __len__(self) -> int:
        return len(self.orders)

    def __bool__(self) -> bool:
        return self.is_sorted


@dataclass(frozen=True)
class PageRequest:
    """Zero-based page coordinates plus the sort applied to the page.

    Raises:
        ValueError: If `page` is negative or `size` is smaller than one.
    """

    page: int
    size: int
    sort: Sort = field(default_factory=Sort.unsorted)

    def __post_init__(self) -> None:
        if self.page < 0:
            raise ValueError("Page index must not be less than zero.")
        if self.size < 1:
            raise ValueError("Page size must not be less than one.")
        if self.sort is None:
            object.__setattr__(self, "sort", Sort.unsorted())

    @classmethod
    def of(cls, page: int, size: int, sort: Optional[Sort] = None) -> PageRequest:
        return cls(page, size, sort if sort is not None else Sort.unsorted())

    @property
    def offset(self) -> int:
        return self.page * self.size

    @property
    def has_previous(self) -> bool:
        return self.page > 0

    def next(self) -> PageRequest:
        return PageRequest(self.page + 1, self.size, self.sort)

    def previous_or_first(self) -> PageRequest:
        return PageRequest(self.page - 1, self.size, self.sort) if self.has_previous else self.first()

    def first(self) -> PageRequest:
        return PageRequest(0, self.size, self.sort)


@dataclass(frozen=True)
class Page(Generic[T]):
    """One materialized page of results and the total item count.

    `total` is never lower than the number of items seen up to and including
    this page.
    """

    content: Sequence[T]
    pageable: PageRequest
    total: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "content", list(self.content))
        seen = self.pageable.offset + len(self.content)
        if self.total < seen:
            object.__setattr__(self, "total", seen)

    @property
    def number(self) -> int:
        return self.pageable.page

    @property
    def size(self) -> int:
        return self.pageable.size

    @property
    def sort(self) -> Sort:
        return self.pageable.sort

    @property
    def number_of_elements(self) -> int:
        return len(self.content)

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.size)

    @property
    def has_content(self) -> bool:
        return bool(self.content)

    @property
    def has_next(self) -> bool:
        return self.number + 1 < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.number > 0

    @property
    def is_first(self) -> bool:
        return not self.has_previous

    @property
    def is_last(self) -> bool:
        return not self.has_next

    def next_pageable(self) -> Optional[PageRequest]:
        return self.pageable.next() if self.has_next else None

    def previous_pageable(self) -> Optional[PageRequest]:
        return self.pageable.previous_or_first() if self.has_previous else None

    def map(self, converter: Callable[[T], R]) -> Page[R]:
        """Return a page with converted content and the same paging data."""

        return Page([converter(item) for item in self.content], self.pageable, self.total)

    def __iter__(self) -> Iterator[T]:
        return iter(self.content)

    def __len__(self) -> int:
        return len(self.content)


def is_control_argument(value: Any) -> bool:
    """Return whether a call argument steers sorting/paging instead of binding."""

    return isinstance(value, (Sort, PageRequest))
