"""Session-native ordering and pagination directives."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from .paging import Direction


@dataclass(frozen=True)
class SortClause:
    """One property ordered in one direction."""

    property: str
    direction: Direction = Direction.ASC


class SortOrder:
    """Ordered clauses handed to the session alongside a query."""

    def __init__(self) -> None:
        self._clauses: list[SortClause] = []

    def add(
        self,
        *properties: str,
        direction: Direction = Direction.ASC,
    ) -> SortOrder:
        """Append properties in the given direction and return `self`."""

        for name in properties:
            self._clauses.append(SortClause(name, direction))
        return self

    @property
    def clauses(self) -> tuple[SortClause, ...]:
        return tuple(self._clauses)

    @property
    def is_empty(self) -> bool:
        return not self._clauses

    def __iter__(self) -> Iterator[SortClause]:
        return iter(self._clauses)

    def __len__(self) -> int:
        return len(self._clauses)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SortOrder):
            return NotImplemented
        return self._clauses == other._clauses

    def __repr__(self) -> str:
        return f"SortOrder({self._clauses!r})"


@dataclass(frozen=True)
class Pagination:
    """Page window expressed for the session."""

    page_number: int
    page_size: int

    @property
    def offset(self) -> int:
        return self.page_number * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size
