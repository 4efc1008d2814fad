"""Walk pages over an in-process session to show how page totals converge."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, List, Optional

# Allow running this script directly from repository root.
PROJECT_ROOT = next(
    (parent for parent in Path(__file__).resolve().parents if (parent / "mini_ogm").exists()),
    None,
)
if PROJECT_ROOT and str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from mini_ogm import GraphRepository, Page, PageRequest, Pagination, SortOrder, query


class ListSession:
    """Serves a fixed list of values regardless of query text."""

    def __init__(self, values: List[Any]):
        self.values = values

    def execute(self, query: str, params: dict) -> None:
        return None

    def query_rows(self, query: str, params: dict) -> List[Any]:
        return list(self.values)

    def query(
        self,
        element_type: Any,
        query: str,
        params: dict,
        sort_order: Optional[SortOrder] = None,
        pagination: Optional[Pagination] = None,
    ) -> List[Any]:
        if pagination is None:
            return list(self.values)
        return self.values[pagination.offset : pagination.offset + pagination.limit]

    def query_for_object(self, object_type: Any, query: str, params: dict) -> Any:
        return self.values[0] if self.values else None


class NumberRepository(GraphRepository):
    @query("MATCH (n:Number) RETURN n.value")
    def numbers(self, page: PageRequest) -> Page[int]: ...


def main() -> None:
    repo = NumberRepository(ListSession(list(range(23))))
    request = PageRequest(0, 5)
    while True:
        page = repo.numbers(request)
        print(f"page={page.number} items={list(page)} estimated_total={page.total}")
        if not page.has_next:
            break
        request = page.next_pageable()


if __name__ == "__main__":
    main()
