"""Core port contracts used by the dispatcher and session adapters."""

from __future__ import annotations

from typing import Any, List, Optional, Protocol

from .sort_order import Pagination, SortOrder
from .types import NamedParams, RowMapping


class GraphSessionPort(Protocol):
    """Graph session behavior required by `GraphRepositoryQuery`.

    One method per result shape. Implementations own connection handling and
    raise their own errors; callers do not translate them.
    """

    def execute(self, query: str, params: NamedParams) -> None: ...

    def query_rows(self, query: str, params: NamedParams) -> List[RowMapping]: ...

    def query(
        self,
        element_type: Any,
        query: str,
        params: NamedParams,
        sort_order: Optional[SortOrder] = None,
        pagination: Optional[Pagination] = None,
    ) -> List[Any]: ...

    def query_for_object(
        self, object_type: Any, query: str, params: NamedParams
    ) -> Optional[Any]: ...
