"""Dispatch of one query method call to a graph session.

`GraphRepositoryQuery` binds call arguments to query parameters, picks a
paged, sorted, or plain execution path, issues exactly one session call, and
reshapes the result into what the method declares it returns.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from .contracts import GraphSessionPort
from .models import is_mapping_type
from .paging import PageRequest, Sort, is_control_argument
from .paging_utils import convert_sort, update_page
from .query_method import QueryMethod, ReturnKind
from .sort_order import Pagination
from .types import NamedParams

LOG = logging.getLogger(__name__)


class GraphRepositoryQuery:
    """Executes one `QueryMethod` against a `GraphSessionPort`.

    Instances hold no per-call state and may be shared between callers.
    """

    def __init__(self, method: QueryMethod, session: GraphSessionPort):
        self.method = method
        self.session = session

    @property
    def query(self) -> str:
        return self.method.query

    def execute(self, args: Sequence[Any]) -> Any:
        """Run the query with call arguments and return the shaped result.

        A `PageRequest` argument selects paged execution, otherwise a `Sort`
        argument selects sorted execution, otherwise plain execution runs.
        Session errors propagate unchanged.
        """

        params = self.resolve_params(args)
        pageable, sort = _control_arguments(args)

        if pageable is not None:
            LOG.debug(
                "Executing %s as paged query (page=%d, size=%d)",
                self.method.name,
                pageable.page,
                pageable.size,
            )
            return self._execute_paged(params, pageable)
        if sort is not None:
            LOG.debug("Executing %s as sorted query", self.method.name)
            return self._execute_sorted(params, sort)
        LOG.debug("Executing %s as plain query", self.method.name)
        return self._execute_plain(params)

    def resolve_params(self, args: Sequence[Any]) -> NamedParams:
        """Build the parameter map, skipping `Sort`/`PageRequest` arguments.

        Named slots bind under their name, others under their index as a
        string. A later slot with the same key overwrites an earlier one.

        Raises:
            IndexError: If an argument has no declared slot.
        """

        params: NamedParams = {}
        for index, value in enumerate(args):
            if is_control_argument(value):
                continue
            spec = self.method.parameters.parameter(index)
            params[spec.binding_key] = value
        return params

    def _execute_paged(self, params: NamedParams, pageable: PageRequest) -> Any:
        pagination = Pagination(pageable.page, pageable.size)
        result = list(
            self.session.query(
                self.method.element_type,
                self.query,
                params,
                convert_sort(pageable.sort),
                pagination,
            )
        )
        if self.method.is_page_result:
            return update_page(pageable, result)
        return result

    def _execute_sorted(self, params: NamedParams, sort: Sort) -> Any:
        return self.session.query(
            self.method.element_type,
            self.query,
            params,
            convert_sort(sort),
        )

    def _execute_plain(self, params: NamedParams) -> Any:
        kind = self.method.return_kind
        if kind is ReturnKind.NO_VALUE:
            self.session.execute(self.query, params)
            return None
        if kind is ReturnKind.COLLECTION:
            if is_mapping_type(self.method.element_type):
                return self.session.query_rows(self.query, params)
            return self.session.query(self.method.element_type, self.query, params)
        return self.session.query_for_object(self.method.element_type, self.query, params)


def _control_arguments(
    args: Sequence[Any],
) -> tuple[Optional[PageRequest], Optional[Sort]]:
    """Return the first `PageRequest` and first `Sort` found among arguments."""

    pageable: Optional[PageRequest] = None
    sort: Optional[Sort] = None
    for value in args:
        if pageable is None and isinstance(value, PageRequest):
            pageable = value
        elif sort is None and isinstance(value, Sort):
            sort = value
    return pageable, sort
