"""Cypher fragment builders for sorting and paging.

Query templates are passed through untouched; these helpers only append
`ORDER BY` and `SKIP`/`LIMIT` clauses to them.
"""

from __future__ import annotations

from typing import Optional, Tuple

from ...core.paging import Direction
from ...core.sort_order import Pagination, SortOrder
from ...core.types import NamedParams

SKIP_PARAM = "__skip"
LIMIT_PARAM = "__limit"


def compile_order_by(sort_order: Optional[SortOrder], variable: str = "n") -> str:
    """Compile an `ORDER BY` clause from a sort order.

    Properties are qualified with `variable` unless they already contain a
    dot. Ascending clauses carry no direction keyword.

    Returns:
        Cypher `ORDER BY` fragment or an empty string.
    """

    if sort_order is None or sort_order.is_empty:
        return ""

    ordered = ", ".join(
        _qualify(clause.property, variable)
        + (" DESC" if clause.direction is Direction.DESC else "")
        for clause in sort_order
    )
    return f" ORDER BY {ordered}"


def append_skip_limit(
    cypher: str,
    params: NamedParams,
    pagination: Optional[Pagination],
) -> Tuple[str, NamedParams]:
    """Append paging clauses and return the query with merged parameters.

    The caller's parameter map is copied, never mutated.
    """

    merged: NamedParams = dict(params)
    if pagination is None:
        return cypher, merged
    merged[SKIP_PARAM] = pagination.offset
    merged[LIMIT_PARAM] = pagination.limit
    return f"{cypher} SKIP ${SKIP_PARAM} LIMIT ${LIMIT_PARAM}", merged


def apply_sort_and_pagination(
    cypher: str,
    params: NamedParams,
    *,
    sort_order: Optional[SortOrder] = None,
    pagination: Optional[Pagination] = None,
    variable: str = "n",
) -> Tuple[str, NamedParams]:
    """Return the query with ordering and paging appended, in that order."""

    statement = cypher.rstrip().rstrip(";").rstrip()
    statement += compile_order_by(sort_order, variable)
    return append_skip_limit(statement, params, pagination)


def _qualify(name: str, variable: str) -> str:
    if "." in name or not variable:
        return name
    return f"{variable}.{name}"
