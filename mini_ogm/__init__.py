"""Mini OGM: declarative query methods dispatched to a graph session."""

from .core import (
    Direction,
    GraphRepository,
    GraphRepositoryQuery,
    GraphSessionPort,
    Order,
    Page,
    PageRequest,
    Pagination,
    ParameterKind,
    Parameters,
    ParameterSpec,
    QueryMethod,
    ReturnKind,
    Sort,
    SortClause,
    SortOrder,
    convert_sort,
    query,
    update_page,
)
from .ports import Neo4jSession

__all__ = [
    "Direction",
    "GraphRepository",
    "GraphRepositoryQuery",
    "GraphSessionPort",
    "Neo4jSession",
    "Order",
    "Page",
    "PageRequest",
    "Pagination",
    "ParameterKind",
    "ParameterSpec",
    "Parameters",
    "QueryMethod",
    "ReturnKind",
    "Sort",
    "SortClause",
    "SortOrder",
    "convert_sort",
    "query",
    "update_page",
]
