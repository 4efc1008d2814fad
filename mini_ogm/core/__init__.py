"""Public core API for query methods, paging, and dispatch."""

from .contracts import GraphSessionPort
from .models import DataclassModel, is_mapping_type, row_to_model
from .paging import Direction, Order, Page, PageRequest, Sort
from .paging_utils import convert_sort, update_page
from .query import GraphRepositoryQuery
from .query_method import (
    ParameterKind,
    Parameters,
    ParameterSpec,
    QueryMethod,
    ReturnKind,
    resolve_return_type,
)
from .repository import GraphRepository, query
from .sort_order import Pagination, SortClause, SortOrder

__all__ = [
    "DataclassModel",
    "Direction",
    "GraphRepository",
    "GraphRepositoryQuery",
    "GraphSessionPort",
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
    "is_mapping_type",
    "query",
    "resolve_return_type",
    "row_to_model",
    "update_page",
]
