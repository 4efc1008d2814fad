"""Neo4j session adapter and Cypher helpers."""

from .cypher import append_skip_limit, apply_sort_and_pagination, compile_order_by
from .session import Neo4jSession

__all__ = [
    "Neo4jSession",
    "append_skip_limit",
    "apply_sort_and_pagination",
    "compile_order_by",
]
