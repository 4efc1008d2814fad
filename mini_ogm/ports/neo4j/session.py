"""Neo4j adapter implementing the graph session port.

This adapter is optional and requires the `neo4j` driver package installed.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import Any, List, Optional

from ...core.models import is_dataclass_model, is_mapping_type, row_to_model
from ...core.sort_order import Pagination, SortOrder
from ...core.types import NamedParams, RowMapping
from .cypher import apply_sort_and_pagination

LOG = logging.getLogger(__name__)


class Neo4jSession:
    """Graph session backed by a Neo4j driver.

    Pass an existing `driver` to share one, or `uri`/`auth` to let the session
    create and own it.
    """

    def __init__(
        self,
        driver: Any | None = None,
        *,
        uri: str | None = None,
        auth: tuple[str, str] | None = None,
        database: str | None = None,
        sort_variable: str = "n",
    ) -> None:
        if driver is None:
            if not uri:
                raise ValueError("Neo4jSession requires either a driver or a uri.")
            try:
                from neo4j import GraphDatabase  # type: ignore[import-not-found]
            except ImportError as exc:  # pragma: no cover - env dependent
                raise ImportError(
                    "neo4j is required for Neo4jSession. "
                    "Install with `pip install neo4j`."
                ) from exc
            driver = GraphDatabase.driver(uri, auth=auth)
            self._owns_driver = True
        else:
            self._owns_driver = False
        self._driver = driver
        self.database = database
        self.sort_variable = sort_variable

    @classmethod
    def from_env(cls, *, sort_variable: str = "n") -> Neo4jSession:
        """Create a session from `MINI_OGM_NEO4J_*` environment variables."""

        uri = os.getenv("MINI_OGM_NEO4J_URI", "bolt://localhost:7687")
        user = os.getenv("MINI_OGM_NEO4J_USER", "neo4j")
        password = os.getenv("MINI_OGM_NEO4J_PASSWORD", "password")
        database = os.getenv("MINI_OGM_NEO4J_DATABASE") or None
        return cls(
            uri=uri,
            auth=(user, password),
            database=database,
            sort_variable=sort_variable,
        )

    def execute(self, query: str, params: NamedParams) -> None:
        """Run a statement and discard its result."""

        LOG.debug("Executing statement: %s", query)
        with self._driver.session(database=self.database) as session:
            session.run(query, dict(params)).consume()

    def query_rows(self, query: str, params: NamedParams) -> List[RowMapping]:
        """Run a query and return each record as a plain dict."""

        return self._fetch(query, dict(params))

    def query(
        self,
        element_type: Any,
        query: str,
        params: NamedParams,
        sort_order: Optional[SortOrder] = None,
        pagination: Optional[Pagination] = None,
    ) -> List[Any]:
        """Run a query, optionally sorted and paged, coercing each record."""

        cypher, merged = apply_sort_and_pagination(
            query,
            params,
            sort_order=sort_order,
            pagination=pagination,
            variable=self.sort_variable,
        )
        rows = self._fetch(cypher, merged)
        return [_coerce_row(element_type, row) for row in rows]

    def query_for_object(
        self, object_type: Any, query: str, params: NamedParams
    ) -> Optional[Any]:
        """Run a query expected to return at most one record.

        Raises:
            ValueError: If more than one record is returned.
        """

        rows = self._fetch(query, dict(params))
        if not rows:
            return None
        if len(rows) > 1:
            raise ValueError(
                f"Result not of expected size. Expected 1 row but found {len(rows)}."
            )
        return _coerce_row(object_type, rows[0])

    def _fetch(self, query: str, params: NamedParams) -> List[RowMapping]:
        LOG.debug("Running query: %s", query)
        with self._driver.session(database=self.database) as session:
            return list(session.run(query, params).data())

    def close(self) -> None:
        """Close the driver when this session created it."""

        if self._owns_driver:
            self._driver.close()

    def __enter__(self) -> Neo4jSession:
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        self.close()


def _coerce_row(element_type: Any, row: RowMapping) -> Any:
    """Map one record into `element_type`.

    Single-column records unwrap their value first. Dataclass element types
    are built from the resulting mapping.
    """

    if is_mapping_type(element_type):
        return dict(row)
    value: Any = row
    if len(row) == 1:
        value = next(iter(row.values()))
    if is_dataclass_model(element_type):
        if not isinstance(value, Mapping):
            raise TypeError(
                f"Cannot map {type(value).__name__} result to {element_type.__name__}."
            )
        return row_to_model(element_type, value)
    return value
