from __future__ import annotations

import unittest
from dataclasses import dataclass
from typing import Any, Dict

from mini_ogm import (
    Direction,
    GraphRepositoryQuery,
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
)
from tests.graph_test_helpers import RecordingSession

QUERY = "MATCH (n:Person) WHERE n.name = $name RETURN n"


@dataclass
class Person:
    name: str = ""


def _method(
    kind: ReturnKind,
    element: Any = Person,
    *specs: ParameterSpec,
    is_page_result: bool = False,
) -> QueryMethod:
    return QueryMethod(
        name="PersonRepository.find",
        query=QUERY,
        return_kind=kind,
        element_type=element,
        parameters=Parameters(specs),
        is_page_result=is_page_result,
    )


class ParameterBindingTests(unittest.TestCase):
    def test_named_and_positional_keys(self) -> None:
        method = _method(
            ReturnKind.COLLECTION,
            Person,
            ParameterSpec(0, "name"),
            ParameterSpec(1, "age", named=False),
            ParameterSpec(2, "city"),
        )
        params = GraphRepositoryQuery(method, RecordingSession()).resolve_params(
            ["alice", 30, "Paris"]
        )
        self.assertEqual(params, {"name": "alice", "1": 30, "city": "Paris"})

    def test_control_arguments_are_not_bound(self) -> None:
        method = _method(
            ReturnKind.COLLECTION,
            Person,
            ParameterSpec(0, "name"),
            ParameterSpec(1, "page", kind=ParameterKind.PAGE),
        )
        params = GraphRepositoryQuery(method, RecordingSession()).resolve_params(
            ["alice", PageRequest(0, 5)]
        )
        self.assertEqual(params, {"name": "alice"})

    def test_none_values_are_bound(self) -> None:
        method = _method(ReturnKind.SINGLE, Person, ParameterSpec(0, "name"))
        params = GraphRepositoryQuery(method, RecordingSession()).resolve_params([None])
        self.assertEqual(params, {"name": None})

    def test_duplicate_keys_last_write_wins(self) -> None:
        method = _method(
            ReturnKind.SINGLE,
            Person,
            ParameterSpec(0, "name"),
            ParameterSpec(1, "name"),
        )
        params = GraphRepositoryQuery(method, RecordingSession()).resolve_params(["a", "b"])
        self.assertEqual(params, {"name": "b"})

    def test_undeclared_slot_raises(self) -> None:
        method = _method(ReturnKind.SINGLE, Person, ParameterSpec(0, "name"))
        with self.assertRaises(IndexError):
            GraphRepositoryQuery(method, RecordingSession()).execute(["a", "b"])


class PlainExecutionTests(unittest.TestCase):
    def test_no_value_executes_statement(self) -> None:
        session = RecordingSession()
        method = _method(ReturnKind.NO_VALUE, type(None), ParameterSpec(0, "name"))

        result = GraphRepositoryQuery(method, session).execute(["alice"])

        self.assertIsNone(result)
        self.assertEqual(len(session.calls), 1)
        self.assertEqual(session.last.method, "execute")
        self.assertEqual(session.last.query, QUERY)
        self.assertEqual(session.last.params, {"name": "alice"})

    def test_collection_of_mappings_queries_raw_rows(self) -> None:
        rows = [{"name": "alice"}, {"name": "bob"}]
        session = RecordingSession(rows=rows)
        method = _method(ReturnKind.COLLECTION, Dict[str, Any], ParameterSpec(0, "name"))

        result = GraphRepositoryQuery(method, session).execute(["alice"])

        self.assertEqual(result, rows)
        self.assertEqual([call.method for call in session.calls], ["query_rows"])

    def test_collection_of_models_queries_typed(self) -> None:
        rows = [Person("alice"), Person("bob")]
        session = RecordingSession(rows=rows)
        method = _method(ReturnKind.COLLECTION, Person, ParameterSpec(0, "name"))

        result = GraphRepositoryQuery(method, session).execute(["alice"])

        self.assertEqual(result, rows)
        self.assertEqual(session.last.method, "query")
        self.assertIs(session.last.element_type, Person)
        self.assertIsNone(session.last.sort_order)
        self.assertIsNone(session.last.pagination)

    def test_single_value_queries_for_object(self) -> None:
        session = RecordingSession(single=Person("alice"))
        method = _method(ReturnKind.SINGLE, Person, ParameterSpec(0, "name"))

        result = GraphRepositoryQuery(method, session).execute(["alice"])

        self.assertEqual(result, Person("alice"))
        self.assertEqual(session.last.method, "query_for_object")
        self.assertIs(session.last.element_type, Person)

    def test_single_value_may_be_absent(self) -> None:
        session = RecordingSession(single=None)
        method = _method(ReturnKind.SINGLE, Person, ParameterSpec(0, "name"))
        self.assertIsNone(GraphRepositoryQuery(method, session).execute(["nobody"]))

    def test_session_errors_propagate_unchanged(self) -> None:
        error = ConnectionError("bolt connection lost")
        session = RecordingSession(error=error)
        method = _method(ReturnKind.COLLECTION, Person, ParameterSpec(0, "name"))

        with self.assertRaises(ConnectionError) as ctx:
            GraphRepositoryQuery(method, session).execute(["alice"])
        self.assertIs(ctx.exception, error)
        self.assertEqual(len(session.calls), 1)


class SortedExecutionTests(unittest.TestCase):
    def test_sort_is_converted_and_result_returned_unchanged(self) -> None:
        rows = [Person("a"), Person("b")]
        session = RecordingSession(rows=rows)
        method = _method(
            ReturnKind.COLLECTION,
            Person,
            ParameterSpec(0, "name"),
            ParameterSpec(1, "sort", kind=ParameterKind.SORT),
        )
        sort = Sort.by_orders(Order("name"), Order("age", Direction.DESC))

        result = GraphRepositoryQuery(method, session).execute(["alice", sort])

        self.assertEqual(result, rows)
        self.assertEqual(session.last.method, "query")
        self.assertEqual(session.last.params, {"name": "alice"})
        self.assertEqual(
            session.last.sort_order.clauses,
            (SortClause("name"), SortClause("age", Direction.DESC)),
        )
        self.assertIsNone(session.last.pagination)

    def test_sort_on_mapping_collection_still_uses_typed_query(self) -> None:
        session = RecordingSession(rows=[{"name": "a"}])
        method = _method(
            ReturnKind.COLLECTION,
            Dict[str, Any],
            ParameterSpec(0, "sort", kind=ParameterKind.SORT),
        )
        GraphRepositoryQuery(method, session).execute([Sort.by("name")])
        self.assertEqual(session.last.method, "query")

    def test_none_sort_falls_back_to_plain(self) -> None:
        session = RecordingSession(rows=[{"name": "a"}])
        method = _method(
            ReturnKind.COLLECTION,
            Dict[str, Any],
            ParameterSpec(0, "sort", kind=ParameterKind.SORT),
        )
        GraphRepositoryQuery(method, session).execute([None])
        self.assertEqual(session.last.method, "query_rows")
        self.assertEqual(session.last.params, {"sort": None})


class PagedExecutionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.people = [Person(f"p{i}") for i in range(24)]
        self.session = RecordingSession(rows=self.people)

    def _paged_method(self, *, is_page_result: bool) -> QueryMethod:
        return _method(
            ReturnKind.COLLECTION,
            Person,
            ParameterSpec(0, "name"),
            ParameterSpec(1, "page", kind=ParameterKind.PAGE),
            is_page_result=is_page_result,
        )

    def test_full_page_estimates_one_more_page(self) -> None:
        query = GraphRepositoryQuery(self._paged_method(is_page_result=True), self.session)

        page = query.execute(["alice", PageRequest(0, 10)])

        self.assertIsInstance(page, Page)
        self.assertEqual(page.content, self.people[:10])
        self.assertEqual(page.total, 20)
        self.assertTrue(page.has_next)
        self.assertEqual(self.session.last.pagination, Pagination(0, 10))
        self.assertTrue(self.session.last.sort_order.is_empty)
        self.assertEqual(self.session.last.params, {"name": "alice"})

    def test_short_last_page_is_exact(self) -> None:
        query = GraphRepositoryQuery(self._paged_method(is_page_result=True), self.session)

        page = query.execute(["alice", PageRequest(2, 10)])

        self.assertEqual(page.content, self.people[20:])
        self.assertEqual(page.total, 24)
        self.assertFalse(page.has_next)

    def test_page_sort_is_forwarded(self) -> None:
        query = GraphRepositoryQuery(self._paged_method(is_page_result=True), self.session)

        query.execute(["alice", PageRequest(0, 5, Sort.by("name", direction="DESC"))])

        self.assertEqual(
            self.session.last.sort_order.clauses,
            (SortClause("name", Direction.DESC),),
        )

    def test_plain_collection_return_is_not_wrapped(self) -> None:
        query = GraphRepositoryQuery(self._paged_method(is_page_result=False), self.session)

        result = query.execute(["alice", PageRequest(1, 10)])

        self.assertIsInstance(result, list)
        self.assertEqual(result, self.people[10:20])

    def test_page_wins_over_sort(self) -> None:
        method = _method(
            ReturnKind.COLLECTION,
            Person,
            ParameterSpec(0, "sort"),
            ParameterSpec(1, "page"),
            is_page_result=True,
        )
        result = GraphRepositoryQuery(method, self.session).execute(
            [Sort.by("ignored"), PageRequest(0, 4, Sort.by("name"))]
        )

        self.assertIsInstance(result, Page)
        self.assertEqual(len(self.session.calls), 1)
        self.assertEqual(self.session.last.params, {})
        self.assertEqual(self.session.last.sort_order.clauses, (SortClause("name"),))
        self.assertEqual(self.session.last.pagination, Pagination(0, 4))

    def test_page_result_without_page_request_falls_through(self) -> None:
        method = _method(
            ReturnKind.COLLECTION,
            Person,
            ParameterSpec(0, "name"),
            is_page_result=True,
        )
        result = GraphRepositoryQuery(method, self.session).execute(["alice"])
        self.assertEqual(result, self.people)
        self.assertIsNone(self.session.last.pagination)

    def test_walking_pages_converges_to_exact_total(self) -> None:
        query = GraphRepositoryQuery(self._paged_method(is_page_result=True), self.session)
        request = PageRequest(0, 8)
        totals = []
        while True:
            page = query.execute(["alice", request])
            totals.append(page.total)
            if not page.has_next:
                break
            request = page.next_pageable()

        self.assertEqual(totals, [16, 24, 32, 24])
        self.assertEqual(len(self.session.calls), 4)


if __name__ == "__main__":
    unittest.main()
