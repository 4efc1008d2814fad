"""Declarative repository methods backed by query templates."""

from __future__ import annotations

import functools
import inspect
from typing import Any, Callable, TypeVar

from .contracts import GraphSessionPort
from .query import GraphRepositoryQuery
from .query_method import QueryMethod

F = TypeVar("F", bound=Callable[..., Any])


def query(cypher: str) -> Callable[[F], F]:
    """Turn an annotated repository method into a query method.

    The method body is never run. Its signature decides how arguments bind
    and its return annotation decides how the result is shaped::

        class UserRepository(GraphRepository):
            @query("MATCH (n:User) WHERE n.name = $name RETURN n")
            def find_by_name(self, name: str, page: PageRequest) -> Page[User]: ...
    """

    def decorate(func: F) -> F:
        method = QueryMethod.from_function(func, cypher)
        signature = inspect.signature(func)

        @functools.wraps(func)
        def wrapper(self: GraphRepository, *args: Any, **kwargs: Any) -> Any:
            bound = signature.bind(self, *args, **kwargs)
            bound.apply_defaults()
            call_args = list(bound.arguments.values())[1:]
            return GraphRepositoryQuery(method, self.session).execute(call_args)

        wrapper.query_method = method  # type: ignore[attr-defined]
        return wrapper  # type: ignore[return-value]

    return decorate


class GraphRepository:
    """Base class for repositories whose methods are declared with `@query`."""

    def __init__(self, session: GraphSessionPort):
        self.session = session

    def query_for(self, name: str) -> GraphRepositoryQuery:
        """Return the dispatcher behind a decorated method.

        Raises:
            AttributeError: If the repository has no such method.
            TypeError: If the method is not declared with `@query`.
        """

        attr = getattr(type(self), name)
        method = getattr(attr, "query_method", None)
        if not isinstance(method, QueryMethod):
            raise TypeError(f"{type(self).__name__}.{name} is not a query method.")
        return GraphRepositoryQuery(method, self.session)
