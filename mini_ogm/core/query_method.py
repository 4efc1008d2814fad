"""Resolved metadata describing one query method.

`QueryMethod` is what the dispatcher consumes: the query text, what shape the
caller expects back, and how each argument slot binds. It can be built by hand
or derived from an annotated Python function with `QueryMethod.from_function`.
"""

from __future__ import annotations

import inspect
import types
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional, Sequence, Union, get_args, get_origin, get_type_hints

from .paging import Page, PageRequest, Sort


class ReturnKind(str, Enum):
    """Shape of the value a query method returns."""

    NO_VALUE = "no_value"
    SINGLE = "single"
    COLLECTION = "collection"


class ParameterKind(str, Enum):
    """Role of one argument slot."""

    DATA = "data"
    SORT = "sort"
    PAGE = "page"


@dataclass(frozen=True)
class ParameterSpec:
    """Binding metadata of one argument slot.

    Attributes:
        index: Zero-based slot index.
        name: Declared name, if any.
        named: Bind under `name` when true, otherwise under `str(index)`.
        kind: Data slot or sort/page control slot.
    """

    index: int
    name: Optional[str] = None
    named: bool = True
    kind: ParameterKind = ParameterKind.DATA

    def __post_init__(self) -> None:
        if self.named and not self.name:
            raise ValueError(f"Named parameter at index {self.index} requires a name.")

    @property
    def binding_key(self) -> str:
        return self.name if self.named and self.name else str(self.index)


@dataclass(frozen=True)
class Parameters:
    """Ordered argument slot metadata of one query method."""

    specs: tuple[ParameterSpec, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "specs", tuple(self.specs))
        for position, spec in enumerate(self.specs):
            if spec.index != position:
                raise ValueError(
                    f"Parameter {spec.name or spec.index!r} declared at index "
                    f"{spec.index} but found at position {position}."
                )
        sort_slots = self._indexes_of(ParameterKind.SORT)
        page_slots = self._indexes_of(ParameterKind.PAGE)
        if len(sort_slots) > 1:
            raise ValueError(f"Only one Sort parameter is allowed, found {sort_slots}.")
        if len(page_slots) > 1:
            raise ValueError(f"Only one PageRequest parameter is allowed, found {page_slots}.")
        if sort_slots and page_slots:
            raise ValueError(
                "A query method must not declare both a Sort and a PageRequest "
                "parameter. Pass the sort inside the PageRequest instead."
            )

    @classmethod
    def of(cls, *specs: ParameterSpec) -> Parameters:
        return cls(tuple(specs))

    def parameter(self, index: int) -> ParameterSpec:
        """Return the slot declared at `index`.

        Raises:
            IndexError: If no slot is declared at `index`.
        """

        if index < 0 or index >= len(self.specs):
            raise IndexError(
                f"No parameter declared at index {index}; "
                f"method declares {len(self.specs)}."
            )
        return self.specs[index]

    @property
    def sort_index(self) -> Optional[int]:
        slots = self._indexes_of(ParameterKind.SORT)
        return slots[0] if slots else None

    @property
    def pageable_index(self) -> Optional[int]:
        slots = self._indexes_of(ParameterKind.PAGE)
        return slots[0] if slots else None

    @property
    def has_sort_parameter(self) -> bool:
        return self.sort_index is not None

    @property
    def has_pageable_parameter(self) -> bool:
        return self.pageable_index is not None

    def __len__(self) -> int:
        return len(self.specs)

    def _indexes_of(self, kind: ParameterKind) -> list[int]:
        return [spec.index for spec in self.specs if spec.kind is kind]


@dataclass(frozen=True)
class QueryMethod:
    """Query text plus the resolved return and parameter descriptors.

    Attributes:
        name: Method name, used for logging.
        query: Query template passed verbatim to the session.
        return_kind: Whether the method returns nothing, one value, or many.
        element_type: Type each returned item is coerced into.
        parameters: Argument slot metadata.
        is_page_result: True when a collection is expected wrapped in a `Page`.
    """

    name: str
    query: str
    return_kind: ReturnKind
    element_type: Any = Any
    parameters: Parameters = field(default_factory=Parameters)
    is_page_result: bool = False

    def __post_init__(self) -> None:
        if self.is_page_result and self.return_kind is not ReturnKind.COLLECTION:
            raise ValueError("Page results require ReturnKind.COLLECTION.")

    @classmethod
    def from_function(
        cls,
        func: Callable[..., Any],
        query: str,
        *,
        bound: bool = True,
    ) -> QueryMethod:
        """Derive method metadata from a function signature and annotations.

        Args:
            func: Function whose signature describes the query method.
            query: Query template.
            bound: Skip the leading `self`/`cls` parameter.

        Raises:
            TypeError: If the function takes `*args` or `**kwargs`.
            ValueError: If control parameters are declared more than once or
                a `Sort` and a `PageRequest` are declared together.
        """

        hints = get_type_hints(func)
        signature = inspect.signature(func)
        declared = list(signature.parameters.values())
        if bound and declared:
            declared = declared[1:]

        specs = []
        for index, param in enumerate(declared):
            if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
                raise TypeError(
                    f"Query method {func.__qualname__} must not declare "
                    f"*args or **kwargs ({param.name})."
                )
            specs.append(
                ParameterSpec(
                    index=index,
                    name=param.name,
                    named=param.kind is not param.POSITIONAL_ONLY,
                    kind=_parameter_kind(hints.get(param.name)),
                )
            )

        return_kind, element_type, is_page = resolve_return_type(
            hints.get("return", Any)
        )
        return cls(
            name=func.__qualname__,
            query=query,
            return_kind=return_kind,
            element_type=element_type,
            parameters=Parameters(tuple(specs)),
            is_page_result=is_page,
        )


def resolve_return_type(annotation: Any) -> tuple[ReturnKind, Any, bool]:
    """Resolve a return annotation into `(kind, element_type, is_page_result)`."""

    if annotation is None or annotation is type(None):
        return ReturnKind.NO_VALUE, type(None), False

    if annotation is Any:
        return ReturnKind.SINGLE, Any, False

    inner = _strip_optional(annotation)
    if inner is not annotation:
        kind, element, is_page = resolve_return_type(inner)
        if kind is ReturnKind.NO_VALUE:
            return ReturnKind.SINGLE, Any, False
        return kind, element, is_page

    origin = get_origin(annotation) or annotation
    args = get_args(annotation)

    if origin is Page:
        return ReturnKind.COLLECTION, args[0] if args else Any, True

    if _is_collection_origin(origin):
        element = args[0] if args else Any
        if element is Ellipsis:
            element = Any
        return ReturnKind.COLLECTION, element, False

    return ReturnKind.SINGLE, annotation, False


def _is_collection_origin(origin: Any) -> bool:
    if not isinstance(origin, type):
        return False
    if issubclass(origin, (str, bytes, bytearray, Mapping)):
        return False
    return issubclass(origin, Iterable)


def _parameter_kind(annotation: Any) -> ParameterKind:
    inner = _strip_optional(annotation)
    if inner is Sort:
        return ParameterKind.SORT
    if inner is PageRequest:
        return ParameterKind.PAGE
    return ParameterKind.DATA


def _strip_optional(annotation: Any) -> Any:
    """Return `T` for `Optional[T]`, otherwise the annotation unchanged."""

    if get_origin(annotation) not in (Union, types.UnionType):
        return annotation
    remaining: Sequence[Any] = [arg for arg in get_args(annotation) if arg is not type(None)]
    if len(remaining) == 1:
        return remaining[0]
    if not remaining:
        return type(None)
    return annotation
