"""Model utilities for dataclass validation and result mapping."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import fields, is_dataclass
from typing import Any, ClassVar, Protocol, Type, TypeVar, get_origin

from .types import RowMapping


class DataclassModel(Protocol):
    """Protocol for supported dataclass model types."""

    __dataclass_fields__: ClassVar[dict[str, Any]]


T = TypeVar("T", bound=DataclassModel)


def require_dataclass_model(cls: Type[Any]) -> None:
    """Validate that a class is a dataclass model."""

    if not (isinstance(cls, type) and is_dataclass(cls)):
        name = getattr(cls, "__name__", repr(cls))
        raise TypeError(f"{name} must be a dataclass.")


def is_dataclass_model(tp: Any) -> bool:
    return isinstance(tp, type) and is_dataclass(tp)


def is_mapping_type(tp: Any) -> bool:
    """Return whether a type (or parametrized alias) is a key/value mapping.

    `dict`, `Dict[str, Any]`, `Mapping[str, Any]` and mapping subclasses all
    qualify.
    """

    origin = get_origin(tp) or tp
    return isinstance(origin, type) and issubclass(origin, Mapping)


def row_to_model(cls: Type[T], row: RowMapping) -> T:
    """Map one result row mapping to a model instance.

    Keys the model does not declare as fields are ignored.
    """

    require_dataclass_model(cls)
    declared = {field.name for field in fields(cls)}
    return cls(**{key: value for key, value in row.items() if key in declared})  # type: ignore[arg-type]
