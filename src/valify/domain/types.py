"""Type tags and their shape predicates.

A field's declared type is checked before any of its rules run, so rule
predicates may assume a well-typed value.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from enum import StrEnum
from typing import Any

from valify.errors import UnknownTypeError

TypePredicate = Callable[[Any], bool]


class TypeTag(StrEnum):
    """Built-in primitive shapes."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"


def is_string(value: Any) -> bool:
    return isinstance(value, str)


def is_number(value: Any) -> bool:
    # bool is an int subclass but never a number here
    return isinstance(value, int | float) and not isinstance(value, bool)


def is_boolean(value: Any) -> bool:
    return isinstance(value, bool)


def is_array(value: Any) -> bool:
    return isinstance(value, list | tuple)


def is_object(value: Any) -> bool:
    return isinstance(value, Mapping)


class TypeRegistry:
    """Mapping from type name to shape predicate."""

    def __init__(self, predicates: Mapping[str, TypePredicate] | None = None) -> None:
        self._predicates: dict[str, TypePredicate] = dict(predicates or {})

    def register(self, name: str, predicate: TypePredicate) -> None:
        """Add or override the predicate for *name*."""
        normalized = name.strip()
        if not normalized:
            msg = "Type name must not be empty"
            raise ValueError(msg)
        if not callable(predicate):
            msg = f"Type predicate for {normalized!r} must be callable"
            raise TypeError(msg)
        self._predicates[normalized] = predicate

    def get(self, name: str) -> TypePredicate:
        """Return the predicate for *name*.

        Raises:
            UnknownTypeError: If no predicate is registered.
        """
        try:
            return self._predicates[name]
        except KeyError:
            raise UnknownTypeError(name) from None

    def check(self, name: str, value: Any) -> bool:
        return bool(self.get(name)(value))

    def names(self) -> list[str]:
        return list(self._predicates)

    def copy(self) -> TypeRegistry:
        return TypeRegistry(self._predicates)

    def __contains__(self, name: object) -> bool:
        return name in self._predicates


def _builtin_type_map() -> dict[str, TypePredicate]:
    """Return the built-in type predicates."""
    return {
        TypeTag.STRING.value: is_string,
        TypeTag.NUMBER.value: is_number,
        TypeTag.BOOLEAN.value: is_boolean,
        TypeTag.ARRAY.value: is_array,
        TypeTag.OBJECT.value: is_object,
    }


TYPE_REGISTRY = TypeRegistry(_builtin_type_map())


def check_type(type_name: str, value: Any) -> bool:
    """Check *value* against a type in the process-wide registry."""
    return TYPE_REGISTRY.check(type_name, value)


def register_type(name: str, predicate: TypePredicate) -> None:
    """Register a custom type in the process-wide registry."""
    TYPE_REGISTRY.register(name, predicate)
