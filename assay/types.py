"""
Type definitions for assay.

Provides the Result type (Ok/Err), the closed set of runtime categories
validators dispatch on, and the MISSING marker for absent fields.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Generic, NoReturn, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")
F = TypeVar("F")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Success result containing a value."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def map(self, f: Callable[[T], U]) -> Ok[U]:
        return Ok(f(self.value))

    def map_err(self, f: Callable[[Any], Any]) -> Ok[T]:
        return self

    def and_then(self, f: Callable[[T], Ok[U] | Err[E]]) -> Ok[U] | Err[E]:
        """Feed the value to a Result-returning function (monadic bind)."""
        return f(self.value)

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Error result containing an error value."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def map(self, f: Callable[[Any], Any]) -> Err[E]:
        return self

    def map_err(self, f: Callable[[E], F]) -> Err[F]:
        return Err(f(self.error))

    def and_then(self, f: Callable[[Any], Any]) -> Err[E]:
        return self

    def unwrap(self) -> NoReturn:
        """Raise ValidationFailed carrying the contained error."""
        from .errors import ValidationFailed

        raise ValidationFailed(self.error)


Result = Union[Ok[T], Err[E]]


class TypeTag(str, Enum):
    """
    Closed set of fundamental runtime categories.

    Members compare equal to their string values, so `"string"` may be
    passed anywhere a TypeTag is expected.
    """

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OBJECT = "object"
    FUNCTION = "function"
    SYMBOL = "symbol"
    UNDEFINED = "undefined"
    BIGINT = "bigint"

    def __str__(self) -> str:
        return self.value


class _Missing(Enum):
    """Marker for a field that is absent from its container."""

    MISSING = "MISSING"

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing.MISSING

# Type aliases
RunFn = Callable[[Any], Union[Ok[Any], Err[Any]]]
TestFn = Callable[[Any], bool]
MessageFn = Callable[[Any], str]
FieldName = Union[str, int]
