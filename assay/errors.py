"""
Error taxonomy for assay.

Every way a validator can fail is one of the tagged nodes below. Nodes are
plain data: they hold the offending value and the expected shape so callers
can dispatch on them with `match` or `isinstance`. Composite nodes
(ElementMismatch, AlternativeExhausted) embed the child errors they wrap.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Iterator

from .types import FieldName


@dataclass(frozen=True, slots=True)
class ErrorNode:
    """Base class for all validation error nodes."""

    tag: ClassVar[str] = "Error"


@dataclass(frozen=True, slots=True)
class TypeMismatch(ErrorNode):
    """The value is not of the expected runtime category."""

    tag: ClassVar[str] = "TypeMismatch"

    expected: str
    value: Any


@dataclass(frozen=True, slots=True)
class PredicateMismatch(ErrorNode):
    """The value has the right category but failed a refinement."""

    tag: ClassVar[str] = "PredicateMismatch"

    value: Any
    message: str


@dataclass(frozen=True, slots=True)
class MissingField(ErrorNode):
    tag: ClassVar[str] = "MissingField"

    on: Any
    field: FieldName


@dataclass(frozen=True, slots=True)
class ExtraFields(ErrorNode):
    tag: ClassVar[str] = "ExtraFields"

    on: Any
    extra: tuple[FieldName, ...]


@dataclass(frozen=True, slots=True)
class NotASequence(ErrorNode):
    tag: ClassVar[str] = "NotASequence"

    value: Any


@dataclass(frozen=True, slots=True)
class ElementMismatch(ErrorNode):
    """An element of a sequence failed; `error` is that element's failure."""

    tag: ClassVar[str] = "ElementMismatch"

    sequence: Any
    index: int
    element: Any
    error: Any


@dataclass(frozen=True, slots=True)
class AlternativeExhausted(ErrorNode):
    """Both branches of an alternative failed."""

    tag: ClassVar[str] = "AlternativeExhausted"

    left: Any
    right: Any


def leaves(error: Any) -> Iterator[Any]:
    """
    Yield the innermost errors of an error tree, left to right.

    ElementMismatch and AlternativeExhausted are unwrapped; any other value
    (including errors produced by `fail` or `map_error`) is a leaf.
    """
    if isinstance(error, ElementMismatch):
        yield from leaves(error.error)
    elif isinstance(error, AlternativeExhausted):
        yield from leaves(error.left)
        yield from leaves(error.right)
    else:
        yield error


class ValidationFailed(Exception):
    """
    Raised at the throwing boundary (`run_or_throw`, `Err.unwrap`).

    The structured error is kept on `.error`; the message embeds its repr.
    """

    def __init__(self, error: Any):
        self.error = error
        super().__init__(f"Validation failed: {error!r}")
