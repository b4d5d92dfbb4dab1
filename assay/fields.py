"""
Field accessors for assay.

A FieldAccessor is a validator waiting for a field name. Calling it with a
name (or index) yields a Validator that looks the member up on its input and
delegates to the inner validator.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional

from .core import Validator
from .errors import MissingField, TypeMismatch
from .primitives import matches_category
from .types import MISSING, Err, FieldName, Ok, TypeTag


class FieldKind(Enum):
    REQUIRED = "required"
    OPTIONAL = "optional"
    DEPENDENT = "dependent"


def has_member(o: Any, name: FieldName) -> bool:
    """
    Membership test for object-like values.

    A key mapped to None still counts as present. Lists and tuples expose
    their non-negative indices as members.
    """
    if isinstance(o, Mapping):
        return name in o
    if isinstance(o, (list, tuple)):
        return isinstance(name, int) and not isinstance(name, bool) and 0 <= name < len(o)
    return False


def own_fields(o: Any) -> list[FieldName]:
    """List the member names of an object-like value."""
    if isinstance(o, Mapping):
        return list(o.keys())
    if isinstance(o, (list, tuple)):
        return list(range(len(o)))
    return []


@dataclass(frozen=True, slots=True)
class FieldAccessor:
    """
    Validator for a named member, not yet bound to a name.

    `required` and `optional` accessors wrap a validator; `dependent`
    accessors wrap a builder that picks the accessor from the sibling fields
    validated so far.
    """

    kind: FieldKind
    validator: Validator | None = None
    build: Callable[[dict[FieldName, Any]], FieldAccessor] | None = field(
        default=None, repr=False
    )

    def __call__(self, name: FieldName) -> Validator:
        if self.kind is FieldKind.DEPENDENT:
            raise TypeError("dependent() accessors can only be used inside has() or just()")
        inner = self.validator
        assert inner is not None

        if self.kind is FieldKind.REQUIRED:

            def run_required(o: Any) -> Ok[Any] | Err[Any]:
                if has_member(o, name):
                    return inner.run_fn(o[name])
                return Err(MissingField(o, name))

            return Validator(
                run_fn=run_required,
                name=f"required({name!r}, {inner.name})",
                type_hint=inner.type_hint,
            )

        def run_optional(o: Any) -> Ok[Any] | Err[Any]:
            if has_member(o, name):
                return inner.run_fn(o[name])
            return Ok(MISSING)

        return Validator(
            run_fn=run_optional,
            name=f"optional({name!r}, {inner.name})",
            type_hint=Optional[inner.type_hint],
        )

    @property
    def is_required(self) -> bool:
        return self.kind is FieldKind.REQUIRED

    def resolve(self, siblings: dict[FieldName, Any]) -> FieldAccessor:
        """Return the concrete accessor for this field given its siblings."""
        if self.kind is not FieldKind.DEPENDENT:
            return self
        assert self.build is not None
        resolved = self.build(siblings)
        if not isinstance(resolved, FieldAccessor) or resolved.kind is FieldKind.DEPENDENT:
            raise TypeError("dependent() builder must return a required() or optional() accessor")
        return resolved


def _check_validator(v: Any, where: str) -> Validator:
    if not isinstance(v, Validator):
        raise TypeError(f"{where}() expects a Validator, got {type(v).__name__}")
    return v


def required(v: Validator) -> FieldAccessor:
    """
    Accessor for a field that must be present.

    Usage:
        has({"name": required(string)})
        required(string)("name")   # bound to a name, usable on its own
    """
    return FieldAccessor(FieldKind.REQUIRED, _check_validator(v, "required"))


def optional(v: Validator) -> FieldAccessor:
    """Accessor for a field that may be absent; absence yields Ok(MISSING)."""
    return FieldAccessor(FieldKind.OPTIONAL, _check_validator(v, "optional"))


def dependent(build: Callable[[dict[FieldName, Any]], FieldAccessor]) -> FieldAccessor:
    """
    Accessor whose validation depends on sibling fields.

    `build` receives the projection of the fields declared (and validated)
    before this one and returns a required() or optional() accessor.

    Usage:
        has({
            "kind": required(string),
            "size": dependent(lambda s: required(number if s["kind"] == "n" else string)),
        })
    """
    if not callable(build):
        raise TypeError("dependent() expects a callable")
    return FieldAccessor(FieldKind.DEPENDENT, build=build)


def _object_checked(accessor: Validator) -> Validator:
    def run_fn(o: Any) -> Ok[Any] | Err[Any]:
        if not matches_category(TypeTag.OBJECT, o):
            return Err(TypeMismatch(TypeTag.OBJECT.value, o))
        return accessor.run_fn(o)

    return Validator(run_fn=run_fn, name=accessor.name, type_hint=accessor.type_hint)


def required_field(name: FieldName, v: Validator) -> Validator:
    """Validate member `name` of an object, failing if it is absent."""
    return _object_checked(required(v)(name))


def optional_field(name: FieldName, v: Validator) -> Validator:
    """Validate member `name` of an object if present, else Ok(MISSING)."""
    return _object_checked(optional(v)(name))
