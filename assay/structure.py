"""
Structural combinators for assay: objects, arrays and records.

All of these are fail-fast: the first failing field or element is returned
verbatim and the remaining members are not checked. Successful results are
projections built from each member's validated value, so conversions applied
at the member level show up in the output. Inputs are never mutated.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from functools import partial
from typing import Any

from .core import Validator
from .errors import ElementMismatch, ExtraFields, MissingField, NotASequence, TypeMismatch
from .fields import FieldAccessor, FieldKind, has_member, own_fields
from .primitives import matches_category
from .types import Err, FieldName, Ok, TypeTag


@dataclass(frozen=True, slots=True)
class ObjectShape:
    """
    Declared fields of an object validator, kept for `to_pydantic`.

    Fields are stored as (name, accessor) pairs in declaration order so the
    shape, and the Validator holding it, stay hashable.
    """

    fields: tuple[tuple[FieldName, FieldAccessor], ...]
    closed: bool = False


def _check_fields(fields: Any, where: str) -> dict[FieldName, FieldAccessor]:
    if not isinstance(fields, Mapping):
        raise TypeError(f"{where}() expects a mapping of field name to accessor")
    for name, accessor in fields.items():
        if not isinstance(accessor, FieldAccessor):
            raise TypeError(
                f"{where}(): field {name!r} must be required(), optional() or dependent(), "
                f"got {type(accessor).__name__}"
            )
    return dict(fields)


def _run_fields(
    o: Any, fields: dict[FieldName, FieldAccessor]
) -> Ok[dict[FieldName, Any]] | Err[Any]:
    if not matches_category(TypeTag.OBJECT, o):
        return Err(TypeMismatch(TypeTag.OBJECT.value, o))

    projection: dict[FieldName, Any] = {}
    for name, accessor in fields.items():
        if accessor.kind is FieldKind.DEPENDENT:
            accessor = accessor.resolve(dict(projection))
        if not has_member(o, name):
            if accessor.kind is FieldKind.REQUIRED:
                return Err(MissingField(o, name))
            continue
        result = accessor.validator.run_fn(o[name])  # type: ignore[union-attr]
        if isinstance(result, Err):
            return result
        projection[name] = result.value
    return Ok(projection)


def has(fields: Mapping[FieldName, FieldAccessor]) -> Validator:
    """
    Check that an object satisfies conditions on its fields.

    Fields are checked in declaration order and the first failure is
    returned. Fields not listed are allowed and left out of the result;
    absent optional fields are omitted as well.

    Usage:
        person = has({
            "name": required(string),
            "age": optional(number),
        })
    """
    declared = _check_fields(fields, "has")
    return Validator(
        run_fn=partial(_run_fields, fields=declared),
        name=f"has({', '.join(map(repr, declared))})",
        type_hint=dict[str, Any],
        shape=ObjectShape(fields=tuple(declared.items())),
    )


def just(fields: Mapping[FieldName, FieldAccessor]) -> Validator:
    """
    Check that an object has only the fields listed, and no more.

    Runs `has` first; field failures take precedence over extra fields.

    Usage:
        rgb = just({
            "r": required(number),
            "g": required(number),
            "b": required(number),
        })
    """
    declared = _check_fields(fields, "just")

    def run_fn(o: Any) -> Ok[Any] | Err[Any]:
        result = _run_fields(o, declared)
        if isinstance(result, Err):
            return result
        extra = tuple(name for name in own_fields(o) if name not in declared)
        if extra:
            return Err(ExtraFields(o, extra))
        return result

    return Validator(
        run_fn=run_fn,
        name=f"just({', '.join(map(repr, declared))})",
        type_hint=dict[str, Any],
        shape=ObjectShape(fields=tuple(declared.items()), closed=True),
    )


def array_of(element: Validator) -> Validator:
    """
    Check that the input is a list (or tuple) whose every element passes.

    Returns the validated elements in order, in a container of the input's
    type. The first failing element is reported as an ElementMismatch.
    """
    if not isinstance(element, Validator):
        raise TypeError(f"array_of() expects a Validator, got {type(element).__name__}")

    def run_fn(o: Any) -> Ok[Any] | Err[Any]:
        if not isinstance(o, (list, tuple)):
            return Err(NotASequence(o))
        values = []
        for i, item in enumerate(o):
            result = element.run_fn(item)
            if isinstance(result, Err):
                return Err(ElementMismatch(o, i, item, result.error))
            values.append(result.value)
        return Ok(tuple(values) if isinstance(o, tuple) else values)

    return Validator(
        run_fn=run_fn,
        name=f"array_of({element.name})",
        type_hint=list[element.type_hint],  # type: ignore[valid-type]
    )


def record(validators: Mapping[str, Validator]) -> Validator:
    """
    Run several validators against the same input and collect the results.

    Usage:
        record({"as_text": string, "length": string >> to_length})
    """
    if not isinstance(validators, Mapping):
        raise TypeError("record() expects a mapping of name to Validator")
    declared = dict(validators)
    for name, v in declared.items():
        if not isinstance(v, Validator):
            raise TypeError(f"record(): {name!r} must be a Validator, got {type(v).__name__}")

    def run_fn(o: Any) -> Ok[Any] | Err[Any]:
        out: dict[str, Any] = {}
        for name, v in declared.items():
            result = v.run_fn(o)
            if isinstance(result, Err):
                return result
            out[name] = result.value
        return Ok(out)

    return Validator(
        run_fn=run_fn,
        name=f"record({', '.join(map(repr, declared))})",
        type_hint=dict[str, Any],
    )
