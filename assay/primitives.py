"""
Primitive validators for assay.

Category checks (`of`, `not_of`), structural equality, and predicate
refinements layered on top of a category check.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from enum import Enum
from types import SimpleNamespace
from typing import Any, Callable, Union

from .context import current_settings
from .core import Validator
from .errors import PredicateMismatch, TypeMismatch
from .types import MISSING, Err, MessageFn, Ok, TestFn, TypeTag

_TYPE_HINTS: dict[TypeTag, Any] = {
    TypeTag.STRING: str,
    TypeTag.NUMBER: Union[int, float],
    TypeTag.BOOLEAN: bool,
    TypeTag.OBJECT: Any,
    TypeTag.FUNCTION: Callable[..., Any],
    TypeTag.SYMBOL: Any,
    TypeTag.UNDEFINED: type(None),
    TypeTag.BIGINT: int,
}


def to_tag(tag: TypeTag | str) -> TypeTag:
    """Coerce a string to a TypeTag, rejecting names outside the closed set."""
    try:
        return TypeTag(tag)
    except ValueError:
        allowed = ", ".join(t.value for t in TypeTag)
        raise ValueError(f"Unknown type tag {tag!r}; expected one of: {allowed}") from None


def matches_category(tag: TypeTag, value: Any) -> bool:
    """Check whether `value` belongs to the runtime category `tag`."""
    if tag is TypeTag.STRING:
        return isinstance(value, str)
    if tag is TypeTag.NUMBER:
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if tag is TypeTag.BOOLEAN:
        return isinstance(value, bool)
    if tag is TypeTag.OBJECT:
        return isinstance(value, (Mapping, list, tuple))
    if tag is TypeTag.FUNCTION:
        return callable(value) and not isinstance(value, type)
    if tag is TypeTag.SYMBOL:
        return isinstance(value, Enum) and value is not MISSING
    if tag is TypeTag.UNDEFINED:
        return value is None or value is MISSING
    return isinstance(value, int) and not isinstance(value, bool)


def short_repr(value: Any) -> str:
    """repr() bounded by the active `max_repr` setting."""
    limit = current_settings().max_repr
    rendered = repr(value)
    if len(rendered) > limit:
        return rendered[:limit] + "..."
    return rendered


def of(tag: TypeTag | str) -> Validator:
    """
    Validate that a value belongs to a runtime category.

    Usage:
        of("string")
        of(TypeTag.NUMBER)
    """
    t = to_tag(tag)

    def run_fn(o: Any) -> Ok[Any] | Err[TypeMismatch]:
        if matches_category(t, o):
            return Ok(o)
        return Err(TypeMismatch(t.value, o))

    return Validator(run_fn=run_fn, name=t.value, type_hint=_TYPE_HINTS[t])


def not_of(tag: TypeTag | str) -> Validator:
    """Validate that a value does NOT belong to a runtime category."""
    t = to_tag(tag)

    def run_fn(o: Any) -> Ok[Any] | Err[PredicateMismatch]:
        if matches_category(t, o):
            return Err(PredicateMismatch(o, f"{short_repr(o)} is of type {t.value!r}"))
        return Ok(o)

    return Validator(run_fn=run_fn, name=f"not {t.value}")


def deep_equal(a: Any, b: Any) -> bool:
    """
    Structural equality that does not conflate booleans with numbers and
    treats NaN as equal to NaN.

    Mappings compare by key set and values, lists and tuples element-wise.
    """
    if isinstance(a, float) and isinstance(b, float) and math.isnan(a) and math.isnan(b):
        return True
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if isinstance(a, Mapping) and isinstance(b, Mapping):
        if a.keys() != b.keys():
            return False
        return all(deep_equal(a[k], b[k]) for k in a)
    if isinstance(a, (list, tuple)) and isinstance(b, (list, tuple)):
        if type(a) is not type(b) or len(a) != len(b):
            return False
        return all(deep_equal(x, y) for x, y in zip(a, b))
    return a == b


def equal_to(expected: Any) -> Validator:
    """Validate that a value is structurally equal to `expected`."""

    def run_fn(o: Any) -> Ok[Any] | Err[PredicateMismatch]:
        if deep_equal(expected, o):
            return Ok(o)
        return Err(
            PredicateMismatch(o, f"{short_repr(o)} is not equal to {short_repr(expected)}")
        )

    return Validator(
        run_fn=run_fn, name=f"equal_to({expected!r})", type_hint=type(expected)
    )


def _default_message(value: Any) -> str:
    return f"{short_repr(value)} did not satisfy custom constraint"


def predicate(tag: TypeTag | str) -> Callable[..., Validator]:
    """
    Build a refinement factory for a runtime category.

    The returned factory takes a test and an optional message function. The
    resulting validator checks the category first (TypeMismatch on failure),
    then the test (PredicateMismatch with `message(value)` on failure).

    Usage:
        positive = predicate("number")(lambda n: n > 0, lambda n: f"{n} <= 0")
    """
    type_check = of(tag)

    def refine(test: TestFn, message: MessageFn | None = None) -> Validator:
        render = message or _default_message

        def run_fn(o: Any) -> Ok[Any] | Err[Any]:
            checked = type_check.run_fn(o)
            if isinstance(checked, Err):
                return checked
            if test(checked.value):
                return checked
            return Err(PredicateMismatch(o, render(checked.value)))

        return Validator(
            run_fn=run_fn,
            name=f"{type_check.name} where {getattr(test, '__name__', 'test')}",
            type_hint=type_check.type_hint,
        )

    return refine


# Category validators
string = of(TypeTag.STRING)
number = of(TypeTag.NUMBER)
boolean = of(TypeTag.BOOLEAN)
obj = of(TypeTag.OBJECT)
func = of(TypeTag.FUNCTION)
symbol = of(TypeTag.SYMBOL)
undef = of(TypeTag.UNDEFINED)
bigint = of(TypeTag.BIGINT)
array = predicate(TypeTag.OBJECT)(
    lambda o: isinstance(o, (list, tuple)),
    lambda o: f"{short_repr(o)} is not an array",
).with_name("array")


def _not_array(o: Any) -> Ok[Any] | Err[PredicateMismatch]:
    if isinstance(o, (list, tuple)):
        return Err(PredicateMismatch(o, f"{short_repr(o)} is an array"))
    return Ok(o)


not_ = SimpleNamespace(
    of=not_of,
    string=not_of(TypeTag.STRING),
    number=not_of(TypeTag.NUMBER),
    boolean=not_of(TypeTag.BOOLEAN),
    obj=not_of(TypeTag.OBJECT),
    func=not_of(TypeTag.FUNCTION),
    symbol=not_of(TypeTag.SYMBOL),
    undef=not_of(TypeTag.UNDEFINED),
    bigint=not_of(TypeTag.BIGINT),
    array=Validator(run_fn=_not_array, name="not array"),
)

# Refinements
is_true = predicate(TypeTag.BOOLEAN)(
    lambda b: b, lambda _: "expected True, got False"
).with_name("is_true")

is_false = predicate(TypeTag.BOOLEAN)(
    lambda b: not b, lambda _: "expected False, got True"
).with_name("is_false")


def string_length(n: int) -> Validator:
    """Validate a string of exactly `n` characters."""
    return predicate(TypeTag.STRING)(
        lambda s: len(s) == n,
        lambda s: f"{s!r} is required to be of length {n}, got {len(s)}",
    ).with_name(f"string_length({n})")


def string_pattern(pattern: str | re.Pattern[str]) -> Validator:
    """
    Validate a string containing a match for `pattern`.

    Usage:
        string_pattern(r"^[a-z]+$")
    """
    compiled = re.compile(pattern)
    return predicate(TypeTag.STRING)(
        lambda s: compiled.search(s) is not None,
        lambda s: f"{s!r} does not match pattern {compiled.pattern!r}",
    ).with_name(f"string_pattern({compiled.pattern!r})")


def number_range_inclusive(lower: float, upper: float) -> Validator:
    """Validate lower <= n <= upper."""
    return predicate(TypeTag.NUMBER)(
        lambda n: lower <= n <= upper,
        lambda n: f"{n} is not in range [{lower},{upper}]",
    ).with_name(f"number_range_inclusive({lower}, {upper})")


def number_range_exclusive(lower: float, upper: float) -> Validator:
    """Validate lower < n < upper."""
    return predicate(TypeTag.NUMBER)(
        lambda n: lower < n < upper,
        lambda n: f"{n} is not in range ({lower},{upper})",
    ).with_name(f"number_range_exclusive({lower}, {upper})")
