"""
Core validator class and combinator algebra for assay.

A Validator wraps a function from an untyped value to a Result. Nothing runs
at construction time: combinators close over their constituents and only do
work when the composed validator is called.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Union

from .context import is_tracing
from .errors import AlternativeExhausted, ValidationFailed
from .types import Err, Ok, RunFn

if TYPE_CHECKING:
    from .structure import ObjectShape

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Validator:
    """
    Immutable validator node.

    Holds the run function plus the metadata `to_pydantic` needs: the Python
    type a success carries and, for object validators, the declared shape.
    Validators are re-entrant and may be shared freely.
    """

    run_fn: RunFn = field(repr=False)
    name: str = "validator"
    type_hint: Any = Any
    shape: ObjectShape | None = field(default=None, repr=False)

    def __call__(self, value: Any) -> Ok[Any] | Err[Any]:
        return self.run_fn(value)

    def map(self, f: Callable[[Any], Any]) -> Validator:
        return map(self, f)

    def map_error(self, f: Callable[[Any], Any]) -> Validator:
        return map_error(self, f)

    def chain(self, f: Callable[[Any], Validator]) -> Validator:
        return chain(self, f)

    def __or__(self, other: Validator) -> Validator:
        """
        Alternative: succeed if either side succeeds.

        Usage:
            string | number
        """
        return or_(self, other)

    def __and__(self, other: Validator) -> Validator:
        """
        Pair: succeed with both results when both sides succeed.

        Usage:
            string & string_length(3)
        """
        return both(self, other)

    def __rshift__(self, other: Validator) -> Validator:
        """
        Pipeline: validate the output of this validator with `other`.

        Usage:
            string >> to_int >> number_range_inclusive(0, 255)
        """
        return compose(self, other)

    def with_name(self, name: str) -> Validator:
        """Return the same validator under a different display name."""
        return Validator(
            run_fn=self.run_fn,
            name=name,
            type_hint=self.type_hint,
            shape=self.shape,
        )


def _ensure(v: Any) -> Validator:
    if not isinstance(v, Validator):
        raise TypeError(f"Expected a Validator, got {type(v).__name__}")
    return v


def from_function(f: RunFn, name: str | None = None, type_hint: Any = Any) -> Validator:
    """Lift a raw `value -> Result` function into a Validator."""
    return Validator(
        run_fn=f,
        name=name or getattr(f, "__name__", "validator"),
        type_hint=type_hint,
    )


def from_result(result: Ok[Any] | Err[Any]) -> Validator:
    """A validator that ignores its input and returns `result`."""
    return Validator(run_fn=lambda _: result, name=f"from_result({result!r})")


def succeed(value: Any) -> Validator:
    """Always yields Ok(value). Never fails."""
    return Validator(
        run_fn=lambda _: Ok(value),
        name=f"succeed({value!r})",
        type_hint=type(value),
    )


def fail(error: Any) -> Validator:
    """Always yields Err(error)."""
    return Validator(run_fn=lambda _: Err(error), name=f"fail({error!r})")


def map(v: Validator, f: Callable[[Any], Any]) -> Validator:
    """Transform the success value of `v`; errors pass through unchanged."""
    _ensure(v)
    return Validator(run_fn=lambda o: v.run_fn(o).map(f), name=f"map({v.name})")


def map_error(v: Validator, f: Callable[[Any], Any]) -> Validator:
    """Transform the error of `v`; successes pass through unchanged."""
    _ensure(v)
    return Validator(
        run_fn=lambda o: v.run_fn(o).map_err(f),
        name=f"map_error({v.name})",
        type_hint=v.type_hint,
        shape=v.shape,
    )


def apply(vf: Validator, va: Validator) -> Validator:
    """
    Applicative application: run both validators on the same input.

    Succeeds with `f(a)` when `vf` yields `f` and `va` yields `a`. Errors are
    not accumulated: when both fail, only the error of `vf` is reported.
    """
    _ensure(vf)
    _ensure(va)

    def run_fn(o: Any) -> Ok[Any] | Err[Any]:
        rf = vf.run_fn(o)
        ra = va.run_fn(o)
        if isinstance(rf, Err):
            return rf
        if isinstance(ra, Err):
            return ra
        return Ok(rf.value(ra.value))

    return Validator(run_fn=run_fn, name=f"apply({vf.name}, {va.name})")


def chain(v: Validator, f: Callable[[Any], Validator]) -> Validator:
    """
    Dependent sequencing: on success run `f(value)` against the same input.

    Short-circuits on the first failure; `f` is never called for an Err.
    """
    _ensure(v)

    def run_fn(o: Any) -> Ok[Any] | Err[Any]:
        result = v.run_fn(o)
        if isinstance(result, Err):
            return result
        return _ensure(f(result.value)).run_fn(o)

    return Validator(
        run_fn=run_fn,
        name=f"chain({v.name})",
    )


def or_(fst: Validator, snd: Validator) -> Validator:
    """
    Alternative: run both validators on the same input.

    Left-biased when both succeed. When both fail the error is an
    AlternativeExhausted holding both errors. Both branches always run, so an
    expensive left branch does not spare the right one.
    """
    _ensure(fst)
    _ensure(snd)

    def run_fn(o: Any) -> Ok[Any] | Err[Any]:
        fres = fst.run_fn(o)
        sres = snd.run_fn(o)
        if isinstance(fres, Ok):
            return fres
        if isinstance(sres, Ok):
            return sres
        return Err(AlternativeExhausted(fres.error, sres.error))

    return Validator(
        run_fn=run_fn,
        name=f"({fst.name} | {snd.name})",
        type_hint=Union[fst.type_hint, snd.type_hint],
    )


def both(fst: Validator, snd: Validator) -> Validator:
    """
    Run two validators, failing if either fails and succeeding with the
    pair of results when both succeed. If both fail, the first error wins.
    """
    _ensure(fst)
    _ensure(snd)
    paired = apply(map(fst, lambda t: lambda u: (t, u)), snd)
    return Validator(
        run_fn=paired.run_fn,
        name=f"({fst.name} & {snd.name})",
        type_hint=tuple[fst.type_hint, snd.type_hint],
    )


def compose(vb: Validator, vc: Validator) -> Validator:
    """
    Feed the success of `vb` into `vc` as its input.

    Errors from either stage propagate untouched.
    """
    _ensure(vb)
    _ensure(vc)

    def run_fn(o: Any) -> Ok[Any] | Err[Any]:
        result = vb.run_fn(o)
        if isinstance(result, Err):
            return result
        return vc.run_fn(result.value)

    return Validator(
        run_fn=run_fn,
        name=f"({vb.name} >> {vc.name})",
        type_hint=vc.type_hint,
        shape=vc.shape,
    )


def recursive(body: Callable[[], Validator], name: str = "recursive") -> Validator:
    """
    Defer a validator behind a thunk so it can refer to itself.

    `body` is called on every invocation, never at construction, so a schema
    may mention the validator being defined:

        tree = recursive(lambda: has({
            "value": required(string),
            "children": required(array_of(tree)),
        }))

    Recursion depth is bounded by the depth of the input. Cyclic input
    values are not supported.
    """
    if not callable(body):
        raise TypeError("recursive() expects a zero-argument callable")

    def run_fn(o: Any) -> Ok[Any] | Err[Any]:
        return _ensure(body()).run_fn(o)

    return Validator(run_fn=run_fn, name=name)


def is_success(result: Ok[Any] | Err[Any]) -> bool:
    return isinstance(result, Ok)


def is_failure(result: Ok[Any] | Err[Any]) -> bool:
    return isinstance(result, Err)


def run(validator: Validator, value: Any) -> Ok[Any] | Err[Any]:
    """
    Run a validator against a value.

    Returns:
        Ok(decoded) if the value conforms
        Err(error_node) otherwise
    """
    result = _ensure(validator).run_fn(value)
    if isinstance(result, Err) and is_tracing():
        logger.debug("%s rejected %.200r: %r", validator.name, value, result.error)
    return result


def run_or_throw(validator: Validator, value: Any) -> Any:
    """
    Run a validator, returning the decoded value or raising.

    Raises:
        ValidationFailed: carrying the structured error on `.error`
    """
    result = run(validator, value)
    if isinstance(result, Err):
        logger.debug("run_or_throw(%s) raising on %r", validator.name, result.error)
        raise ValidationFailed(result.error)
    return result.value
