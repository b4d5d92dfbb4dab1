"""
Assay - validate and decode untyped data with composable validators.

Usage:
    from assay import has, required, optional, string, number, array_of, recursive, run

    person = recursive(lambda: has({
        "name": required(string),
        "age": optional(number),
        "children": required(array_of(person)),
    }))

    result = run(person, data)   # Ok(decoded) or Err(error_node)
"""

from .context import Settings, current_settings, validation_context
from .core import (
    Validator,
    apply,
    both,
    chain,
    compose,
    fail,
    from_function,
    from_result,
    is_failure,
    is_success,
    map,
    map_error,
    or_,
    recursive,
    run,
    run_or_throw,
    succeed,
)
from .errors import (
    AlternativeExhausted,
    ElementMismatch,
    ErrorNode,
    ExtraFields,
    MissingField,
    NotASequence,
    PredicateMismatch,
    TypeMismatch,
    ValidationFailed,
    leaves,
)
from .fields import (
    FieldAccessor,
    FieldKind,
    dependent,
    optional,
    optional_field,
    required,
    required_field,
)
from .primitives import (
    array,
    bigint,
    boolean,
    equal_to,
    func,
    is_false,
    is_true,
    not_,
    not_of,
    number,
    number_range_exclusive,
    number_range_inclusive,
    obj,
    of,
    predicate,
    string,
    string_length,
    string_pattern,
    symbol,
    undef,
)
from .schema import to_pydantic
from .structure import ObjectShape, array_of, has, just, record
from .types import MISSING, Err, Ok, Result, TypeTag

__all__ = [
    # Result types
    "Ok",
    "Err",
    "Result",
    "MISSING",
    "TypeTag",
    # Core
    "Validator",
    "from_function",
    "from_result",
    "succeed",
    "fail",
    "map",
    "map_error",
    "apply",
    "chain",
    "or_",
    "both",
    "compose",
    "recursive",
    "is_success",
    "is_failure",
    "run",
    "run_or_throw",
    # Primitives
    "of",
    "not_of",
    "not_",
    "equal_to",
    "predicate",
    "string",
    "number",
    "boolean",
    "obj",
    "func",
    "symbol",
    "undef",
    "bigint",
    "array",
    "is_true",
    "is_false",
    "string_length",
    "string_pattern",
    "number_range_inclusive",
    "number_range_exclusive",
    # Fields
    "FieldAccessor",
    "FieldKind",
    "required",
    "optional",
    "dependent",
    "required_field",
    "optional_field",
    # Structure
    "ObjectShape",
    "has",
    "just",
    "array_of",
    "record",
    # Errors
    "ErrorNode",
    "TypeMismatch",
    "PredicateMismatch",
    "MissingField",
    "ExtraFields",
    "NotASequence",
    "ElementMismatch",
    "AlternativeExhausted",
    "ValidationFailed",
    "leaves",
    # Config / interop
    "Settings",
    "current_settings",
    "validation_context",
    "to_pydantic",
]
