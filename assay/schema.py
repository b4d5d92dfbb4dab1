"""
Pydantic interop for assay.

Compiles object validators (`has`/`just`) into Pydantic models so every
schema can be paired with an explicit result type.
"""

from __future__ import annotations

import logging
from typing import Any
from typing import Optional as TypingOptional

from pydantic import BaseModel, ConfigDict, create_model

from .core import Validator
from .fields import FieldAccessor, FieldKind

logger = logging.getLogger(__name__)


def to_pydantic(name: str, validator: Validator) -> type[BaseModel]:
    """
    Compile an object validator to a Pydantic model.

    Args:
        name: Name of the generated model class
        validator: A validator built with has() or just()

    Returns:
        A Pydantic BaseModel subclass. Required fields are required, optional
        fields default to None, and just() shapes forbid extra fields.
        Nested object validators become nested models.

    Usage:
        Person = to_pydantic("Person", has({
            "name": required(string),
            "age": optional(number),
        }))
        person = Person.model_validate(run_or_throw(person_validator, data))
    """
    shape = validator.shape
    if shape is None:
        raise TypeError(f"to_pydantic() requires a has() or just() validator, got {validator.name}")

    fields: dict[str, Any] = {}
    for key, accessor in shape.fields:
        if not isinstance(key, str):
            raise TypeError(f"Pydantic field names must be strings, got {key!r}")
        fields[key] = _extract_pydantic_field(accessor, f"{name}_{key}")

    config = ConfigDict(extra="forbid") if shape.closed else None
    model = create_model(name, __config__=config, **fields)
    logger.debug("compiled %s into model %s with fields %s", validator.name, name, list(fields))
    return model


def _field_type(v: Validator, nested_name: str) -> Any:
    if v.shape is not None:
        return to_pydantic(nested_name, v)
    return v.type_hint


def _extract_pydantic_field(accessor: FieldAccessor, nested_name: str) -> tuple[Any, Any]:
    """Extract Pydantic field type and default from an accessor."""
    match accessor:
        case FieldAccessor(kind=FieldKind.REQUIRED, validator=Validator() as v):
            return (_field_type(v, nested_name), ...)
        case FieldAccessor(kind=FieldKind.OPTIONAL, validator=Validator() as v):
            return (TypingOptional[_field_type(v, nested_name)], None)

    # dependent fields are only known per input
    return (Any, None)
