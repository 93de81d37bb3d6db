"""Schema and record validation.

``validate_record`` is a pure function returning a :class:`ValidationResult`;
collections call :func:`ensure_valid_record` to turn a failed result into a
:class:`~jotdb.exceptions.ValidationError` before touching any state.
"""

from __future__ import annotations

import copy
import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from jotdb.core.types import ID_FIELD, FieldType
from jotdb.exceptions import SchemaDefinitionError, ValidationError
from jotdb.schema.models import Schema


@dataclass(frozen=True)
class ValidationResult:
    """Result of record validation."""

    valid: bool
    """Whether the record passed validation."""

    field_errors: dict[str, str] = field(default_factory=dict)
    """Per-field error messages, in schema/record order."""

    @property
    def error(self) -> str | None:
        """Combined error message, or None when valid."""
        if self.valid:
            return None
        return "; ".join(self.field_errors.values())

    @classmethod
    def ok(cls) -> ValidationResult:
        return cls(valid=True)


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int | float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, list | tuple):
        return "array"
    return type(value).__name__


def check_value(field_name: str, field_type: FieldType, value: Any) -> str | None:
    """Check a single value against a field type.

    Returns:
        An error message, or None if the value fits the type
    """
    if field_type == FieldType.STRING:
        if not isinstance(value, str):
            return f'Field "{field_name}" must be of type string, got {_type_name(value)}'
    elif field_type == FieldType.NUMBER:
        # bool is an int subclass; NaN and infinities do not survive JSON
        if (
            isinstance(value, bool)
            or not isinstance(value, int | float)
            or not math.isfinite(value)
        ):
            return f'Field "{field_name}" must be of type number, got {_type_name(value)}'
    elif field_type == FieldType.BOOLEAN:
        if not isinstance(value, bool):
            return f'Field "{field_name}" must be of type boolean, got {_type_name(value)}'
    elif field_type == FieldType.OBJECT:
        if not isinstance(value, Mapping):
            return f'Field "{field_name}" must be a plain object, got {_type_name(value)}'
        for key, item in value.items():
            if isinstance(item, Mapping | list | tuple):
                return (
                    f'Field "{field_name}.{key}" contains a nested {_type_name(item)}; '
                    f"only flat objects are allowed"
                )
    return None


def validate_schema(schema: Schema) -> None:
    """Check the declaration invariants of a schema.

    Raises:
        SchemaDefinitionError: On the first offending field
    """
    for name, definition in schema.items():
        if not isinstance(name, str) or not name:
            raise SchemaDefinitionError(str(name), "field names must be non-empty strings")
        if name == ID_FIELD:
            raise SchemaDefinitionError(name, f'"{ID_FIELD}" is reserved for record identifiers')
        if definition.index and definition.type == FieldType.OBJECT:
            raise SchemaDefinitionError(name, "cannot index 'object' type fields")
        if definition.index_setting is not None and not definition.index:
            raise SchemaDefinitionError(name, "indexSetting requires index: true")
        if definition.index_setting is not None and definition.type != FieldType.STRING:
            raise SchemaDefinitionError(
                name, "indexSetting is only valid for 'string' type fields"
            )
        if definition.has_default:
            problem = check_value(name, definition.type, definition.default)
            if problem:
                raise SchemaDefinitionError(name, f"invalid default value ({problem})")


def validate_record(
    record: Mapping[str, Any], schema: Schema, partial: bool = False
) -> ValidationResult:
    """Validate a record against a schema.

    Args:
        record: Field values to check
        schema: Collection schema
        partial: True for updates (omitted fields allowed), False for inserts
            (every declared field required)

    Returns:
        ValidationResult collecting every field error
    """
    if not isinstance(record, Mapping):
        return ValidationResult(
            valid=False,
            field_errors={"": f"Record must be an object, got {_type_name(record)}"},
        )

    errors: dict[str, str] = {}
    for key in record:
        if key not in schema:
            errors[key] = f'Unknown field "{key}" is not defined in the schema'

    for name, definition in schema.items():
        if name not in record:
            if not partial:
                errors[name] = f'Missing required field "{name}"'
            continue
        problem = check_value(name, definition.type, record[name])
        if problem:
            errors[name] = problem

    if errors:
        return ValidationResult(valid=False, field_errors=errors)
    return ValidationResult.ok()


def ensure_valid_record(
    record: Mapping[str, Any], schema: Schema, partial: bool = False
) -> None:
    """Raise :class:`ValidationError` unless ``record`` validates."""
    result = validate_record(record, schema, partial)
    if not result.valid:
        raise ValidationError(result.error or "Invalid record", result.field_errors)


def apply_defaults(record: Mapping[str, Any], schema: Schema) -> dict[str, Any]:
    """Return a copy of ``record`` with declared defaults filled in.

    Defaults are deep-copied so object defaults are never shared between
    records.
    """
    if not isinstance(record, Mapping):
        return record  # type: ignore[return-value]
    result = dict(record)
    for name, definition in schema.items():
        if name not in result and definition.has_default:
            result[name] = copy.deepcopy(definition.default)
    return result
