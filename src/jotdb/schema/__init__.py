"""Schema declarations and validation."""

from jotdb.schema.models import Schema
from jotdb.schema.validation import (
    ValidationResult,
    apply_defaults,
    ensure_valid_record,
    validate_record,
    validate_schema,
)

__all__ = [
    "Schema",
    "ValidationResult",
    "apply_defaults",
    "ensure_valid_record",
    "validate_record",
    "validate_schema",
]
