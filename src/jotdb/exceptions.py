"""Custom exceptions for JotDB.

Every error carries an actionable message plus a machine-readable context
dict, so the CLI can render either a readable panel or a JSON object.
Backend I/O failures (``OSError``, ``json.JSONDecodeError``) are not wrapped
and reach the caller unchanged.
"""

from __future__ import annotations

from typing import Any


class JotDBError(Exception):
    """Base exception for all JotDB errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def to_dict(self) -> dict[str, Any]:
        """Return error as JSON-serializable dict."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
        }


class SchemaDefinitionError(JotDBError):
    """Schema declaration is invalid (raised once, at construction)."""

    def __init__(self, field_name: str, reason: str) -> None:
        message = f'Field "{field_name}": {reason}'
        super().__init__(message, {"field_name": field_name, "reason": reason})
        self.field_name = field_name
        self.reason = reason


class ValidationError(JotDBError):
    """Record does not satisfy the collection schema."""

    def __init__(self, message: str, field_errors: dict[str, str] | None = None) -> None:
        super().__init__(message, {"field_errors": field_errors or {}})
        self.field_errors = field_errors or {}


class RecordNotFoundError(JotDBError):
    """Record with given ID does not exist."""

    def __init__(self, record_id: str, collection_name: str) -> None:
        message = f'Record "{record_id}" not found in "{collection_name}".'
        super().__init__(message, {"record_id": record_id, "collection_name": collection_name})
        self.record_id = record_id
        self.collection_name = collection_name


class QueryError(JotDBError):
    """Query pattern cannot be evaluated."""

    pass


class FieldNotIndexedError(QueryError):
    """Queried field has no index (or is not declared at all)."""

    def __init__(
        self, field_name: str, collection_name: str, indexed_fields: list[str] | None = None
    ) -> None:
        indexed = indexed_fields or []
        message = (
            f'Field "{field_name}" is not indexed in "{collection_name}". '
            f'Add "index": true to the schema to enable search.'
        )
        if indexed:
            message += f" Indexed fields: {', '.join(indexed)}"
        super().__init__(
            message,
            {
                "field_name": field_name,
                "collection_name": collection_name,
                "indexed_fields": indexed,
            },
        )
        self.field_name = field_name
        self.collection_name = collection_name
        self.indexed_fields = indexed


class CollectionNotFoundError(JotDBError):
    """Collection is not part of the database configuration."""

    def __init__(self, name: str, available: list[str] | None = None) -> None:
        available = available or []
        if available:
            message = f'Collection "{name}" does not exist. Available: {", ".join(available)}'
        else:
            message = f'Collection "{name}" does not exist. No collections are configured.'
        super().__init__(message, {"collection_name": name, "available_collections": available})
        self.collection_name = name
        self.available_collections = available


class ConfigError(JotDBError):
    """Configuration file is missing or malformed."""

    pass
