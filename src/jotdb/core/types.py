"""Core types and specifications for JotDB.

All models are pydantic so that schema declarations, persisted meta artifacts
and configuration files share one parsing path. Persisted keys keep the
camelCase spelling (``indexSetting``, ``ignoreCase``); Python code uses the
snake_case attribute names. Both spellings are accepted on input.
"""

from __future__ import annotations

import json
from enum import StrEnum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from jotdb.exceptions import ConfigError

Document = dict[str, Any]
"""A stored record plus its identifier under ``_id``."""

ID_FIELD = "_id"

IndexValue = str | int | float | bool


class FieldType(StrEnum):
    """Supported field types in JotDB."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OBJECT = "object"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid field type values."""
        return [t.value for t in cls]


class IndexSetting(BaseModel):
    """Per-field index options. Only valid on indexed string fields."""

    ignore_case: bool = Field(
        default=False, alias="ignoreCase", description="Case-fold values and query terms"
    )

    model_config = {"frozen": True, "populate_by_name": True}


class FieldDefinition(BaseModel):
    """Declaration of a single schema field.

    ``default`` of ``None`` means the field has no default; JSON ``null`` is
    not a valid value for any field type, so nothing is lost.
    """

    type: FieldType = Field(..., description="Field data type")
    index: bool = Field(default=False, description="Whether to maintain a sorted index")
    index_setting: IndexSetting | None = Field(
        default=None, alias="indexSetting", description="Index options (string fields only)"
    )
    default: Any = Field(default=None, description="Value applied when the field is omitted")

    model_config = {"frozen": True, "populate_by_name": True}

    @property
    def ignore_case(self) -> bool:
        """Whether the field's index case-folds values."""
        return self.index_setting is not None and self.index_setting.ignore_case

    @property
    def has_default(self) -> bool:
        return self.default is not None

    def to_json(self) -> dict[str, Any]:
        """Persisted form: ``{type, index, indexSetting?, default?}``."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class IndexEntry(BaseModel):
    """One ``(value, id)`` pair of a serialized index."""

    value: IndexValue
    id: str


class IndexSnapshot(BaseModel):
    """Verbatim export of an index: identity plus its sorted entries."""

    field: str
    field_type: FieldType
    ignore_case: bool = False
    entries: list[IndexEntry] = Field(default_factory=list)


class CollectionMeta(BaseModel):
    """Meta artifact of one collection.

    ``indexes`` is only present for durable backends; memory-backed
    collections persist the schema alone.
    """

    schema_: dict[str, FieldDefinition] = Field(default_factory=dict, alias="schema")
    indexes: dict[str, list[IndexEntry]] | None = None

    model_config = {"populate_by_name": True}

    def to_json(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "schema": {name: field.to_json() for name, field in self.schema_.items()}
        }
        if self.indexes is not None:
            payload["indexes"] = {
                name: [entry.model_dump() for entry in entries]
                for name, entries in self.indexes.items()
            }
        return payload


class CollectionConfig(BaseModel):
    """Configuration of one named collection."""

    schema_: dict[str, FieldDefinition] = Field(..., alias="schema")

    model_config = {"populate_by_name": True}


class DatabaseConfig(BaseModel):
    """Configuration of a whole database: storage path and its collections."""

    path: str | None = Field(default=None, description="Directory for file storage")
    collections: dict[str, CollectionConfig] = Field(default_factory=dict)

    @classmethod
    def from_file(cls, path: str | Path) -> DatabaseConfig:
        """Load configuration from a JSON file.

        Raises:
            ConfigError: If the file is missing or its content is invalid
        """
        file_path = Path(path)
        if not file_path.exists():
            raise ConfigError(
                f"Config file not found: {file_path}",
                {"path": str(file_path)},
            )
        try:
            with file_path.open("r", encoding="utf-8") as f:
                raw = json.load(f)
            return cls.model_validate(raw)
        except json.JSONDecodeError as e:
            raise ConfigError(
                f"Config file {file_path} is not valid JSON: {e.msg} (line {e.lineno})",
                {"path": str(file_path)},
            ) from e
        except PydanticValidationError as e:
            raise ConfigError(
                f"Config file {file_path} is invalid: {e.error_count()} error(s)",
                {"path": str(file_path), "errors": e.errors(include_url=False)},
            ) from e


class FieldInfo(BaseModel):
    """Information about a declared field (output format)."""

    name: str
    type: str
    indexed: bool
    ignore_case: bool = False
    default: Any = None


class CollectionInfo(BaseModel):
    """Information about a collection (output format)."""

    name: str
    storage: str
    record_count: int
    fields: list[FieldInfo] = Field(default_factory=list)

    @property
    def indexed_fields(self) -> list[str]:
        return [f.name for f in self.fields if f.indexed]
