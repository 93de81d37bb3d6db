"""Core components for JotDB."""

from jotdb.core.types import (
    CollectionConfig,
    CollectionInfo,
    CollectionMeta,
    DatabaseConfig,
    FieldDefinition,
    FieldInfo,
    FieldType,
    IndexEntry,
    IndexSetting,
    IndexSnapshot,
)

__all__ = [
    "FieldType",
    "FieldDefinition",
    "IndexSetting",
    "IndexEntry",
    "IndexSnapshot",
    "CollectionMeta",
    "CollectionConfig",
    "DatabaseConfig",
    "CollectionInfo",
    "FieldInfo",
]
