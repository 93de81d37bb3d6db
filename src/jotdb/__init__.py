"""JotDB - Embedded, schema-validated JSON document store.

Records live in named collections, each bound to a schema. Fields declared
with ``"index": true`` get a sorted index answering exact, prefix, suffix,
contains and numeric range queries. Storage is either in memory or a pair of
JSON files per collection.

Example:
    from jotdb import create_db

    db = create_db(
        {
            "users": {
                "schema": {
                    "name": {"type": "string", "index": True, "indexSetting": {"ignoreCase": True}},
                    "age": {"type": "number", "index": True},
                    "sex": {"type": "string"},
                }
            }
        },
        path="./data",  # omit for in-memory storage
    )

    josef = db.users.add({"name": "Josef", "age": 30, "sex": "male"})
    db.users.find({"name": "josef%", "age": ">26"})
    db.users.update(josef["_id"], {"age": 31})
"""

from jotdb.core.collection import Collection
from jotdb.core.engine import JotDB, create_db
from jotdb.core.ids import generate_id
from jotdb.core.types import (
    CollectionConfig,
    CollectionInfo,
    CollectionMeta,
    DatabaseConfig,
    Document,
    FieldDefinition,
    FieldInfo,
    FieldType,
    IndexEntry,
    IndexSetting,
    IndexSnapshot,
)
from jotdb.exceptions import (
    CollectionNotFoundError,
    ConfigError,
    FieldNotIndexedError,
    JotDBError,
    QueryError,
    RecordNotFoundError,
    SchemaDefinitionError,
    ValidationError,
)
from jotdb.index import Index
from jotdb.schema import Schema, ValidationResult, validate_record, validate_schema
from jotdb.storage import FileAdapter, MemoryAdapter, StorageAdapter

__version__ = "0.1.0"

__all__ = [
    # Main classes
    "JotDB",
    "Collection",
    "Index",
    "Schema",
    "create_db",
    "generate_id",
    # Storage
    "StorageAdapter",
    "MemoryAdapter",
    "FileAdapter",
    # Types
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
    "Document",
    # Validation
    "ValidationResult",
    "validate_record",
    "validate_schema",
    # Exceptions
    "JotDBError",
    "SchemaDefinitionError",
    "ValidationError",
    "RecordNotFoundError",
    "QueryError",
    "FieldNotIndexedError",
    "CollectionNotFoundError",
    "ConfigError",
]
