"""Main JotDB engine: wires named collections to one storage backend."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any

from jotdb.core.collection import Collection
from jotdb.core.types import CollectionConfig, CollectionInfo, DatabaseConfig
from jotdb.exceptions import CollectionNotFoundError, ConfigError
from jotdb.schema.models import Schema
from jotdb.schema.validation import validate_schema
from jotdb.storage.base import StorageAdapter
from jotdb.storage.file import FileAdapter
from jotdb.storage.memory import MemoryAdapter

logger = logging.getLogger(__name__)

_NAME_RE = re.compile(r"^[A-Za-z0-9_-]+$")

CollectionsArg = DatabaseConfig | Mapping[str, CollectionConfig | Mapping[str, Any]]


def _schema_of(name: str, config: CollectionConfig | Mapping[str, Any]) -> Schema:
    if isinstance(config, CollectionConfig):
        return Schema(config.schema_)
    if not isinstance(config, Mapping) or "schema" not in config:
        raise ConfigError(
            f'Collection "{name}" needs a "schema" entry',
            {"collection_name": name},
        )
    return Schema.parse(config["schema"])


class JotDB:
    """Embedded document database.

    Example:
        db = JotDB(
            {"users": {"schema": {
                "name": {"type": "string", "index": True, "indexSetting": {"ignoreCase": True}},
                "age": {"type": "number", "index": True},
            }}},
            path="./data",
        )
        db.users.add({"name": "Josef", "age": 30})
        db.users.find({"name": "jo%", "age": ">26"})

    Omitting ``path`` keeps everything in memory.
    """

    def __init__(
        self,
        collections: CollectionsArg,
        path: str | Path | None = None,
        adapter: StorageAdapter | None = None,
    ) -> None:
        """Initialize database.

        Args:
            collections: Collection name to ``{"schema": {...}}``, or a DatabaseConfig
            path: Directory for file storage; None for in-memory storage
            adapter: Explicit storage backend, overriding ``path``

        Raises:
            SchemaDefinitionError: If any schema is invalid
            ConfigError: If a collection entry or name is malformed, or the name
                shadows a JotDB attribute such as ``close`` or ``describe``
        """
        if isinstance(collections, DatabaseConfig):
            path = path if path is not None else collections.path
            collections = collections.collections

        schemas: dict[str, Schema] = {}
        for name, config in collections.items():
            if not isinstance(name, str) or not _NAME_RE.match(name):
                raise ConfigError(
                    f'Invalid collection name "{name}". Use letters, digits, "_" and "-".',
                    {"collection_name": str(name)},
                )
            if hasattr(type(self), name):
                raise ConfigError(
                    f'Collection name "{name}" is reserved by JotDB; pick another name.',
                    {"collection_name": name},
                )
            schema = _schema_of(name, config)
            validate_schema(schema)
            schemas[name] = schema

        if adapter is None:
            adapter = FileAdapter(path) if path is not None else MemoryAdapter()
        self._adapter = adapter
        self._collections: dict[str, Collection] = {
            name: Collection(name, schema, adapter) for name, schema in schemas.items()
        }
        logger.info(f"JotDB initialized with {len(self._collections)} collection(s) on {adapter!r}")

    def __repr__(self) -> str:
        return f"JotDB(collections={self.collection_names}, adapter={self._adapter!r})"

    def __getattr__(self, name: str) -> Collection:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._collections[name]
        except KeyError:
            raise AttributeError(
                f"'{type(self).__name__}' has no attribute or collection '{name}'"
            ) from None

    def __getitem__(self, name: str) -> Collection:
        return self.collection(name)

    def __contains__(self, name: object) -> bool:
        return name in self._collections

    def __iter__(self) -> Iterator[Collection]:
        return iter(list(self._collections.values()))

    def __enter__(self) -> JotDB:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    @property
    def adapter(self) -> StorageAdapter:
        return self._adapter

    @property
    def collection_names(self) -> list[str]:
        return list(self._collections)

    def collection(self, name: str) -> Collection:
        """Get a collection by name.

        Raises:
            CollectionNotFoundError: If no collection has that name
        """
        try:
            return self._collections[name]
        except KeyError:
            raise CollectionNotFoundError(name, self.collection_names) from None

    def describe(self) -> list[CollectionInfo]:
        """Describe every collection."""
        return [collection.describe() for collection in self._collections.values()]

    def close(self) -> None:
        """Drop references to all collections. Safe to call twice."""
        self._collections = {}


def create_db(collections: CollectionsArg, path: str | Path | None = None) -> JotDB:
    """Create a database; file-backed when ``path`` is given, in-memory otherwise."""
    return JotDB(collections, path=path)
