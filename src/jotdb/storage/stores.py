"""Persistence disciplines for a collection.

A collection never checks which backend it runs on. It asks its store for
the current :class:`CollectionState`, mutates it, and hands it back through
:meth:`CollectionStore.commit`. The two stores differ only in where that
state lives between calls:

- :class:`CachedStore` keeps data and indexes in process. Used with
  non-durable adapters, where the adapter holds the same data mapping
  as the most recently committed store.
- :class:`ReadThroughStore` keeps nothing. Every call re-reads the data and
  meta artifacts; every commit rewrites both, meta carrying the fully
  serialized indexes.
"""

from __future__ import annotations

import copy
import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from jotdb.core.types import CollectionMeta, IndexEntry
from jotdb.index.sorted_index import Index
from jotdb.schema.models import Schema
from jotdb.storage.base import RecordMap, StorageAdapter

logger = logging.getLogger(__name__)


@dataclass
class CollectionState:
    """Records of one collection and the indexes over them."""

    data: RecordMap = field(default_factory=dict)
    indexes: dict[str, Index] = field(default_factory=dict)


def empty_indexes(schema: Schema) -> dict[str, Index]:
    return {name: Index.for_field(name, schema[name]) for name in schema.indexed_fields}


def build_index(name: str, schema: Schema, data: RecordMap) -> Index:
    """Build one field's index from scratch out of the records."""
    index = Index.for_field(name, schema[name])
    index.rebuild(
        (record_id, record[name])
        for record_id, record in data.items()
        if record.get(name) is not None
    )
    return index


def build_indexes(schema: Schema, data: RecordMap) -> dict[str, Index]:
    return {name: build_index(name, schema, data) for name in schema.indexed_fields}


class CollectionStore(ABC):
    """Where a collection's state lives between operations."""

    mode: str = ""

    def __init__(self, name: str, schema: Schema, adapter: StorageAdapter) -> None:
        self.name = name
        self.schema = schema
        self.adapter = adapter

    def _recorded_schema(self, meta: CollectionMeta | None) -> Schema | None:
        if meta is None:
            return None
        return Schema(meta.schema_)

    def _schema_matches(self, meta: CollectionMeta | None) -> bool:
        recorded = self._recorded_schema(meta)
        return recorded is not None and recorded.same_layout(self.schema)

    @abstractmethod
    def load(self, with_indexes: bool = True) -> CollectionState:
        """Return the current state.

        Args:
            with_indexes: False when the caller only reads records; stores
                may then skip loading indexes.
        """
        ...

    @abstractmethod
    def commit(self, state: CollectionState) -> None:
        """Persist ``state`` after a mutation."""
        ...

    @abstractmethod
    def reset(self) -> None:
        """Replace both artifacts with an empty collection."""
        ...


class CachedStore(CollectionStore):
    """Long-lived in-process state; commits hand the same mapping to the adapter.

    Records found in the adapter at construction are copied, never shared,
    so the indexes of this store only ever describe its own mapping.
    """

    mode = "cached"

    def __init__(self, name: str, schema: Schema, adapter: StorageAdapter) -> None:
        super().__init__(name, schema, adapter)
        data = adapter.read_data(name)
        if data is not None and self._schema_matches(adapter.read_meta(name)):
            logger.info(f"Collection '{name}': adopting {len(data)} in-memory records")
            owned = copy.deepcopy(data)
            self._state = CollectionState(data=owned, indexes=build_indexes(schema, owned))
            self.commit(self._state)
        else:
            self.reset()

    def load(self, with_indexes: bool = True) -> CollectionState:
        return self._state

    def commit(self, state: CollectionState) -> None:
        self._state = state
        self.adapter.write_data(self.name, state.data)
        self.adapter.write_meta(self.name, CollectionMeta(schema=self.schema.definitions()))

    def reset(self) -> None:
        self.commit(CollectionState(data={}, indexes=empty_indexes(self.schema)))


class ReadThroughStore(CollectionStore):
    """No state between calls: read both artifacts on load, write both on commit."""

    mode = "read-through"

    def __init__(self, name: str, schema: Schema, adapter: StorageAdapter) -> None:
        super().__init__(name, schema, adapter)
        meta = adapter.read_meta(name)
        if meta is None:
            logger.info(f"Collection '{name}': no stored state, initializing empty artifacts")
            self.reset()
        elif not self._schema_matches(meta):
            logger.warning(
                f"Collection '{name}': stored schema differs from the declared schema, "
                f"discarding stored data"
            )
            self.reset()
        elif adapter.read_data(name) is None:
            logger.warning(f"Collection '{name}': data artifact missing, resetting")
            self.reset()

    def _load_index(self, name: str, data: RecordMap, stored: Mapping[str, Any]) -> Index:
        entries: list[IndexEntry] | None = stored.get(name)
        if entries is None:
            logger.info(f"Collection '{self.name}': rebuilding index '{name}' from data")
            return build_index(name, self.schema, data)
        index = Index.for_field(name, self.schema[name])
        index.load_entries(entries)
        return index

    def load(self, with_indexes: bool = True) -> CollectionState:
        data = self.adapter.read_data(self.name) or {}
        if not with_indexes:
            return CollectionState(data=data)
        meta = self.adapter.read_meta(self.name)
        stored = (meta.indexes if meta is not None else None) or {}
        indexes = {
            name: self._load_index(name, data, stored) for name in self.schema.indexed_fields
        }
        return CollectionState(data=data, indexes=indexes)

    def _meta_for(self, state: CollectionState) -> CollectionMeta:
        return CollectionMeta(
            schema=self.schema.definitions(),
            indexes={name: index.to_entries() for name, index in state.indexes.items()},
        )

    def commit(self, state: CollectionState) -> None:
        self.adapter.write_data(self.name, state.data)
        self.adapter.write_meta(self.name, self._meta_for(state))
        logger.debug(
            f"Collection '{self.name}': persisted {len(state.data)} records, "
            f"{len(state.indexes)} indexes"
        )

    def reset(self) -> None:
        self.commit(CollectionState(data={}, indexes=empty_indexes(self.schema)))


def open_store(name: str, schema: Schema, adapter: StorageAdapter) -> CollectionStore:
    """Pick the persistence discipline matching the adapter."""
    if adapter.durable:
        return ReadThroughStore(name, schema, adapter)
    return CachedStore(name, schema, adapter)
