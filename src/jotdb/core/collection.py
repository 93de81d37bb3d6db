"""Collection: one schema-validated dataset with its field indexes."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from jotdb.core.ids import generate_id
from jotdb.core.types import ID_FIELD, CollectionInfo, Document, FieldInfo
from jotdb.exceptions import FieldNotIndexedError, RecordNotFoundError
from jotdb.schema.models import Schema
from jotdb.schema.validation import apply_defaults, ensure_valid_record, validate_schema
from jotdb.storage.base import StorageAdapter
from jotdb.storage.stores import CollectionState, CollectionStore, open_store

logger = logging.getLogger(__name__)


def _copy_record(record: Mapping[str, Any]) -> dict[str, Any]:
    """Copy a flat record, including the dicts of object fields."""
    return {key: dict(value) if isinstance(value, Mapping) else value for key, value in record.items()}


class Collection:
    """A named set of records sharing one schema.

    Every mutation validates first, then changes data and indexes together,
    then persists through the collection's store. Queries only accept
    indexed fields.
    """

    def __init__(
        self,
        name: str,
        schema: Schema | Mapping[str, Any],
        storage: StorageAdapter,
    ) -> None:
        """Initialize collection.

        Args:
            name: Collection name (also the artifact name in storage)
            schema: Field declarations
            storage: Backend; durable backends get read-through persistence

        Raises:
            SchemaDefinitionError: If the schema is invalid
        """
        self._name = name
        self._schema = Schema.parse(schema)
        validate_schema(self._schema)
        self._store: CollectionStore = open_store(name, self._schema, storage)

    def __repr__(self) -> str:
        return f"Collection(name={self._name!r}, mode={self._store.mode!r})"

    def __len__(self) -> int:
        return self.count

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._store.load(with_indexes=False).data

    @property
    def name(self) -> str:
        """Get collection name."""
        return self._name

    @property
    def schema(self) -> Schema:
        return self._schema

    @property
    def mode(self) -> str:
        """Persistence discipline: ``cached`` or ``read-through``."""
        return self._store.mode

    @property
    def indexed_fields(self) -> list[str]:
        return self._schema.indexed_fields

    @property
    def count(self) -> int:
        """Current record count."""
        return len(self._store.load(with_indexes=False).data)

    # === Helpers ===

    def _to_document(self, record_id: str, record: Mapping[str, Any]) -> Document:
        return {ID_FIELD: record_id, **_copy_record(record)}

    def _prepare(self, record: Mapping[str, Any]) -> dict[str, Any]:
        """Apply defaults and validate as a complete record."""
        prepared = apply_defaults(record, self._schema)
        ensure_valid_record(prepared, self._schema, partial=False)
        return _copy_record(prepared)

    def _insert(self, state: CollectionState, record: dict[str, Any]) -> str:
        record_id = generate_id()
        state.data[record_id] = record
        for field, index in state.indexes.items():
            value = record.get(field)
            if value is not None:
                index.add(record_id, value)
        return record_id

    def _match_ids(self, state: CollectionState, query: Mapping[str, str]) -> list[str]:
        """Intersect per-field index results, in the first field's index order."""
        for field in query:
            if field not in state.indexes:
                raise FieldNotIndexedError(field, self._name, self.indexed_fields)

        result: list[str] | None = None
        for field, pattern in query.items():
            ids = state.indexes[field].find(pattern)
            if result is None:
                result = list(dict.fromkeys(ids))
            else:
                keep = set(ids)
                result = [record_id for record_id in result if record_id in keep]
            if not result:
                return []
        return result or []

    # === Writes ===

    def add(self, record: Mapping[str, Any]) -> Document:
        """Insert a record.

        Args:
            record: Field values; omitted fields fall back to their defaults

        Returns:
            The stored document, including its new ``_id``

        Raises:
            ValidationError: If the record does not match the schema
        """
        prepared = self._prepare(record)
        state = self._store.load()
        record_id = self._insert(state, prepared)
        self._store.commit(state)
        return self._to_document(record_id, prepared)

    def add_many(self, records: Iterable[Mapping[str, Any]]) -> list[Document]:
        """Insert several records with a single persistence write.

        Every record is validated before any is stored, so one invalid
        record leaves the collection unchanged.
        """
        prepared = [self._prepare(record) for record in records]
        state = self._store.load()
        record_ids = [self._insert(state, record) for record in prepared]
        self._store.commit(state)
        return [
            self._to_document(record_id, record)
            for record_id, record in zip(record_ids, prepared, strict=True)
        ]

    def update(self, record_id: str, partial: Mapping[str, Any]) -> Document:
        """Overwrite some fields of a record.

        Args:
            record_id: Record to update
            partial: Fields to overwrite (shallow)

        Returns:
            The updated document

        Raises:
            RecordNotFoundError: If the record does not exist
            ValidationError: If a field is unknown or has the wrong type
        """
        state = self._store.load()
        existing = state.data.get(record_id)
        if existing is None:
            raise RecordNotFoundError(record_id, self._name)
        ensure_valid_record(partial, self._schema, partial=True)

        changes = _copy_record(partial)
        for field, index in state.indexes.items():
            if field not in changes:
                continue
            old_value = existing.get(field)
            if old_value is not None:
                index.remove(record_id, old_value)
            index.add(record_id, changes[field])

        existing.update(changes)
        self._store.commit(state)
        return self._to_document(record_id, existing)

    def remove(self, record_id: str) -> None:
        """Delete a record.

        Raises:
            RecordNotFoundError: If the record does not exist
        """
        state = self._store.load()
        existing = state.data.get(record_id)
        if existing is None:
            raise RecordNotFoundError(record_id, self._name)

        for field, index in state.indexes.items():
            value = existing.get(field)
            if value is not None:
                index.remove(record_id, value)

        del state.data[record_id]
        self._store.commit(state)

    def clear(self) -> None:
        """Delete every record and empty every index."""
        state = self._store.load()
        state.data.clear()
        for index in state.indexes.values():
            index.clear()
        self._store.commit(state)
        logger.debug(f"Collection '{self._name}': cleared")

    # === Reads ===

    def get(self, record_id: str) -> Document | None:
        """Find a record by ID.

        Returns:
            The document, or None if not found
        """
        record = self._store.load(with_indexes=False).data.get(record_id)
        if record is None:
            return None
        return self._to_document(record_id, record)

    def all(self) -> list[Document]:
        """Return every document in storage order."""
        data = self._store.load(with_indexes=False).data
        return [self._to_document(record_id, record) for record_id, record in data.items()]

    def find(self, query: Mapping[str, str] | None = None) -> list[Document]:
        """Find documents matching every field pattern.

        Args:
            query: Field name to pattern (see :mod:`jotdb.query.parser`);
                empty or None returns all documents

        Returns:
            Matching documents, ordered by the first queried field's index

        Raises:
            FieldNotIndexedError: If a queried field has no index
            QueryError: If a pattern is invalid for its field type
        """
        if not query:
            return self.all()
        state = self._store.load()
        return [
            self._to_document(record_id, state.data[record_id])
            for record_id in self._match_ids(state, query)
            if record_id in state.data
        ]

    def find_one(self, query: Mapping[str, str] | None = None) -> Document | None:
        """Return the first document matching ``query``, or None."""
        results = self.find(query)
        return results[0] if results else None

    def count_where(self, query: Mapping[str, str] | None = None) -> int:
        """Count matching records without materializing documents."""
        if not query:
            return self.count
        return len(self._match_ids(self._store.load(), query))

    def describe(self) -> CollectionInfo:
        """Describe the collection's fields, mode and size."""
        return CollectionInfo(
            name=self._name,
            storage=self.mode,
            record_count=self.count,
            fields=[
                FieldInfo(
                    name=name,
                    type=definition.type.value,
                    indexed=definition.index,
                    ignore_case=definition.ignore_case,
                    default=definition.default,
                )
                for name, definition in self._schema.items()
            ],
        )
