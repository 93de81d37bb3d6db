"""Transient in-process storage."""

from jotdb.core.types import CollectionMeta
from jotdb.storage.base import RecordMap, StorageAdapter


class MemoryAdapter(StorageAdapter):
    """Keeps artifacts in dicts for the lifetime of the process.

    The data mapping handed to :meth:`write_data` is stored by reference,
    so a cached collection and this adapter share one structure.
    """

    durable = False

    def __init__(self) -> None:
        self._data: dict[str, RecordMap] = {}
        self._meta: dict[str, CollectionMeta] = {}

    def read_data(self, collection: str) -> RecordMap | None:
        return self._data.get(collection)

    def write_data(self, collection: str, data: RecordMap) -> None:
        self._data[collection] = data

    def read_meta(self, collection: str) -> CollectionMeta | None:
        return self._meta.get(collection)

    def write_meta(self, collection: str, meta: CollectionMeta) -> None:
        self._meta[collection] = meta
