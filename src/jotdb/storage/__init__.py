"""Storage backends and persistence disciplines."""

from jotdb.storage.base import StorageAdapter
from jotdb.storage.file import FileAdapter
from jotdb.storage.memory import MemoryAdapter
from jotdb.storage.stores import CachedStore, CollectionStore, ReadThroughStore, open_store

__all__ = [
    "StorageAdapter",
    "MemoryAdapter",
    "FileAdapter",
    "CollectionStore",
    "CachedStore",
    "ReadThroughStore",
    "open_store",
]
