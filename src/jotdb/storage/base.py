"""Storage adapter interface."""

from abc import ABC, abstractmethod
from typing import Any, ClassVar

from jotdb.core.types import CollectionMeta

RecordMap = dict[str, dict[str, Any]]
"""Identifier to flat record mapping (the data artifact)."""


class StorageAdapter(ABC):
    """Interface for collection storage backends.

    A backend keeps two artifacts per collection name: the data artifact
    (identifier to record) and the meta artifact (schema and, for durable
    backends, serialized indexes). Collections pick their persistence
    discipline from :attr:`durable`.
    """

    durable: ClassVar[bool] = False
    """True if artifacts outlive the process and are re-read on every call."""

    @abstractmethod
    def read_data(self, collection: str) -> RecordMap | None:
        """Read the data artifact.

        Args:
            collection: Collection name.

        Returns:
            Record mapping, or None if the collection has no data artifact.
        """
        ...

    @abstractmethod
    def write_data(self, collection: str, data: RecordMap) -> None:
        """Replace the data artifact."""
        ...

    @abstractmethod
    def read_meta(self, collection: str) -> CollectionMeta | None:
        """Read the meta artifact, or None if absent."""
        ...

    @abstractmethod
    def write_meta(self, collection: str, meta: CollectionMeta) -> None:
        """Replace the meta artifact."""
        ...
