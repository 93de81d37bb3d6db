"""Synchronous JSON file storage.

Layout under the base directory, per collection ``<name>``::

    <name>.data.json   {"<id>": {<field>: <value>, ...}, ...}
    <name>.meta.json   {"schema": {...}, "indexes": {"<field>": [{"value", "id"}, ...]}}

Writes replace the whole file in place. There is no atomic swap: a failed
write leaves whatever the partial write produced.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from jotdb.core.types import CollectionMeta
from jotdb.storage.base import RecordMap, StorageAdapter

logger = logging.getLogger(__name__)

DATA_SUFFIX = ".data.json"
META_SUFFIX = ".meta.json"


class FileAdapter(StorageAdapter):
    """Mirrors each collection to a pair of JSON files."""

    durable = True

    def __init__(self, base_path: str | Path) -> None:
        """Initialize adapter, creating the base directory if needed.

        Args:
            base_path: Directory holding the collection files
        """
        self.base_path = Path(base_path)
        self.base_path.mkdir(parents=True, exist_ok=True)

    def __repr__(self) -> str:
        return f"FileAdapter({str(self.base_path)!r})"

    def data_path(self, collection: str) -> Path:
        return self.base_path / f"{collection}{DATA_SUFFIX}"

    def meta_path(self, collection: str) -> Path:
        return self.base_path / f"{collection}{META_SUFFIX}"

    def _read_json(self, path: Path) -> Any:
        if not path.exists():
            return None
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)

    def _write_json(self, path: Path, payload: Any) -> None:
        with path.open("w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, ensure_ascii=False)
        logger.debug(f"Wrote {path}")

    def read_data(self, collection: str) -> RecordMap | None:
        return self._read_json(self.data_path(collection))

    def write_data(self, collection: str, data: RecordMap) -> None:
        self._write_json(self.data_path(collection), data)

    def read_meta(self, collection: str) -> CollectionMeta | None:
        raw = self._read_json(self.meta_path(collection))
        if raw is None:
            return None
        return CollectionMeta.model_validate(raw)

    def write_meta(self, collection: str, meta: CollectionMeta) -> None:
        self._write_json(self.meta_path(collection), meta.to_json())
