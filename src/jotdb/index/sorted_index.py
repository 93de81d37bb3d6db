"""Sorted single-field index.

Entries are ``(value, id)`` pairs kept in ascending value order in two
parallel lists, so the standard :mod:`bisect` lower bound works directly on
the value list. Equal values form contiguous runs; a record holding a value
appears in that run exactly once.
"""

from __future__ import annotations

import bisect
import logging
from collections.abc import Iterable, Iterator
from itertools import pairwise

from jotdb.core.types import FieldDefinition, FieldType, IndexEntry, IndexSnapshot, IndexValue
from jotdb.query.parser import (
    BoolExact,
    Contains,
    Exact,
    Prefix,
    Query,
    Range,
    Suffix,
    parse_query,
)

logger = logging.getLogger(__name__)


class Index:
    """Sorted array + binary search index over a single field."""

    def __init__(self, field: str, field_type: FieldType, ignore_case: bool = False) -> None:
        """Initialize an empty index.

        Args:
            field: Indexed field name
            field_type: Declared type of the field
            ignore_case: Lower-case string values and query terms
        """
        self.field = field
        self.field_type = FieldType(field_type)
        self.ignore_case = ignore_case
        self._values: list[IndexValue] = []
        self._ids: list[str] = []

    @classmethod
    def for_field(cls, field: str, definition: FieldDefinition) -> Index:
        return cls(field, definition.type, definition.ignore_case)

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[tuple[IndexValue, str]]:
        return zip(self._values, self._ids, strict=True)

    def __repr__(self) -> str:
        return (
            f"Index(field={self.field!r}, type={self.field_type.value!r}, "
            f"ignore_case={self.ignore_case}, size={len(self)})"
        )

    @property
    def size(self) -> int:
        """Current entry count."""
        return len(self._values)

    def normalize(self, value: IndexValue) -> IndexValue:
        if self.ignore_case and isinstance(value, str):
            return value.lower()
        return value

    def _lower_bound(self, target: IndexValue) -> int:
        """Position of the first entry whose value is not less than ``target``."""
        return bisect.bisect_left(self._values, target)

    # === Mutation ===

    def add(self, record_id: str, value: IndexValue) -> None:
        normalized = self.normalize(value)
        pos = self._lower_bound(normalized)
        self._values.insert(pos, normalized)
        self._ids.insert(pos, record_id)

    def remove(self, record_id: str, value: IndexValue) -> None:
        """Remove one ``(id, value)`` entry.

        An absent pair is ignored.
        """
        normalized = self.normalize(value)
        pos = self._lower_bound(normalized)
        while pos < len(self._values) and self._values[pos] == normalized:
            if self._ids[pos] == record_id:
                del self._values[pos]
                del self._ids[pos]
                return
            pos += 1
        logger.debug(f"Index '{self.field}': no entry for id={record_id} value={normalized!r}")

    def clear(self) -> None:
        self._values = []
        self._ids = []

    def rebuild(self, items: Iterable[tuple[str, IndexValue]]) -> None:
        """Replace all entries with ``(id, value)`` pairs in one stable sort."""
        pairs = sorted(
            ((self.normalize(value), record_id) for record_id, value in items),
            key=lambda pair: pair[0],
        )
        self._values = [value for value, _ in pairs]
        self._ids = [record_id for _, record_id in pairs]

    # === Queries ===

    def find(self, pattern: str) -> list[str]:
        """Return identifiers matching a query pattern.

        Args:
            pattern: Query string (see :mod:`jotdb.query.parser`)

        Returns:
            Matching identifiers in index order

        Raises:
            QueryError: If the pattern is invalid for the field type
        """
        return self.search(parse_query(pattern, self.field_type, self.ignore_case))

    def search(self, query: Query) -> list[str]:
        """Evaluate an already parsed query."""
        if isinstance(query, Exact):
            return self._exact(query.value)
        if isinstance(query, BoolExact):
            return self._exact(query.value)
        if isinstance(query, Prefix):
            return self._prefix(query.term)
        if isinstance(query, Suffix):
            return [i for v, i in self if str(v).endswith(query.term)]
        if isinstance(query, Contains):
            return [i for v, i in self if query.term in str(v)]
        if isinstance(query, Range):
            return self._range(query.op, query.bound)
        raise TypeError(f"Unsupported query: {query!r}")

    def _tie_run(self, start: int, target: IndexValue) -> list[str]:
        end = start
        while end < len(self._values) and self._values[end] == target:
            end += 1
        return self._ids[start:end]

    def _exact(self, target: IndexValue) -> list[str]:
        return self._tie_run(self._lower_bound(target), target)

    def _prefix(self, prefix: str) -> list[str]:
        """O(log n + k): binary search to the prefix start, scan forward."""
        pos = self._lower_bound(prefix)
        results: list[str] = []
        while pos < len(self._values) and str(self._values[pos]).startswith(prefix):
            results.append(self._ids[pos])
            pos += 1
        return results

    def _range(self, op: str, bound: int | float) -> list[str]:
        pos = self._lower_bound(bound)
        if op == ">=":
            return self._ids[pos:]
        if op == ">":
            while pos < len(self._values) and self._values[pos] == bound:
                pos += 1
            return self._ids[pos:]
        if op == "<":
            return self._ids[:pos]
        # "<="
        return self._ids[:pos] + self._tie_run(pos, bound)

    # === Serialization ===

    def to_entries(self) -> list[IndexEntry]:
        return [IndexEntry(value=v, id=i) for v, i in self]

    def to_snapshot(self) -> IndexSnapshot:
        """Export field identity and entries verbatim."""
        return IndexSnapshot(
            field=self.field,
            field_type=self.field_type,
            ignore_case=self.ignore_case,
            entries=self.to_entries(),
        )

    def load_entries(self, entries: Iterable[IndexEntry]) -> None:
        """Replace all entries with an exported sequence.

        Entries are taken in the given order; a sequence that is not sorted
        (for example a hand-edited meta file) is re-sorted.
        """
        entries = list(entries)
        self._values = [entry.value for entry in entries]
        self._ids = [entry.id for entry in entries]
        if any(a > b for a, b in pairwise(self._values)):
            logger.warning(f"Index '{self.field}': persisted entries out of order, re-sorting")
            self.rebuild(list(zip(self._ids, self._values, strict=True)))

    @classmethod
    def from_snapshot(cls, snapshot: IndexSnapshot) -> Index:
        index = cls(snapshot.field, snapshot.field_type, snapshot.ignore_case)
        index.load_entries(snapshot.entries)
        return index
