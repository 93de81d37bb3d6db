"""Tests for the sorted field index."""

import pytest

from jotdb.core.types import FieldDefinition, FieldType, IndexEntry
from jotdb.exceptions import QueryError
from jotdb.index import Index


@pytest.fixture
def ages() -> Index:
    index = Index("age", FieldType.NUMBER)
    for record_id, age in [("a", 30), ("b", 25), ("c", 40), ("d", 30), ("e", 18)]:
        index.add(record_id, age)
    return index


@pytest.fixture
def names() -> Index:
    index = Index("name", FieldType.STRING, ignore_case=True)
    for record_id, name in [("1", "Josef"), ("2", "Josefina"), ("3", "Karel"), ("4", "Marie")]:
        index.add(record_id, name)
    return index


def _values(index: Index) -> list:
    return [value for value, _ in index]


class TestIndexMutation:
    """Tests for add, remove, clear and rebuild."""

    def test_add_keeps_values_sorted(self, ages):
        """Entries stay in ascending order."""
        assert _values(ages) == [18, 25, 30, 30, 40]
        assert len(ages) == ages.size == 5

    def test_add_folds_case(self, names):
        """Case-insensitive indexes store lower-cased values."""
        assert _values(names) == ["josef", "josefina", "karel", "marie"]

    def test_remove_exact_pair(self, ages):
        """Only the matching (id, value) pair goes."""
        ages.remove("d", 30)
        assert list(ages) == [(18, "e"), (25, "b"), (30, "a"), (40, "c")]

    def test_remove_matches_folded_value(self, names):
        """Removal normalizes the value the same way as add."""
        names.remove("3", "KAREL")
        assert "3" not in [record_id for _, record_id in names]

    def test_remove_absent_pair_is_noop(self, ages):
        """Unknown pairs leave the index unchanged."""
        ages.remove("a", 99)
        ages.remove("zz", 30)
        assert len(ages) == 5

    def test_clear(self, ages):
        """Clear empties the index."""
        ages.clear()
        assert len(ages) == 0
        assert ages.find(">0") == []

    def test_rebuild_sorts_stably(self):
        """Rebuild sorts by value and keeps input order for ties."""
        index = Index("age", FieldType.NUMBER)
        index.rebuild([("x", 5), ("y", 1), ("z", 5)])
        assert list(index) == [(1, "y"), (5, "x"), (5, "z")]

    def test_for_field_uses_definition(self):
        """for_field copies type and case folding from the definition."""
        definition = FieldDefinition(
            type="string", index=True, index_setting={"ignore_case": True}
        )
        index = Index.for_field("name", definition)
        assert index.field_type == FieldType.STRING
        assert index.ignore_case is True


class TestNumberSearch:
    """Tests for numeric exact and range lookups."""

    def test_exact_returns_all_ties(self, ages):
        """Exact returns every record with the value."""
        assert sorted(ages.find("30")) == ["a", "d"]

    def test_exact_miss(self, ages):
        """Exact with no match is empty."""
        assert ages.find("31") == []

    def test_greater_than_excludes_ties(self, ages):
        """> skips the boundary value."""
        assert ages.find(">30") == ["c"]

    def test_greater_or_equal_includes_ties(self, ages):
        """>= keeps the boundary value."""
        assert sorted(ages.find(">=30")) == ["a", "c", "d"]

    def test_less_than_excludes_ties(self, ages):
        """< stops before the boundary value."""
        assert ages.find("<30") == ["e", "b"]

    def test_less_or_equal_includes_ties(self, ages):
        """<= appends the boundary run."""
        assert sorted(ages.find("<=30")) == ["a", "b", "d", "e"]

    def test_bounds_outside_range(self, ages):
        """Bounds beyond either end behave sensibly."""
        assert ages.find(">100") == []
        assert len(ages.find(">=0")) == 5
        assert ages.find("<0") == []

    def test_float_bound_against_ints(self, ages):
        """Ints and floats compare numerically."""
        assert sorted(ages.find(">29.5")) == ["a", "c", "d"]
        assert ages.find("25.0") == ["b"]

    def test_invalid_pattern_raises(self, ages):
        """Bad numeric literals are query errors."""
        with pytest.raises(QueryError):
            ages.find(">old")


class TestStringSearch:
    """Tests for string wildcard lookups."""

    def test_prefix(self, names):
        """Prefix uses the folded term."""
        assert names.find("JOSEF%") == ["1", "2"]

    def test_prefix_no_match(self, names):
        """A prefix past every value is empty."""
        assert names.find("zz%") == []

    def test_suffix(self, names):
        """Suffix scans the whole index."""
        assert names.find("%ina") == ["2"]

    def test_contains(self, names):
        """Contains scans the whole index."""
        assert sorted(names.find("%ar%")) == ["3", "4"]

    def test_exact_case_insensitive(self, names):
        """Exact lookups fold the query too."""
        assert names.find("marie") == ["4"]
        assert names.find("MARIE") == ["4"]

    def test_exact_is_not_prefix(self, names):
        """Exact does not match longer values."""
        assert names.find("josef") == ["1"]

    def test_case_sensitive_index(self):
        """Without folding, case matters."""
        index = Index("code", FieldType.STRING)
        index.add("1", "Abc")
        index.add("2", "abc")
        assert index.find("abc") == ["2"]
        assert index.find("A%") == ["1"]


class TestBooleanSearch:
    """Tests for boolean lookups."""

    def test_true_and_false(self):
        """Booleans match exactly."""
        index = Index("active", FieldType.BOOLEAN)
        index.add("1", True)
        index.add("2", False)
        index.add("3", True)
        assert sorted(index.find("true")) == ["1", "3"]
        assert index.find("false") == ["2"]


class TestIndexSerialization:
    """Tests for entry export and import."""

    def test_snapshot_round_trip(self, names):
        """A snapshot restores an identical index."""
        restored = Index.from_snapshot(names.to_snapshot())
        assert list(restored) == list(names)
        assert restored.ignore_case is True
        assert restored.find("josef%") == names.find("josef%")

    @pytest.mark.parametrize(
        "pattern", ["30", "31", ">30", ">=30", "<30", "<=30", ">100", "<=18"]
    )
    def test_snapshot_round_trip_numeric_queries(self, ages, pattern):
        """A restored index answers every numeric query like the original."""
        restored = Index.from_snapshot(ages.to_snapshot())
        assert restored.find(pattern) == ages.find(pattern)

    @pytest.mark.parametrize(
        "pattern", ["josef", "MARIE", "nobody", "jo%", "zz%", "%ina", "%ar%", "%"]
    )
    def test_snapshot_round_trip_string_queries(self, names, pattern):
        """A restored index answers every string query like the original."""
        restored = Index.from_snapshot(names.to_snapshot())
        assert restored.find(pattern) == names.find(pattern)

    def test_snapshot_json(self, ages):
        """Snapshots survive a JSON trip."""
        snapshot = ages.to_snapshot()
        restored = Index.from_snapshot(type(snapshot).model_validate_json(snapshot.model_dump_json()))
        assert list(restored) == list(ages)

    def test_load_entries_resorts_unsorted_input(self):
        """Out-of-order entries are re-sorted."""
        index = Index("age", FieldType.NUMBER)
        index.load_entries(
            [IndexEntry(value=5, id="b"), IndexEntry(value=1, id="a"), IndexEntry(value=9, id="c")]
        )
        assert [record_id for _, record_id in index] == ["a", "b", "c"]
        assert index.find("<5") == ["a"]

    def test_load_entries_accepts_iterators(self):
        """Any iterable of entries works."""
        index = Index("age", FieldType.NUMBER)
        index.load_entries(IndexEntry(value=v, id=str(v)) for v in [1, 2, 3])
        assert len(index) == 3
