"""Tests for the JotDB engine and create_db."""

import pytest

from jotdb import Collection, DatabaseConfig, FileAdapter, JotDB, MemoryAdapter, create_db
from jotdb.exceptions import CollectionNotFoundError, ConfigError, SchemaDefinitionError


class TestJotDBSetup:
    """Tests for database construction."""

    def test_memory_by_default(self, memory_db):
        """No path means in-memory storage."""
        assert isinstance(memory_db.adapter, MemoryAdapter)
        assert memory_db.users.mode == "cached"

    def test_file_with_path(self, file_db, file_db_path):
        """A path means file storage."""
        assert isinstance(file_db.adapter, FileAdapter)
        assert file_db.users.mode == "read-through"
        assert (file_db_path / "users.meta.json").exists()

    def test_accepts_database_config(self, tmp_path, user_schema):
        """DatabaseConfig supplies path and collections."""
        config = DatabaseConfig(
            path=str(tmp_path / "cfg"), collections={"users": {"schema": user_schema}}
        )
        db = JotDB(config)
        assert isinstance(db.adapter, FileAdapter)
        assert db.collection_names == ["users"]

    def test_explicit_adapter_wins(self, tmp_path, user_schema):
        """An explicit adapter overrides path."""
        adapter = MemoryAdapter()
        db = JotDB({"users": {"schema": user_schema}}, path=tmp_path, adapter=adapter)
        assert db.adapter is adapter

    def test_invalid_name(self, user_schema):
        """Names must be file-safe."""
        with pytest.raises(ConfigError, match="Invalid collection name"):
            JotDB({"../users": {"schema": user_schema}})

    @pytest.mark.parametrize(
        "name", ["close", "describe", "adapter", "collection", "collection_names"]
    )
    def test_names_shadowing_attributes_are_rejected(self, name, user_schema):
        """Collection names cannot hide JotDB attributes."""
        with pytest.raises(ConfigError, match="reserved"):
            JotDB({name: {"schema": user_schema}})

    def test_missing_schema_key(self):
        """Each collection needs a schema entry."""
        with pytest.raises(ConfigError, match="schema"):
            JotDB({"users": {"fields": {}}})

    def test_invalid_schema_creates_nothing(self, tmp_path, user_schema):
        """Schemas are all validated before storage is touched."""
        with pytest.raises(SchemaDefinitionError):
            JotDB(
                {
                    "users": {"schema": user_schema},
                    "bad": {"schema": {"x": {"type": "object", "index": True}}},
                },
                path=tmp_path / "data",
            )
        assert not (tmp_path / "data").exists()


class TestJotDBAccess:
    """Tests for collection lookup."""

    def test_attribute_access(self, memory_db):
        """Collections are attributes."""
        assert isinstance(memory_db.users, Collection)

    def test_item_access(self, memory_db):
        """Collections are items."""
        assert memory_db["users"] is memory_db.users

    def test_unknown_attribute(self, memory_db):
        """Unknown attributes raise AttributeError."""
        with pytest.raises(AttributeError):
            memory_db.orders

    def test_unknown_item(self, memory_db):
        """Unknown names raise CollectionNotFoundError."""
        with pytest.raises(CollectionNotFoundError) as exc_info:
            memory_db["orders"]
        assert exc_info.value.context["available_collections"] == ["users"]

    def test_contains_and_iter(self, memory_db):
        """Membership and iteration work on names and collections."""
        assert "users" in memory_db
        assert [c.name for c in memory_db] == ["users"]

    def test_describe(self, memory_db):
        """describe covers every collection."""
        memory_db.users.add({"name": "Ann", "age": 20, "sex": "f"})
        [info] = memory_db.describe()
        assert info.record_count == 1

    def test_close_and_context_manager(self, user_schema):
        """Closing drops the collections."""
        with create_db({"users": {"schema": user_schema}}) as db:
            assert db.collection_names == ["users"]
        assert db.collection_names == []
        db.close()


class TestCreateDb:
    """Tests for the factory function."""

    def test_memory(self, user_schema):
        """Without path, create_db is in-memory."""
        db = create_db({"users": {"schema": user_schema}})
        assert isinstance(db.adapter, MemoryAdapter)

    def test_file(self, tmp_path, user_schema):
        """With path, create_db is file-backed."""
        db = create_db({"users": {"schema": user_schema}}, path=tmp_path)
        assert isinstance(db.adapter, FileAdapter)
