"""Tests for core types."""

import json

import pytest

from jotdb.core.types import (
    CollectionMeta,
    DatabaseConfig,
    FieldDefinition,
    FieldType,
    IndexEntry,
)
from jotdb.exceptions import ConfigError


class TestFieldType:
    """Tests for FieldType enum."""

    def test_all_types_exist(self):
        """All documented field types should exist."""
        assert FieldType.values() == ["string", "number", "boolean", "object"]

    def test_from_string(self):
        """Can create FieldType from string."""
        assert FieldType("number") == FieldType.NUMBER
        assert FieldType.STRING == "string"


class TestFieldDefinition:
    """Tests for FieldDefinition model."""

    def test_minimal_definition(self):
        """Only type is required."""
        definition = FieldDefinition(type="string")
        assert definition.type == FieldType.STRING
        assert definition.index is False
        assert definition.index_setting is None
        assert definition.ignore_case is False
        assert definition.has_default is False

    def test_camel_case_input(self):
        """Persisted camelCase keys are accepted."""
        definition = FieldDefinition.model_validate(
            {"type": "string", "index": True, "indexSetting": {"ignoreCase": True}}
        )
        assert definition.ignore_case is True

    def test_snake_case_input(self):
        """Python attribute names are accepted too."""
        definition = FieldDefinition(
            type="string", index=True, index_setting={"ignore_case": True}
        )
        assert definition.ignore_case is True

    def test_to_json_uses_persisted_keys(self):
        """Serialized form keeps camelCase and drops unset options."""
        definition = FieldDefinition.model_validate(
            {"type": "string", "index": True, "indexSetting": {"ignoreCase": True}}
        )
        assert definition.to_json() == {
            "type": "string",
            "index": True,
            "indexSetting": {"ignoreCase": True},
        }
        assert FieldDefinition(type="number").to_json() == {"type": "number", "index": False}

    def test_frozen(self):
        """Definitions cannot be changed after construction."""
        definition = FieldDefinition(type="string")
        with pytest.raises(Exception):
            definition.index = True


class TestCollectionMeta:
    """Tests for the meta artifact model."""

    def test_schema_only(self):
        """Meta without indexes serializes without the indexes key."""
        meta = CollectionMeta(schema={"name": FieldDefinition(type="string")})
        assert meta.to_json() == {"schema": {"name": {"type": "string", "index": False}}}

    def test_with_indexes(self):
        """Indexes serialize as value/id pairs."""
        meta = CollectionMeta(
            schema={"age": FieldDefinition(type="number", index=True)},
            indexes={"age": [IndexEntry(value=25, id="b"), IndexEntry(value=30, id="a")]},
        )
        payload = meta.to_json()
        assert payload["indexes"] == {"age": [{"value": 25, "id": "b"}, {"value": 30, "id": "a"}]}

    def test_index_values_keep_their_type(self):
        """Booleans and numbers are not coerced into each other."""
        meta = CollectionMeta.model_validate(
            {
                "schema": {"active": {"type": "boolean", "index": True}},
                "indexes": {"active": [{"value": True, "id": "a"}, {"value": 1.5, "id": "b"}]},
            }
        )
        values = [entry.value for entry in meta.indexes["active"]]
        assert values[0] is True
        assert values[1] == 1.5


class TestDatabaseConfig:
    """Tests for configuration loading."""

    def test_from_file(self, tmp_path):
        """Loads collections and path from JSON."""
        config_file = tmp_path / "jotdb.json"
        config_file.write_text(
            json.dumps(
                {
                    "path": "data",
                    "collections": {"users": {"schema": {"name": {"type": "string"}}}},
                }
            )
        )
        config = DatabaseConfig.from_file(config_file)
        assert config.path == "data"
        assert list(config.collections) == ["users"]
        assert config.collections["users"].schema_["name"].type == FieldType.STRING

    def test_missing_file(self, tmp_path):
        """Missing file raises ConfigError."""
        with pytest.raises(ConfigError, match="not found"):
            DatabaseConfig.from_file(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        """Malformed JSON raises ConfigError."""
        config_file = tmp_path / "jotdb.json"
        config_file.write_text("{not json")
        with pytest.raises(ConfigError, match="not valid JSON"):
            DatabaseConfig.from_file(config_file)

    def test_invalid_field_type(self, tmp_path):
        """Unknown field types raise ConfigError."""
        config_file = tmp_path / "jotdb.json"
        config_file.write_text(
            json.dumps({"collections": {"users": {"schema": {"name": {"type": "date"}}}}})
        )
        with pytest.raises(ConfigError, match="invalid"):
            DatabaseConfig.from_file(config_file)
