"""Immutable schema value shared by a collection, its store and its validators."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from jotdb.core.types import FieldDefinition, FieldType
from jotdb.exceptions import SchemaDefinitionError


class Schema(Mapping[str, FieldDefinition]):
    """Ordered, read-only mapping of field name to :class:`FieldDefinition`.

    A schema never changes after construction; collections hold it by
    reference and compare it against the schema recorded in persisted meta.
    """

    __slots__ = ("_fields",)

    def __init__(self, fields: Mapping[str, FieldDefinition | Mapping[str, Any]]) -> None:
        parsed: dict[str, FieldDefinition] = {}
        for name, definition in fields.items():
            if isinstance(definition, FieldDefinition):
                parsed[name] = definition
            else:
                try:
                    parsed[name] = FieldDefinition.model_validate(definition)
                except PydanticValidationError as e:
                    reasons = "; ".join(err["msg"] for err in e.errors())
                    raise SchemaDefinitionError(str(name), f"invalid definition ({reasons})") from e
        self._fields = MappingProxyType(parsed)

    @classmethod
    def parse(cls, raw: Schema | Mapping[str, Any]) -> Schema:
        """Return ``raw`` unchanged if it already is a Schema, else build one."""
        if isinstance(raw, Schema):
            return raw
        return cls(raw)

    def __getitem__(self, name: str) -> FieldDefinition:
        return self._fields[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        fields = ", ".join(f"{name}:{field.type.value}" for name, field in self._fields.items())
        return f"Schema({fields})"

    @property
    def indexed_fields(self) -> list[str]:
        """Names of fields that carry an index, in declaration order."""
        return [name for name, field in self._fields.items() if field.index]

    def signature(self) -> dict[str, tuple[FieldType, bool, bool]]:
        """Layout that decides whether persisted state is still usable.

        Covers the field name set, type, indexed flag and case folding;
        defaults are not part of it.
        """
        return {
            name: (field.type, field.index, field.ignore_case) for name, field in self._fields.items()
        }

    def same_layout(self, other: Schema) -> bool:
        return self.signature() == other.signature()

    def to_json(self) -> dict[str, dict[str, Any]]:
        return {name: field.to_json() for name, field in self._fields.items()}

    def definitions(self) -> dict[str, FieldDefinition]:
        """Plain dict copy, for embedding in pydantic models."""
        return dict(self._fields)
