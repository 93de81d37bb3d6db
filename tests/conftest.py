"""Shared test fixtures for JotDB."""

from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest

from jotdb import JotDB


@pytest.fixture
def user_schema() -> dict[str, Any]:
    """Users schema: case-insensitive name index, numeric age index, unindexed sex."""
    return {
        "name": {"type": "string", "index": True, "indexSetting": {"ignoreCase": True}},
        "age": {"type": "number", "index": True},
        "sex": {"type": "string"},
    }


@pytest.fixture
def memory_db(user_schema: dict[str, Any]) -> Generator[JotDB, None, None]:
    """In-memory database with a single ``users`` collection."""
    database = JotDB({"users": {"schema": user_schema}})
    yield database
    database.close()


@pytest.fixture
def file_db_path(tmp_path: Path) -> Path:
    """Directory for file-backed databases."""
    return tmp_path / "data"


@pytest.fixture
def file_db(user_schema: dict[str, Any], file_db_path: Path) -> Generator[JotDB, None, None]:
    """File-backed database with a single ``users`` collection."""
    database = JotDB({"users": {"schema": user_schema}}, path=file_db_path)
    yield database
    database.close()
