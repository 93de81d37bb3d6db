"""Input parsing utilities for CLI commands."""

import json
from pathlib import Path
from typing import Any


def parse_where(term: str) -> tuple[str, str]:
    """Parse a ``field=pattern`` query term.

    Only the first ``=`` separates field from pattern, so patterns such as
    ``age=>=18`` work.

    Examples:
        "name=jo%" → ("name", "jo%")
        "age=>=18" → ("age", ">=18")

    Raises:
        ValueError: If the term has no "=" or an empty field name
    """
    field, sep, pattern = term.partition("=")
    if not sep or not field.strip():
        raise ValueError(f"Invalid query term: '{term}'. Expected format: field=pattern")
    return field.strip(), pattern


def parse_where_terms(terms: list[str] | None) -> dict[str, str]:
    """Parse repeated ``--where`` options into a query mapping."""
    query: dict[str, str] = {}
    for term in terms or []:
        field, pattern = parse_where(term)
        if field in query:
            raise ValueError(f"Field '{field}' appears more than once in the query")
        query[field] = pattern
    return query


def parse_json_object(text: str) -> dict[str, Any]:
    """Parse inline JSON that must be an object.

    Raises:
        json.JSONDecodeError: If the text is not valid JSON
        ValueError: If the JSON is not an object
    """
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
    return data


def read_json_file(path: str) -> dict[str, Any]:
    """Read single JSON object from file.

    Raises:
        FileNotFoundError: If file doesn't exist
        json.JSONDecodeError: If file contains invalid JSON
        ValueError: If the JSON is not an object
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    with file_path.open("r", encoding="utf-8") as f:
        return parse_json_object(f.read())


def read_jsonl_file(path: str) -> list[dict[str, Any]]:
    """Read JSON Lines (JSONL) file.

    Each non-blank line should contain a separate JSON object.

    Raises:
        FileNotFoundError: If file doesn't exist
        json.JSONDecodeError: If any line contains invalid JSON
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    records = []
    with file_path.open("r", encoding="utf-8") as f:
        for line_num, line in enumerate(f, 1):
            line = line.strip()
            if not line:
                continue
            try:
                records.append(json.loads(line))
            except json.JSONDecodeError as e:
                raise json.JSONDecodeError(
                    f"Invalid JSON on line {line_num}: {e.msg}",
                    e.doc,
                    e.pos,
                ) from e

    return records
