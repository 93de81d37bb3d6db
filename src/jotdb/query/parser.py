"""Query pattern parsing.

A query pattern is a short string whose meaning depends on the field type:

    Strings:  'josef' (exact), 'josef%' (prefix), '%josef' (suffix),
              '%josef%' (contains). '%' is a wildcard and cannot be escaped.
    Numbers:  '30' (exact), '>10', '>=20', '<50', '<=30'
    Booleans: 'true', 'false'

Each pattern is parsed once into one of the frozen query classes below; the
index evaluates the resulting value and never looks at the raw string again.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Literal

from jotdb.core.types import FieldType
from jotdb.exceptions import QueryError

WILDCARD = "%"

RangeOp = Literal[">", ">=", "<", "<="]

_RANGE_RE = re.compile(r"^(>=|>|<=|<)(.+)$", re.DOTALL)
_NUMBER_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")


@dataclass(frozen=True)
class Exact:
    """Values equal to ``value``."""

    value: str | int | float


@dataclass(frozen=True)
class Prefix:
    """String values starting with ``term``."""

    term: str


@dataclass(frozen=True)
class Suffix:
    """String values ending with ``term``."""

    term: str


@dataclass(frozen=True)
class Contains:
    """String values containing ``term``."""

    term: str


@dataclass(frozen=True)
class Range:
    """Numeric values compared against ``bound``."""

    op: RangeOp
    bound: int | float


@dataclass(frozen=True)
class BoolExact:
    """Boolean values equal to ``value``."""

    value: bool


Query = Exact | Prefix | Suffix | Contains | Range | BoolExact


def parse_number(text: str) -> int | float | None:
    """Parse a decimal number literal, or return None if it is not one."""
    text = text.strip()
    if not _NUMBER_RE.match(text):
        return None
    if any(c in text for c in ".eE"):
        value = float(text)
        return value if math.isfinite(value) else None
    return int(text)


def parse_query(pattern: str, field_type: FieldType, ignore_case: bool = False) -> Query:
    """Parse a query pattern for a field of the given type.

    Args:
        pattern: Raw query string
        field_type: Declared type of the queried field
        ignore_case: Case-fold string terms

    Returns:
        One of Exact, Prefix, Suffix, Contains, Range, BoolExact

    Raises:
        QueryError: If the pattern is not valid for the field type
    """
    if not isinstance(pattern, str):
        raise QueryError(
            f"Query pattern must be a string, got {type(pattern).__name__}",
            {"pattern": repr(pattern)},
        )

    if field_type == FieldType.NUMBER:
        return _parse_number_query(pattern)
    if field_type == FieldType.BOOLEAN:
        if pattern == "true":
            return BoolExact(True)
        if pattern == "false":
            return BoolExact(False)
        raise QueryError(
            f'Invalid query for boolean field: "{pattern}" (use "true" or "false")',
            {"pattern": pattern, "field_type": str(field_type)},
        )
    if field_type == FieldType.STRING:
        return _parse_string_query(pattern, ignore_case)

    raise QueryError(
        f"Fields of type '{field_type}' cannot be queried",
        {"pattern": pattern, "field_type": str(field_type)},
    )


def _parse_number_query(pattern: str) -> Query:
    match = _RANGE_RE.match(pattern)
    if match:
        op, literal = match.group(1), match.group(2)
        bound = parse_number(literal)
        if bound is None:
            raise QueryError(
                f'Invalid numeric query: "{pattern}"',
                {"pattern": pattern, "field_type": "number"},
            )
        return Range(op, bound)  # type: ignore[arg-type]

    value = parse_number(pattern)
    if value is None:
        raise QueryError(
            f'Invalid query for number field: "{pattern}"',
            {"pattern": pattern, "field_type": "number"},
        )
    return Exact(value)


def _parse_string_query(pattern: str, ignore_case: bool) -> Query:
    starts = pattern.startswith(WILDCARD)
    ends = pattern.endswith(WILDCARD)

    def fold(term: str) -> str:
        return term.lower() if ignore_case else term

    if starts and ends and len(pattern) > 1:
        return Contains(fold(pattern[1:-1]))
    if ends:
        return Prefix(fold(pattern[:-1]))
    if starts:
        return Suffix(fold(pattern[1:]))
    return Exact(fold(pattern))
