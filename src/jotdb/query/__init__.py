"""Query pattern parsing.

Patterns are parsed once per field type into a small closed set of query
values that the index evaluates.
"""

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

__all__ = [
    "Query",
    "Exact",
    "Prefix",
    "Suffix",
    "Contains",
    "Range",
    "BoolExact",
    "parse_query",
]
