"""Sorted field indexes."""

from jotdb.index.sorted_index import Index

__all__ = ["Index"]
