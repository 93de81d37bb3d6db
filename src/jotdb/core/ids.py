"""Record identifier generation."""

from uuid import uuid4


def generate_id() -> str:
    """Return a fresh record identifier (32 lowercase hex characters)."""
    return uuid4().hex
