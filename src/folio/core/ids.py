from __future__ import annotations

from uuid import UUID, uuid4


def new_identity() -> str:
    """Generate a fresh document identity."""
    return str(uuid4())


def is_valid_identity(value: str) -> bool:
    """Return True when value is a UUID in canonical hyphenated form."""
    try:
        parsed = UUID(value)
    except (TypeError, ValueError, AttributeError):
        return False
    return str(parsed) == value.lower()
