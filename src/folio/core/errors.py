"""Error taxonomy for catalog operations.

Every failure visible outside the catalog carries a kind tag and a
human-readable message:

- BAD_INPUT: malformed, missing or out-of-range argument
- NOT_FOUND: a referenced identity does not resolve in the store
- INTERNAL: the store did not acknowledge a write, or a document expected
  after a write is missing
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Kind tag carried by every catalog error."""

    BAD_INPUT = "BAD_INPUT"
    NOT_FOUND = "NOT_FOUND"
    INTERNAL = "INTERNAL"


class CatalogError(Exception):
    """Base exception for catalog operations."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict[str, str]:
        """Serialize to the external error envelope."""
        return {"kind": self.kind.value, "message": self.message}


class BadInputError(CatalogError):
    """Invalid argument, detected before any store or cache access."""

    kind = ErrorKind.BAD_INPUT


class NotFoundError(CatalogError):
    """Referenced entity does not exist in the authoritative store."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, resource_type: str, identifier: str):
        self.resource_type = resource_type
        self.identifier = identifier
        super().__init__(f"{resource_type} with _id {identifier} not found")


class InternalError(CatalogError):
    """Store acknowledgment failure or unexpected missing document."""

    kind = ErrorKind.INTERNAL


class SnapshotError(ValueError):
    """A cached snapshot could not be decoded into its declared type."""
