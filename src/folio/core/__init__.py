"""Core catalog types: documents, snapshots, identities, errors, validation."""

from folio.core.errors import (
    BadInputError,
    CatalogError,
    ErrorKind,
    InternalError,
    NotFoundError,
    SnapshotError,
)
from folio.core.model import Author, AuthorChanges, AuthorDraft, Book, BookChanges, BookDraft

__all__ = [
    # Documents
    "Author",
    "Book",
    "AuthorDraft",
    "AuthorChanges",
    "BookDraft",
    "BookChanges",
    # Errors
    "ErrorKind",
    "CatalogError",
    "BadInputError",
    "NotFoundError",
    "InternalError",
    "SnapshotError",
]
