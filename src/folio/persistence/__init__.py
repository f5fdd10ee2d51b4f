"""Authoritative document store for Folio.

This module provides:
- The ``DocumentCollection`` / ``DocumentStore`` interface
- Filters (exact, case-insensitive regex, numeric range, OR)
- A PostgreSQL JSONB backend (SQLAlchemy asyncio + asyncpg)
- An in-memory backend for development and tests
"""

from folio.persistence.base import (
    Document,
    DocumentCollection,
    DocumentStore,
    InsertResult,
    UpdateResult,
)
from folio.persistence.factory import create_document_store
from folio.persistence.filters import AnyOf, Eq, Filter, IRegex, Range
from folio.persistence.memory import InMemoryCollection, InMemoryDocumentStore

__all__ = [
    # Interface
    "Document",
    "DocumentCollection",
    "DocumentStore",
    "InsertResult",
    "UpdateResult",
    "create_document_store",
    # Filters
    "Filter",
    "Eq",
    "IRegex",
    "Range",
    "AnyOf",
    # Backends
    "InMemoryCollection",
    "InMemoryDocumentStore",
]
