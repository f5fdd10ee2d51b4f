"""Authoritative store interface.

The store exposes two collections, ``authors`` and ``books``, each holding
plain JSON documents keyed by ``_id``. Every method is atomic for the single
document it touches; there are no multi-document transactions.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from folio.persistence.filters import Filter

Document = dict[str, Any]


@dataclass(frozen=True)
class InsertResult:
    """Outcome of ``insert_one``."""

    acknowledged: bool
    inserted_id: str | None


@dataclass(frozen=True)
class UpdateResult:
    """Outcome of ``update_one``."""

    acknowledged: bool
    matched_count: int


class DocumentCollection(ABC):
    """CRUD primitives over one collection of documents."""

    name: str

    @abstractmethod
    async def find_one(self, identity: str) -> Document | None:
        """Return the document with this identity, or None."""

    @abstractmethod
    async def find(self, filter: Filter | None = None, limit: int = 0) -> list[Document]:
        """Return matching documents in insertion order. ``limit <= 0`` means all."""

    @abstractmethod
    async def insert_one(self, document: Document) -> InsertResult:
        """Insert a new document; ``document["_id"]`` must be set."""

    @abstractmethod
    async def update_one(self, identity: str, partial: Document) -> UpdateResult:
        """Merge top-level fields of ``partial`` into the document."""

    @abstractmethod
    async def find_one_and_delete(self, identity: str) -> Document | None:
        """Delete the document and return it, or None if absent."""

    @abstractmethod
    async def delete_many(self, filter: Filter | None = None) -> int:
        """Delete matching documents and return how many were removed."""

    @abstractmethod
    async def count(self, filter: Filter | None = None) -> int:
        """Count matching documents."""


class DocumentStore(ABC):
    """The authoritative store: an authors and a books collection."""

    authors: DocumentCollection
    books: DocumentCollection

    async def start(self) -> None:
        """Prepare the backend (create schema, open pools)."""

    async def close(self) -> None:
        """Release backend resources."""

    @abstractmethod
    async def health_check(self) -> bool:
        """Check backend connectivity."""
