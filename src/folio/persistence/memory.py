"""In-memory document store.

Suitable for development and tests. Documents are deep-copied on the way in
and out so callers never share mutable state with the store.
"""

from __future__ import annotations

import copy

from folio.persistence.base import (
    Document,
    DocumentCollection,
    DocumentStore,
    InsertResult,
    UpdateResult,
)
from folio.persistence.filters import Filter


class InMemoryCollection(DocumentCollection):
    """Dict-backed collection preserving insertion order."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._docs: dict[str, Document] = {}

    async def find_one(self, identity: str) -> Document | None:
        doc = self._docs.get(identity)
        return copy.deepcopy(doc) if doc is not None else None

    async def find(self, filter: Filter | None = None, limit: int = 0) -> list[Document]:
        matched = [
            copy.deepcopy(doc)
            for doc in self._docs.values()
            if filter is None or filter.matches(doc)
        ]
        return matched[:limit] if limit > 0 else matched

    async def insert_one(self, document: Document) -> InsertResult:
        identity = document.get("_id")
        if not identity or identity in self._docs:
            return InsertResult(acknowledged=False, inserted_id=None)
        self._docs[identity] = copy.deepcopy(document)
        return InsertResult(acknowledged=True, inserted_id=identity)

    async def update_one(self, identity: str, partial: Document) -> UpdateResult:
        doc = self._docs.get(identity)
        if doc is None:
            return UpdateResult(acknowledged=True, matched_count=0)
        doc.update(copy.deepcopy({k: v for k, v in partial.items() if k != "_id"}))
        return UpdateResult(acknowledged=True, matched_count=1)

    async def find_one_and_delete(self, identity: str) -> Document | None:
        return self._docs.pop(identity, None)

    async def delete_many(self, filter: Filter | None = None) -> int:
        doomed = [key for key, doc in self._docs.items() if filter is None or filter.matches(doc)]
        for key in doomed:
            del self._docs[key]
        return len(doomed)

    async def count(self, filter: Filter | None = None) -> int:
        return sum(1 for doc in self._docs.values() if filter is None or filter.matches(doc))


class InMemoryDocumentStore(DocumentStore):
    """Document store held entirely in process memory."""

    def __init__(self) -> None:
        self.authors = InMemoryCollection("authors")
        self.books = InMemoryCollection("books")

    async def health_check(self) -> bool:
        return True
