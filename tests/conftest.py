"""Global pytest configuration and fixtures.

Provides:
- An in-memory document store whose collections count every call
- An in-process Redis double tracking values and expiries
- Draft factories and a ready-wired ``CatalogService``
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable
from typing import Any

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from folio.catalog.service import CatalogService
from folio.core.model import Author, AuthorDraft, BookDraft
from folio.persistence.base import Document, InsertResult, UpdateResult
from folio.persistence.filters import Filter
from folio.persistence.memory import InMemoryCollection, InMemoryDocumentStore


class CountingCollection(InMemoryCollection):
    """In-memory collection recording how often each operation runs."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.calls: Counter[str] = Counter()

    async def find_one(self, identity: str) -> Document | None:
        self.calls["find_one"] += 1
        return await super().find_one(identity)

    async def find(self, filter: Filter | None = None, limit: int = 0) -> list[Document]:
        self.calls["find"] += 1
        return await super().find(filter, limit)

    async def insert_one(self, document: Document) -> InsertResult:
        self.calls["insert_one"] += 1
        return await super().insert_one(document)

    async def update_one(self, identity: str, partial: Document) -> UpdateResult:
        self.calls["update_one"] += 1
        return await super().update_one(identity, partial)

    async def find_one_and_delete(self, identity: str) -> Document | None:
        self.calls["find_one_and_delete"] += 1
        return await super().find_one_and_delete(identity)

    async def delete_many(self, filter: Filter | None = None) -> int:
        self.calls["delete_many"] += 1
        return await super().delete_many(filter)

    async def count(self, filter: Filter | None = None) -> int:
        self.calls["count"] += 1
        return await super().count(filter)

    @property
    def total_calls(self) -> int:
        return sum(self.calls.values())


class CountingDocumentStore(InMemoryDocumentStore):
    """In-memory store built from counting collections."""

    authors: CountingCollection
    books: CountingCollection

    def __init__(self) -> None:
        self.authors = CountingCollection("authors")
        self.books = CountingCollection("books")

    @property
    def total_calls(self) -> int:
        return self.authors.total_calls + self.books.total_calls

    def reset_calls(self) -> None:
        self.authors.calls.clear()
        self.books.calls.clear()


class FakeRedis:
    """Subset of the ``redis.asyncio.Redis`` API used by ``RedisCache``.

    Expiries are recorded, not enforced. Setting ``fail`` makes every call
    raise a Redis connection error.
    """

    def __init__(self) -> None:
        self.data: dict[str, bytes] = {}
        self.ttls: dict[str, int] = {}
        self.calls: Counter[str] = Counter()
        self.fail = False
        self.closed = False

    def _call(self, name: str) -> None:
        self.calls[name] += 1
        if self.fail:
            raise RedisConnectionError("Error 111 connecting to localhost:6379. Connection refused.")

    async def exists(self, *keys: str) -> int:
        self._call("exists")
        return sum(1 for key in keys if key in self.data)

    async def get(self, key: str) -> bytes | None:
        self._call("get")
        return self.data.get(key)

    async def set(self, key: str, value: bytes) -> bool:
        self._call("set")
        self.data[key] = value
        self.ttls.pop(key, None)
        return True

    async def setex(self, key: str, ttl: int, value: bytes) -> bool:
        self._call("setex")
        self.data[key] = value
        self.ttls[key] = ttl
        return True

    async def delete(self, *keys: str) -> int:
        self._call("delete")
        removed = 0
        for key in keys:
            if self.data.pop(key, None) is not None:
                removed += 1
            self.ttls.pop(key, None)
        return removed

    async def ping(self) -> bool:
        self._call("ping")
        return True

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def store() -> CountingDocumentStore:
    """Empty in-memory store with call counters."""
    return CountingDocumentStore()


@pytest.fixture
def fake_redis() -> FakeRedis:
    """Empty in-process Redis double."""
    return FakeRedis()


@pytest.fixture
def catalog(store: CountingDocumentStore, fake_redis: FakeRedis) -> CatalogService:
    """Catalog wired to the in-memory store and the Redis double."""
    return CatalogService.create(store, fake_redis, listing_ttl=3600)  # type: ignore[arg-type]


@pytest.fixture
def make_author_draft() -> Callable[..., AuthorDraft]:
    """Factory for valid author drafts; keyword arguments override fields."""

    def factory(**overrides: Any) -> AuthorDraft:
        values: dict[str, Any] = {
            "first_name": "Patrick",
            "last_name": "Rothfuss",
            "date_of_birth": "06/06/1973",
            "hometown_city": "Madison",
            "hometown_state": "WI",
        }
        values.update(overrides)
        return AuthorDraft(**values)

    return factory


@pytest.fixture
def make_book_draft() -> Callable[..., BookDraft]:
    """Factory for valid book drafts; ``author_id`` is required."""

    def factory(author_id: str, **overrides: Any) -> BookDraft:
        values: dict[str, Any] = {
            "title": "The Name of the Wind",
            "genres": ["Fantasy", "Fiction"],
            "publication_date": "03/27/2007",
            "publisher": "DAW Books",
            "summary": "A young man grows to be the most notorious wizard his world has seen.",
            "isbn": "978-0-306-40615-7",
            "language": "English",
            "page_count": 662,
            "price": 9.99,
            "format": ["Hardcover", "Paperback"],
            "author_id": author_id,
        }
        values.update(overrides)
        return BookDraft(**values)

    return factory


@pytest.fixture
async def author(
    catalog: CatalogService, make_author_draft: Callable[..., AuthorDraft]
) -> Author:
    """An author created through the mutation path."""
    return await catalog.authors.add_author(make_author_draft())
