"""Catalog facade.

Wires the author and book services to one store and one cache, and answers
relationship questions (a book's author, an author's books, an author's
book count). Relationship answers are always read live from the store; they
are never cached.
"""

from __future__ import annotations

from redis.asyncio import Redis

from folio.cache.redis import DEFAULT_TTL, RedisCache
from folio.catalog.authors import AuthorService
from folio.catalog.books import BookService
from folio.catalog.cache_aside import CacheAside
from folio.catalog.relationships import RelationshipMaintainer
from folio.core.model import Author, Book
from folio.persistence.base import DocumentStore
from folio.persistence.filters import Eq


class CatalogService:
    """Entry point for every catalog operation."""

    def __init__(self, store: DocumentStore, cache: RedisCache, listing_ttl: int = DEFAULT_TTL):
        self.store = store
        self.cache = CacheAside(cache, listing_ttl=listing_ttl)
        self.relationships = RelationshipMaintainer(store.authors)
        self.authors = AuthorService(store, self.cache)
        self.books = BookService(store, self.cache, self.relationships)

    @classmethod
    def create(
        cls, store: DocumentStore, redis_client: Redis, listing_ttl: int = DEFAULT_TTL
    ) -> "CatalogService":
        return cls(store, RedisCache(redis_client), listing_ttl=listing_ttl)

    async def author_of(self, author_id: str) -> Author | None:
        """The author a book references, or None if it no longer exists."""
        doc = await self.store.authors.find_one(author_id)
        return Author.model_validate(doc) if doc is not None else None

    async def books_of(self, author_id: str, limit: int | None = None) -> list[Book]:
        """Books whose ``authorId`` is ``author_id``; ``limit <= 0`` means no limit."""
        docs = await self.store.books.find(Eq("authorId", author_id), limit=limit or 0)
        return [Book.model_validate(doc) for doc in docs]

    async def book_count(self, author_id: str) -> int:
        return await self.store.books.count(Eq("authorId", author_id))
