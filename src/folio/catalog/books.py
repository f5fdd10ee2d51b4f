"""Book reads and mutations.

Reads are cache-aside: ``book:<id>`` without expiry; ``books``, genre and
price-range listings with the listing TTL. Listings are never evicted when
a single book changes, so a genre or price listing can lag behind the store
for up to the listing TTL.

Every mutation keeps the owning author's ``books`` array in step through
``RelationshipMaintainer`` and refreshes the author's single-entity entry if
it is cached.
"""

from __future__ import annotations

import logging
import re

from pydantic import ValidationError

from folio.cache.keys import CacheKeys
from folio.catalog.cache_aside import CacheAside
from folio.catalog.checks import (
    require_count,
    require_date,
    require_identity,
    require_isbn,
    require_labels,
    require_positive,
    require_present,
    require_price_range,
    require_published_after,
    require_text,
)
from folio.catalog.relationships import RelationshipMaintainer
from folio.core.errors import BadInputError, InternalError, NotFoundError
from folio.core.ids import new_identity
from folio.core.model import Author, Book, BookChanges, BookDraft
from folio.core.snapshots import AuthorSnapshot, BookListSnapshot, BookSnapshot
from folio.persistence.base import DocumentStore
from folio.persistence.filters import IRegex, Range

logger = logging.getLogger(__name__)


class BookService:
    """Cache-aside reads and write-through mutations for books."""

    def __init__(
        self,
        store: DocumentStore,
        cache: CacheAside,
        relationships: RelationshipMaintainer,
    ) -> None:
        self.store = store
        self.cache = cache
        self.relationships = relationships

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    async def list_books(self) -> list[Book]:
        """All books; cached under ``books``."""

        async def load() -> list[Book]:
            return [Book.model_validate(doc) for doc in await self.store.books.find()]

        return await self.cache.read_listing(CacheKeys.BOOKS, BookListSnapshot, load)

    async def get_book(self, identity: str) -> Book:
        """One book by identity; cached under ``book:<id>`` without expiry."""
        identity = require_identity(identity)

        book = await self.cache.read_through(
            CacheKeys.book(identity), BookSnapshot, lambda: self._load(identity)
        )
        if book is None:
            raise NotFoundError("Book", identity)
        return book

    async def books_by_genre(self, genre: str) -> list[Book]:
        """Books carrying ``genre`` (exact, case-insensitive)."""
        if genre is None or not genre.strip():
            raise BadInputError("Genre must not be empty")

        pattern = f"^{re.escape(genre)}$"

        async def load() -> list[Book]:
            docs = await self.store.books.find(IRegex("genres", pattern))
            return [Book.model_validate(doc) for doc in docs]

        return await self.cache.read_listing(CacheKeys.genre(genre), BookListSnapshot, load)

    async def books_by_price_range(self, min_price: float, max_price: float) -> list[Book]:
        """Books with ``min_price <= price <= max_price``.

        Documents priced at or below zero are never listed; they cannot be
        created through the mutation path.
        """
        require_price_range(min_price, max_price)

        async def load() -> list[Book]:
            docs = await self.store.books.find(
                Range("price", gte=min_price, lte=max_price, gt=0)
            )
            return [Book.model_validate(doc) for doc in docs]

        return await self.cache.read_listing(
            CacheKeys.price_range(min_price, max_price), BookListSnapshot, load
        )

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    async def add_book(self, draft: BookDraft) -> Book:
        author = await self._load_author(draft.author_id)
        if author is None:
            raise NotFoundError("Author", draft.author_id)

        title = require_text(draft.title, "Title cannot be empty").strip()
        genres = require_labels(draft.genres, "Genres")
        published = require_date(draft.publication_date, "publicationDate")
        price = require_positive(draft.price, "Price")
        isbn = require_isbn(draft.isbn)
        page_count = require_count(draft.page_count, "PageCount")
        formats = require_labels(draft.format, "Format")
        require_published_after(published, author.date_of_birth)

        book = Book(
            _id=new_identity(),
            title=title,
            genres=genres,
            publicationDate=draft.publication_date,
            publisher=(draft.publisher or "").strip(),
            summary=(draft.summary or "").strip(),
            isbn=isbn,
            language=(draft.language or "").strip(),
            pageCount=page_count,
            price=price,
            format=formats,
            authorId=author.id,
        )

        result = await self.store.books.insert_one(book.to_document())
        if not result.acknowledged or not result.inserted_id:
            raise InternalError("Could not add book")
        await self.relationships.attach(book.id, author.id)
        logger.info("Book created: %s (author %s)", book.id, author.id)

        await self.cache.store(CacheKeys.book(book.id), BookSnapshot(data=book))
        await self._refresh_author(author.id)
        return book

    async def edit_book(self, identity: str, changes: BookChanges) -> Book:
        identity = require_present(identity)
        fields = changes.provided()

        existing = await self._load(identity)
        if existing is None:
            raise NotFoundError("Book", identity)

        old_author_id = existing.author_id
        if "author_id" in fields:
            require_present(fields["author_id"], "authorId")
        new_author_id = fields.get("author_id", old_author_id)
        moving = new_author_id != old_author_id

        target_author: Author | None = None
        if moving:
            target_author = await self._load_author(new_author_id)
            if target_author is None:
                raise NotFoundError("Author", new_author_id)

        if "title" in fields:
            fields["title"] = require_text(fields["title"], "Title cannot be empty").strip()
        if "genres" in fields:
            fields["genres"] = require_labels(fields["genres"], "Genres")
        if "format" in fields:
            fields["format"] = require_labels(fields["format"], "Format")
        published = None
        if "publication_date" in fields:
            published = require_date(fields["publication_date"], "publicationDate")
        if "price" in fields:
            require_positive(fields["price"], "Price")
        if "isbn" in fields:
            require_isbn(fields["isbn"])
        if "page_count" in fields:
            fields["page_count"] = require_count(fields["page_count"], "PageCount")
        for name in ("publisher", "summary", "language"):
            if name in fields:
                fields[name] = fields[name].strip()

        if published is not None:
            if target_author is None:
                target_author = await self._load_author(new_author_id)
            if target_author is None:
                raise NotFoundError("Author", new_author_id)
            require_published_after(published, target_author.date_of_birth)

        try:
            updated = Book.model_validate(existing.model_copy(update=fields).to_document())
        except ValidationError as exc:
            raise BadInputError(f"Invalid book fields: {exc.error_count()} error(s)") from exc

        if moving:
            await self.relationships.detach(identity, old_author_id)
            await self.relationships.attach(identity, new_author_id)

        result = await self.store.books.update_one(identity, updated.to_document())
        if not result.acknowledged:
            raise InternalError("Failed to update book")
        if result.matched_count == 0:
            raise InternalError(f"Book with _id {identity} disappeared during update")
        logger.info("Book updated: %s", identity)

        key = CacheKeys.book(identity)
        await self.cache.evict(key)
        await self.cache.store(key, BookSnapshot(data=updated))
        if moving:
            await self._refresh_author(old_author_id)
            await self._refresh_author(new_author_id)
        return updated

    async def remove_book(self, identity: str) -> Book:
        identity = require_present(identity)

        existing = await self._load(identity)
        if existing is None:
            raise NotFoundError("Book", identity)

        await self.relationships.detach(identity, existing.author_id)
        deleted = await self.store.books.find_one_and_delete(identity)
        if deleted is None:
            raise InternalError(f"Could not delete book with _id {identity}")
        logger.info("Book removed: %s", identity)

        await self.cache.evict(CacheKeys.book(identity))
        await self._refresh_author(existing.author_id)
        return Book.model_validate(deleted)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    async def _load(self, identity: str) -> Book | None:
        doc = await self.store.books.find_one(identity)
        return Book.model_validate(doc) if doc is not None else None

    async def _load_author(self, identity: str) -> Author | None:
        if identity is None or not identity.strip():
            return None
        doc = await self.store.authors.find_one(identity)
        return Author.model_validate(doc) if doc is not None else None

    async def _refresh_author(self, author_id: str) -> None:
        await self.cache.refresh_if_cached(
            CacheKeys.author(author_id), AuthorSnapshot, lambda: self._load_author(author_id)
        )
