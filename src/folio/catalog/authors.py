"""Author reads and mutations.

Reads are cache-aside: ``author:<id>`` without expiry, ``authors`` and
name-search listings with the listing TTL. Mutations write the store first
and then reconcile the cache:

- create/edit overwrite the ``authors`` collection entry (no expiry)
- create sets ``author:<id>``; edit overwrites it only if already cached
- remove cascades to the author's books and evicts every affected entry

Name-search listings are never evicted on write and may be stale for up to
the listing TTL.
"""

from __future__ import annotations

import logging
import re

from folio.cache.keys import CacheKeys
from folio.catalog.cache_aside import CacheAside
from folio.catalog.checks import (
    require_date_of_birth,
    require_identity,
    require_present,
    require_region,
    require_text,
)
from folio.core.errors import BadInputError, InternalError, NotFoundError
from folio.core.ids import new_identity
from folio.core.model import Author, AuthorChanges, AuthorDraft
from folio.core.snapshots import AuthorListSnapshot, AuthorSnapshot
from folio.persistence.base import DocumentStore
from folio.persistence.filters import AnyOf, Eq, IRegex

logger = logging.getLogger(__name__)


class AuthorService:
    """Cache-aside reads and write-through mutations for authors."""

    def __init__(self, store: DocumentStore, cache: CacheAside) -> None:
        self.store = store
        self.cache = cache

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    async def list_authors(self) -> list[Author]:
        """All authors; cached under ``authors``."""

        async def load() -> list[Author]:
            docs = await self.store.authors.find()
            return [Author.model_validate(doc) for doc in docs]

        return await self.cache.read_listing(CacheKeys.AUTHORS, AuthorListSnapshot, load)

    async def get_author(self, identity: str) -> Author:
        """One author by identity; cached under ``author:<id>`` without expiry."""
        identity = require_identity(identity)

        author = await self.cache.read_through(
            CacheKeys.author(identity), AuthorSnapshot, lambda: self._load(identity)
        )
        if author is None:
            raise NotFoundError("Author", identity)
        return author

    async def search_by_name(self, search_term: str) -> list[Author]:
        """Case-insensitive substring match on first or last name."""
        if search_term is None or not search_term.strip():
            raise BadInputError("Search term must not be empty")

        pattern = re.escape(search_term)

        async def load() -> list[Author]:
            docs = await self.store.authors.find(
                AnyOf((IRegex("first_name", pattern), IRegex("last_name", pattern)))
            )
            return [Author.model_validate(doc) for doc in docs]

        return await self.cache.read_listing(
            CacheKeys.author_search(search_term), AuthorListSnapshot, load
        )

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    async def add_author(self, draft: AuthorDraft) -> Author:
        if not (draft.first_name or "").strip() or not (draft.last_name or "").strip():
            raise BadInputError("First and last name must not be empty")
        try:
            require_date_of_birth(draft.date_of_birth)
        except BadInputError:
            raise BadInputError("Invalid DOB") from None
        require_text(draft.hometown_city, "Invalid hometownCity")
        try:
            region = require_region(draft.hometown_state)
        except BadInputError:
            raise BadInputError("Invalid hometownState") from None

        author = Author(
            _id=new_identity(),
            first_name=draft.first_name,
            last_name=draft.last_name,
            date_of_birth=draft.date_of_birth,
            hometownCity=draft.hometown_city,
            hometownState=region,
            books=[],
        )

        result = await self.store.authors.insert_one(author.to_document())
        if not result.acknowledged or not result.inserted_id:
            raise InternalError("Could not add author")
        logger.info("Author created: %s", author.id)

        await self._cache_collection()
        await self.cache.store(CacheKeys.author(author.id), AuthorSnapshot(data=author))
        return author

    async def edit_author(self, identity: str, changes: AuthorChanges) -> Author:
        identity = require_present(identity)
        fields = changes.provided()

        existing = await self._load(identity)
        if existing is None:
            raise NotFoundError("Author", identity)

        if "first_name" in fields:
            require_text(fields["first_name"], "First name cannot be empty or contain only spaces")
        if "last_name" in fields:
            require_text(fields["last_name"], "Last name cannot be empty or contain only spaces")
        if "hometown_city" in fields:
            require_text(
                fields["hometown_city"], "Hometown city cannot be empty or contain only spaces"
            )
        if "hometown_state" in fields:
            fields["hometown_state"] = require_region(fields["hometown_state"])
        if "date_of_birth" in fields:
            require_date_of_birth(fields["date_of_birth"])

        updated = existing.model_copy(update=fields)
        partial = {
            key: value
            for key, value in updated.to_document().items()
            if key not in ("_id", "books")
        }
        result = await self.store.authors.update_one(identity, partial)
        if not result.acknowledged:
            raise InternalError("Failed to update author")
        if result.matched_count == 0:
            raise InternalError(f"Author with _id {identity} disappeared during update")
        logger.info("Author updated: %s", identity)

        await self._cache_collection()
        key = CacheKeys.author(identity)
        if await self.cache.contains(key):
            await self.cache.store(key, AuthorSnapshot(data=updated))
        return updated

    async def remove_author(self, identity: str) -> Author:
        """Delete the author and every book that references it.

        The cascade is a sequence of independent deletes. A failure part way
        leaves books whose ``authorId`` no longer resolves.
        """
        identity = require_present(identity)

        existing = await self._load(identity)
        if existing is None:
            raise NotFoundError("Author", identity)

        owned = Eq("authorId", identity)
        book_ids = list(existing.books)
        for doc in await self.store.books.find(owned):
            if doc["_id"] not in book_ids:
                book_ids.append(doc["_id"])

        removed_books = await self.store.books.delete_many(owned)
        deleted = await self.store.authors.find_one_and_delete(identity)
        if deleted is None:
            raise InternalError(f"Could not delete author with _id {identity}")
        logger.info("Author removed: %s (cascaded %d books)", identity, removed_books)

        await self.cache.evict(*(CacheKeys.book(book_id) for book_id in book_ids))
        await self.cache.evict(CacheKeys.author(identity))
        return Author.model_validate(deleted)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    async def _load(self, identity: str) -> Author | None:
        doc = await self.store.authors.find_one(identity)
        return Author.model_validate(doc) if doc is not None else None

    async def _cache_collection(self) -> None:
        """Overwrite the ``authors`` entry with the current store contents, no expiry."""
        docs = await self.store.authors.find()
        authors = [Author.model_validate(doc) for doc in docs]
        await self.cache.store(CacheKeys.AUTHORS, AuthorListSnapshot(data=authors))
