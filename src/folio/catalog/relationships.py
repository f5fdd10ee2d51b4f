"""Author/book reference maintenance.

The store has no foreign keys, so the author's ``books`` array is kept in
step with each book's ``authorId`` by hand. ``attach`` and ``detach`` are the
only operations that mutate that array. Each is a read-modify-write of one
author document; two concurrent attaches to the same author can lose one
reference (last write wins).
"""

from __future__ import annotations

import logging

from folio.core.errors import InternalError
from folio.persistence.base import DocumentCollection

logger = logging.getLogger(__name__)


class RelationshipMaintainer:
    """Keeps ``author.books`` consistent with ``book.authorId``."""

    def __init__(self, authors: DocumentCollection) -> None:
        self.authors = authors

    async def attach(self, book_id: str, author_id: str) -> bool:
        """Add ``book_id`` to the author's references (idempotent).

        Returns False when the author document does not exist.
        """
        author = await self.authors.find_one(author_id)
        if author is None:
            logger.warning("Cannot attach book %s: author %s not found", book_id, author_id)
            return False

        books: list[str] = list(author.get("books") or [])
        if book_id in books:
            return True
        books.append(book_id)
        await self._write(author_id, books)
        return True

    async def detach(self, book_id: str, author_id: str) -> bool:
        """Remove ``book_id`` from the author's references.

        Returns False when the author document does not exist.
        """
        author = await self.authors.find_one(author_id)
        if author is None:
            logger.warning("Cannot detach book %s: author %s not found", book_id, author_id)
            return False

        books: list[str] = list(author.get("books") or [])
        remaining = [ref for ref in books if ref != book_id]
        if len(remaining) != len(books):
            await self._write(author_id, remaining)
        return True

    async def _write(self, author_id: str, books: list[str]) -> None:
        result = await self.authors.update_one(author_id, {"books": books})
        if not result.acknowledged:
            raise InternalError("Failed to update author's books")
