"""End-to-end catalog tests on PostgreSQL and Redis."""

import pytest

from folio.core.errors import BadInputError, NotFoundError
from folio.core.model import AuthorDraft, BookChanges, BookDraft
from folio.persistence.filters import AnyOf, Eq, IRegex, Range

pytestmark = pytest.mark.integration


def author_draft() -> AuthorDraft:
    return AuthorDraft(
        first_name="Patrick",
        last_name="Rothfuss",
        date_of_birth="06/06/1973",
        hometown_city="Madison",
        hometown_state="WI",
    )


def book_draft(author_id: str, **overrides) -> BookDraft:
    values = {
        "title": "The Name of the Wind",
        "genres": ["Fantasy", "Fiction"],
        "publication_date": "03/27/2007",
        "publisher": "DAW Books",
        "summary": "A wizard's story",
        "isbn": "9780306406157",
        "language": "English",
        "page_count": 662,
        "price": 9.99,
        "format": ["Hardcover"],
        "author_id": author_id,
    }
    values.update(overrides)
    return BookDraft(**values)


class TestPostgresFilters:
    """Filters evaluated as SQL."""

    @pytest.mark.asyncio
    async def test_filters(self, pg_store) -> None:
        books = pg_store.books
        await books.insert_one({"_id": "b1", "genres": ["Fiction"], "price": 1, "authorId": "a"})
        await books.insert_one({"_id": "b2", "genres": ["Science Fiction"], "price": 0})
        await books.insert_one({"_id": "b3", "genres": "Fiction", "price": "cheap"})

        genre = await books.find(IRegex("genres", "^fiction$"))
        priced = await books.find(Range("price", gte=0, lte=1, gt=0))
        either = await books.find(AnyOf((Eq("authorId", "a"), Eq("_id", "b2"))))

        assert [d["_id"] for d in genre] == ["b1", "b3"]
        assert [d["_id"] for d in priced] == ["b1"]
        assert [d["_id"] for d in either] == ["b1", "b2"]
        assert await books.count(Eq("authorId", "a")) == 1

    @pytest.mark.asyncio
    async def test_update_merges(self, pg_store) -> None:
        await pg_store.authors.insert_one({"_id": "a1", "first_name": "A", "books": []})

        result = await pg_store.authors.update_one("a1", {"books": ["b1"]})

        assert result.matched_count == 1
        assert await pg_store.authors.find_one("a1") == {
            "_id": "a1",
            "first_name": "A",
            "books": ["b1"],
        }

    @pytest.mark.asyncio
    async def test_duplicate_insert(self, pg_store) -> None:
        await pg_store.authors.insert_one({"_id": "a1"})

        result = await pg_store.authors.insert_one({"_id": "a1"})

        assert result.acknowledged is False


class TestCatalogOnPostgres:
    """Catalog behavior against real backends."""

    @pytest.mark.asyncio
    async def test_book_lifecycle(self, pg_catalog, redis_connection) -> None:
        author = await pg_catalog.authors.add_author(author_draft())
        book = await pg_catalog.books.add_book(book_draft(author.id))

        assert (await pg_catalog.author_of(book.author_id)).id == author.id
        assert await pg_catalog.book_count(author.id) == 1
        assert await redis_connection.client.ttl(f"book:{book.id}") == -1

        fiction = await pg_catalog.books.books_by_genre("fiction")
        assert [b.id for b in fiction] == [book.id]
        assert 0 < await redis_connection.client.ttl("fiction") <= 3600

        await pg_catalog.books.edit_book(book.id, BookChanges(genres=["Horror"]))
        assert [b.id for b in await pg_catalog.books.books_by_genre("fiction")] == [book.id]

        await pg_catalog.authors.remove_author(author.id)
        with pytest.raises(NotFoundError):
            await pg_catalog.books.get_book(book.id)

    @pytest.mark.asyncio
    async def test_price_boundary(self, pg_catalog, pg_store) -> None:
        author = await pg_catalog.authors.add_author(author_draft())
        one = await pg_catalog.books.add_book(book_draft(author.id, price=1))
        await pg_store.books.insert_one(
            {**one.to_document(), "_id": "zero-priced", "price": 0}
        )

        result = await pg_catalog.books.books_by_price_range(0, 1)

        assert [b.id for b in result] == [one.id]
        with pytest.raises(BadInputError):
            await pg_catalog.books.books_by_price_range(1, 1)
