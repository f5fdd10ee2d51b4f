"""GraphQL schema definitions using Strawberry.

Field and argument names follow the catalog's existing public API
(``_id``, ``first_name``, ``hometownCity``, ``getAuthorById`` ...).

Nested relationship fields (``Book.author``, ``Author.books``,
``Author.numOfBooks``) always read the store directly; only the root query
fields go through the cache.

Example:
    from folio.graphql.schema import schema

    app.include_router(GraphQLRouter(schema), prefix="/graphql")
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated

import strawberry
from strawberry.extensions import MaskErrors
from strawberry.types import Info

from folio.core.model import AuthorChanges, AuthorDraft, BookChanges, BookDraft
from folio.graphql.errors import MASKED_ERROR_MESSAGE, catalog_errors, should_mask_error

if TYPE_CHECKING:
    from folio.graphql.context import CatalogContext


@strawberry.type
class Book:
    """Book entity."""

    id: str = strawberry.field(name="_id")
    title: str
    genres: list[str]
    publication_date: str
    publisher: str
    summary: str
    isbn: str
    language: str
    page_count: int
    price: float
    format: list[str]
    author_id: str

    @strawberry.field
    async def author(self, info: Info) -> Author | None:
        """The referenced author, read live from the store."""
        from folio.graphql.converters import author_to_graphql

        ctx: CatalogContext = info.context
        return author_to_graphql(await ctx.catalog.author_of(self.author_id))


@strawberry.type
class Author:
    """Author entity."""

    id: str = strawberry.field(name="_id")
    first_name: str = strawberry.field(name="first_name")
    last_name: str = strawberry.field(name="last_name")
    date_of_birth: str = strawberry.field(name="date_of_birth")
    hometown_city: str
    hometown_state: str

    @strawberry.field
    async def books(self, info: Info, limit: int | None = None) -> list[Book]:
        """Books written by this author, read live from the store."""
        from folio.graphql.converters import books_to_graphql

        ctx: CatalogContext = info.context
        return books_to_graphql(await ctx.catalog.books_of(self.id, limit))

    @strawberry.field
    async def num_of_books(self, info: Info) -> int:
        """Number of books written by this author, read live from the store."""
        ctx: CatalogContext = info.context
        return await ctx.catalog.book_count(self.id)


@strawberry.type
class Query:
    """GraphQL query root."""

    @strawberry.field
    async def authors(self, info: Info) -> list[Author]:
        from folio.graphql.converters import authors_to_graphql

        ctx: CatalogContext = info.context
        with catalog_errors():
            return authors_to_graphql(await ctx.catalog.authors.list_authors())

    @strawberry.field
    async def books(self, info: Info) -> list[Book]:
        from folio.graphql.converters import books_to_graphql

        ctx: CatalogContext = info.context
        with catalog_errors():
            return books_to_graphql(await ctx.catalog.books.list_books())

    @strawberry.field
    async def get_author_by_id(
        self,
        info: Info,
        id: Annotated[str, strawberry.argument(name="_id")],
    ) -> Author | None:
        from folio.graphql.converters import author_to_graphql

        ctx: CatalogContext = info.context
        with catalog_errors():
            return author_to_graphql(await ctx.catalog.authors.get_author(id))

    @strawberry.field
    async def get_book_by_id(
        self,
        info: Info,
        id: Annotated[str, strawberry.argument(name="_id")],
    ) -> Book | None:
        from folio.graphql.converters import book_to_graphql

        ctx: CatalogContext = info.context
        with catalog_errors():
            return book_to_graphql(await ctx.catalog.books.get_book(id))

    @strawberry.field
    async def books_by_genre(self, info: Info, genre: str) -> list[Book]:
        from folio.graphql.converters import books_to_graphql

        ctx: CatalogContext = info.context
        with catalog_errors():
            return books_to_graphql(await ctx.catalog.books.books_by_genre(genre))

    @strawberry.field
    async def books_by_price_range(
        self,
        info: Info,
        min_price: Annotated[float, strawberry.argument(name="min")],
        max_price: Annotated[float, strawberry.argument(name="max")],
    ) -> list[Book]:
        from folio.graphql.converters import books_to_graphql

        ctx: CatalogContext = info.context
        with catalog_errors():
            books = await ctx.catalog.books.books_by_price_range(min_price, max_price)
            return books_to_graphql(books)

    @strawberry.field
    async def search_authors_by_name(self, info: Info, search_term: str) -> list[Author]:
        from folio.graphql.converters import authors_to_graphql

        ctx: CatalogContext = info.context
        with catalog_errors():
            return authors_to_graphql(await ctx.catalog.authors.search_by_name(search_term))


@strawberry.type
class Mutation:
    """GraphQL mutation root."""

    @strawberry.mutation
    async def add_author(
        self,
        info: Info,
        first_name: Annotated[str, strawberry.argument(name="first_name")],
        last_name: Annotated[str, strawberry.argument(name="last_name")],
        date_of_birth: Annotated[str, strawberry.argument(name="date_of_birth")],
        hometown_city: str,
        hometown_state: str,
    ) -> Author | None:
        from folio.graphql.converters import author_to_graphql

        ctx: CatalogContext = info.context
        draft = AuthorDraft(
            first_name=first_name,
            last_name=last_name,
            date_of_birth=date_of_birth,
            hometown_city=hometown_city,
            hometown_state=hometown_state,
        )
        with catalog_errors():
            return author_to_graphql(await ctx.catalog.authors.add_author(draft))

    @strawberry.mutation
    async def edit_author(
        self,
        info: Info,
        id: Annotated[str, strawberry.argument(name="_id")],
        first_name: Annotated[str | None, strawberry.argument(name="first_name")] = None,
        last_name: Annotated[str | None, strawberry.argument(name="last_name")] = None,
        date_of_birth: Annotated[str | None, strawberry.argument(name="date_of_birth")] = None,
        hometown_city: str | None = None,
        hometown_state: str | None = None,
    ) -> Author | None:
        from folio.graphql.converters import author_to_graphql

        ctx: CatalogContext = info.context
        changes = AuthorChanges(
            first_name=first_name,
            last_name=last_name,
            date_of_birth=date_of_birth,
            hometown_city=hometown_city,
            hometown_state=hometown_state,
        )
        with catalog_errors():
            return author_to_graphql(await ctx.catalog.authors.edit_author(id, changes))

    @strawberry.mutation
    async def remove_author(
        self,
        info: Info,
        id: Annotated[str, strawberry.argument(name="_id")],
    ) -> Author | None:
        from folio.graphql.converters import author_to_graphql

        ctx: CatalogContext = info.context
        with catalog_errors():
            return author_to_graphql(await ctx.catalog.authors.remove_author(id))

    @strawberry.mutation
    async def add_book(
        self,
        info: Info,
        title: str,
        genres: list[str],
        publication_date: str,
        publisher: str,
        summary: str,
        isbn: str,
        language: str,
        page_count: int,
        price: float,
        format: list[str],
        author_id: str,
    ) -> Book | None:
        from folio.graphql.converters import book_to_graphql

        ctx: CatalogContext = info.context
        draft = BookDraft(
            title=title,
            genres=genres,
            publication_date=publication_date,
            publisher=publisher,
            summary=summary,
            isbn=isbn,
            language=language,
            page_count=page_count,
            price=price,
            format=format,
            author_id=author_id,
        )
        with catalog_errors():
            return book_to_graphql(await ctx.catalog.books.add_book(draft))

    @strawberry.mutation
    async def edit_book(
        self,
        info: Info,
        id: Annotated[str, strawberry.argument(name="_id")],
        title: str | None = None,
        genres: list[str] | None = None,
        publication_date: str | None = None,
        publisher: str | None = None,
        summary: str | None = None,
        isbn: str | None = None,
        language: str | None = None,
        page_count: int | None = None,
        price: float | None = None,
        format: list[str] | None = None,
        author_id: str | None = None,
    ) -> Book | None:
        from folio.graphql.converters import book_to_graphql

        ctx: CatalogContext = info.context
        changes = BookChanges(
            title=title,
            genres=genres,
            publication_date=publication_date,
            publisher=publisher,
            summary=summary,
            isbn=isbn,
            language=language,
            page_count=page_count,
            price=price,
            format=format,
            author_id=author_id,
        )
        with catalog_errors():
            return book_to_graphql(await ctx.catalog.books.edit_book(id, changes))

    @strawberry.mutation
    async def remove_book(
        self,
        info: Info,
        id: Annotated[str, strawberry.argument(name="_id")],
    ) -> Book | None:
        from folio.graphql.converters import book_to_graphql

        ctx: CatalogContext = info.context
        with catalog_errors():
            return book_to_graphql(await ctx.catalog.books.remove_book(id))


# Create the schema
schema = strawberry.Schema(
    query=Query,
    mutation=Mutation,
    extensions=[
        MaskErrors(should_mask_error=should_mask_error, error_message=MASKED_ERROR_MESSAGE)
    ],
)
