"""Converters from catalog documents to GraphQL types."""

from __future__ import annotations

from folio.core import model
from folio.graphql.schema import Author, Book


def author_to_graphql(author: model.Author | None) -> Author | None:
    if author is None:
        return None
    return Author(
        id=author.id,
        first_name=author.first_name,
        last_name=author.last_name,
        date_of_birth=author.date_of_birth,
        hometown_city=author.hometown_city,
        hometown_state=author.hometown_state,
    )


def book_to_graphql(book: model.Book | None) -> Book | None:
    if book is None:
        return None
    return Book(
        id=book.id,
        title=book.title,
        genres=list(book.genres),
        publication_date=book.publication_date,
        publisher=book.publisher,
        summary=book.summary,
        isbn=book.isbn,
        language=book.language,
        page_count=book.page_count,
        price=book.price,
        format=list(book.format),
        author_id=book.author_id,
    )


def authors_to_graphql(authors: list[model.Author]) -> list[Author]:
    return [gql for author in authors if (gql := author_to_graphql(author)) is not None]


def books_to_graphql(books: list[model.Book]) -> list[Book]:
    return [gql for book in books if (gql := book_to_graphql(book)) is not None]
