"""Catalog document models.

Field aliases follow the stored document layout (``_id``, ``hometownCity``,
``publicationDate`` ...) so that documents, cached snapshots and API payloads
share one wire format.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any

from pydantic import BaseModel, Field


class StrictModel(BaseModel):
    """Base model for catalog documents."""

    model_config = {
        "extra": "forbid",
        "populate_by_name": True,
    }

    def to_document(self) -> dict[str, Any]:
        """Dump to the stored document layout."""
        return self.model_dump(by_alias=True)


class Author(StrictModel):
    """Author document.

    ``books`` is a denormalized index of the author's book identities; the
    ground truth for the relationship is each book's ``authorId``.
    """

    id: str = Field(alias="_id")
    first_name: str
    last_name: str
    date_of_birth: str
    hometown_city: str = Field(alias="hometownCity")
    hometown_state: str = Field(alias="hometownState")
    books: list[str] = Field(default_factory=list)


class Book(StrictModel):
    """Book document."""

    id: str = Field(alias="_id")
    title: str
    genres: list[str]
    publication_date: str = Field(alias="publicationDate")
    publisher: str
    summary: str
    isbn: str
    language: str
    page_count: int = Field(alias="pageCount")
    price: float
    format: list[str]
    author_id: str = Field(alias="authorId")


@dataclass
class AuthorDraft:
    """Arguments for creating an author."""

    first_name: str
    last_name: str
    date_of_birth: str
    hometown_city: str
    hometown_state: str


@dataclass
class AuthorChanges:
    """Partial author update; None means "leave unchanged"."""

    first_name: str | None = None
    last_name: str | None = None
    date_of_birth: str | None = None
    hometown_city: str | None = None
    hometown_state: str | None = None

    def provided(self) -> dict[str, Any]:
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        return {name: value for name, value in values.items() if value is not None}


@dataclass
class BookDraft:
    """Arguments for creating a book."""

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


@dataclass
class BookChanges:
    """Partial book update; None means "leave unchanged"."""

    title: str | None = None
    genres: list[str] | None = None
    publication_date: str | None = None
    publisher: str | None = None
    summary: str | None = None
    isbn: str | None = None
    language: str | None = None
    page_count: int | None = None
    price: float | None = None
    format: list[str] | None = None
    author_id: str | None = None

    def provided(self) -> dict[str, Any]:
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        return {name: value for name, value in values.items() if value is not None}
