"""SQLAlchemy ORM models for document persistence.

Each collection is one table of JSONB documents keyed by the document
identity. ``seq`` records insertion order so listings come back in the order
documents were created.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import BigInteger, DateTime, Identity, Index, Text, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class AuthorTable(Base):
    """Author documents."""

    __tablename__ = "authors"

    identifier: Mapped[str] = mapped_column(Text, primary_key=True)
    seq: Mapped[int] = mapped_column(BigInteger, Identity(), unique=True, nullable=False)

    # JSONB for queries and filters
    doc: Mapped[dict[str, Any]] = mapped_column(JSONB, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    __table_args__ = (
        Index("idx_authors_doc_gin", doc, postgresql_using="gin"),
    )


class BookTable(Base):
    """Book documents."""

    __tablename__ = "books"

    identifier: Mapped[str] = mapped_column(Text, primary_key=True)
    seq: Mapped[int] = mapped_column(BigInteger, Identity(), unique=True, nullable=False)

    doc: Mapped[dict[str, Any]] = mapped_column(JSONB, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    __table_args__ = (
        # GIN index for JSONB containment queries (authorId lookups)
        Index("idx_books_doc_gin", doc, postgresql_using="gin"),
        Index("idx_books_author_id", doc["authorId"].astext),
    )


DocumentTable = type[AuthorTable] | type[BookTable]
