"""PostgreSQL document store.

Documents live in JSONB columns; each collection operation runs in its own
short transaction, which gives single-document atomicity and nothing more.
Partial updates use the JSONB ``||`` operator so concurrent edits to
different fields of the same document do not clobber each other.
"""

from __future__ import annotations

import logging

from sqlalchemy import delete, func, literal, select, update
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from folio.config import Settings
from folio.persistence.base import (
    Document,
    DocumentCollection,
    DocumentStore,
    InsertResult,
    UpdateResult,
)
from folio.persistence.db import create_engine, create_session_factory, ping, session_context
from folio.persistence.filters import Filter
from folio.persistence.tables import AuthorTable, Base, BookTable, DocumentTable

logger = logging.getLogger(__name__)


class PostgresCollection(DocumentCollection):
    """Collection backed by one JSONB document table."""

    def __init__(
        self,
        table: DocumentTable,
        session_factory: async_sessionmaker[AsyncSession],
    ) -> None:
        self.table = table
        self.name = table.__tablename__
        self._session_factory = session_factory

    async def find_one(self, identity: str) -> Document | None:
        stmt = select(self.table.doc).where(self.table.identifier == identity)
        async with session_context(self._session_factory) as session:
            result = await session.execute(stmt)
            return result.scalar_one_or_none()

    async def find(self, filter: Filter | None = None, limit: int = 0) -> list[Document]:
        stmt = select(self.table.doc).order_by(self.table.seq)
        if filter is not None:
            stmt = stmt.where(filter.to_clause(self.table.doc))
        if limit > 0:
            stmt = stmt.limit(limit)
        async with session_context(self._session_factory) as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def insert_one(self, document: Document) -> InsertResult:
        identity = document.get("_id")
        if not identity:
            return InsertResult(acknowledged=False, inserted_id=None)
        try:
            async with session_context(self._session_factory) as session:
                session.add(self.table(identifier=identity, doc=document))
                await session.flush()
        except IntegrityError:
            logger.warning("Insert into %s rejected for _id %s", self.name, identity)
            return InsertResult(acknowledged=False, inserted_id=None)
        return InsertResult(acknowledged=True, inserted_id=identity)

    async def update_one(self, identity: str, partial: Document) -> UpdateResult:
        changes = {key: value for key, value in partial.items() if key != "_id"}
        stmt = (
            update(self.table)
            .where(self.table.identifier == identity)
            .values(
                doc=self.table.doc.op("||", return_type=JSONB)(literal(changes, JSONB)),
                updated_at=func.now(),
            )
        )
        async with session_context(self._session_factory) as session:
            result = await session.execute(stmt)
            return UpdateResult(acknowledged=True, matched_count=result.rowcount or 0)

    async def find_one_and_delete(self, identity: str) -> Document | None:
        stmt = (
            delete(self.table)
            .where(self.table.identifier == identity)
            .returning(self.table.doc)
        )
        async with session_context(self._session_factory) as session:
            result = await session.execute(stmt)
            return result.scalar_one_or_none()

    async def delete_many(self, filter: Filter | None = None) -> int:
        stmt = delete(self.table)
        if filter is not None:
            stmt = stmt.where(filter.to_clause(self.table.doc))
        async with session_context(self._session_factory) as session:
            result = await session.execute(stmt)
            return result.rowcount or 0

    async def count(self, filter: Filter | None = None) -> int:
        stmt = select(func.count()).select_from(self.table)
        if filter is not None:
            stmt = stmt.where(filter.to_clause(self.table.doc))
        async with session_context(self._session_factory) as session:
            result = await session.execute(stmt)
            return int(result.scalar_one())


class PostgresDocumentStore(DocumentStore):
    """Document store on PostgreSQL JSONB tables."""

    def __init__(self, engine: AsyncEngine) -> None:
        self.engine = engine
        session_factory = create_session_factory(engine)
        self.authors = PostgresCollection(AuthorTable, session_factory)
        self.books = PostgresCollection(BookTable, session_factory)

    @classmethod
    def from_settings(cls, settings: Settings) -> "PostgresDocumentStore":
        return cls(create_engine(settings))

    async def start(self) -> None:
        """Create tables if they do not exist."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Document store ready (postgres)")

    async def close(self) -> None:
        await self.engine.dispose()

    async def health_check(self) -> bool:
        return await ping(self.engine)
