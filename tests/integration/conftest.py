"""Integration test fixtures.

Run against real PostgreSQL and Redis when ``FOLIO_TEST_DATABASE_URL`` and
``FOLIO_TEST_REDIS_URL`` are set; skipped otherwise.
"""

from __future__ import annotations

import os
from collections.abc import AsyncIterator

import pytest
from sqlalchemy import delete

from folio.cache.redis import RedisConnection
from folio.catalog.service import CatalogService
from folio.config import Settings
from folio.persistence.postgres import PostgresDocumentStore
from folio.persistence.tables import AuthorTable, BookTable

DATABASE_URL = os.environ.get("FOLIO_TEST_DATABASE_URL")
REDIS_URL = os.environ.get("FOLIO_TEST_REDIS_URL")


def pytest_collection_modifyitems(config, items):
    """Skip integration tests when the backing services are not configured."""
    if DATABASE_URL and REDIS_URL:
        return
    skip = pytest.mark.skip(
        reason="FOLIO_TEST_DATABASE_URL and FOLIO_TEST_REDIS_URL are not set"
    )
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip)


@pytest.fixture
async def pg_store() -> AsyncIterator[PostgresDocumentStore]:
    """PostgreSQL store with empty tables."""
    assert DATABASE_URL is not None
    store = PostgresDocumentStore.from_settings(
        Settings(database_url=DATABASE_URL, db_pool_size=2, db_max_overflow=0)
    )
    await store.start()
    async with store.engine.begin() as conn:
        await conn.execute(delete(BookTable))
        await conn.execute(delete(AuthorTable))
    yield store
    await store.close()


@pytest.fixture
async def redis_connection() -> AsyncIterator[RedisConnection]:
    """Connected Redis resource with a flushed database."""
    assert REDIS_URL is not None
    connection = RedisConnection(REDIS_URL)
    client = await connection.connect()
    await client.flushdb()
    yield connection
    await client.flushdb()
    await connection.close()


@pytest.fixture
def pg_catalog(pg_store, redis_connection) -> CatalogService:
    return CatalogService.create(pg_store, redis_connection.client)
