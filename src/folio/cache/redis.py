"""Redis cache adapter for Folio.

Provides async Redis operations for caching snapshot bytes.
Uses redis-py async client for connection pooling.

The connection is an explicit resource: the application creates one
``RedisConnection`` at startup, connects it, hands ``RedisCache`` instances
built on its client to the catalog services, and closes it on shutdown.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable
from typing import TYPE_CHECKING, cast

import redis.asyncio as redis

if TYPE_CHECKING:
    from redis.asyncio import Redis

logger = logging.getLogger(__name__)

# Collection and query listings expire after an hour
DEFAULT_TTL = 3600


class RedisConnection:
    """Process-wide Redis client with an explicit lifecycle."""

    def __init__(self, url: str) -> None:
        self.url = url
        self._client: Redis | None = None

    async def connect(self) -> Redis:
        """Create the client (and its connection pool) if not yet created."""
        if self._client is None:
            self._client = redis.from_url(  # type: ignore[no-untyped-call]
                self.url,
                decode_responses=False,  # We're storing bytes
            )
            logger.info("Redis client created")
        return self._client

    @property
    def client(self) -> Redis:
        if self._client is None:
            raise RuntimeError("RedisConnection.connect() has not been awaited")
        return self._client

    async def health_check(self) -> bool:
        """Check Redis connectivity."""
        if self._client is None:
            return False
        return await RedisCache(self._client).health_check()

    async def close(self) -> None:
        """Close Redis connections."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.info("Redis client closed")


class RedisCache:
    """Key/value operations used by the catalog.

    No method here swallows errors; callers decide how a cache failure
    affects the request.
    """

    def __init__(self, client: Redis):
        self.client = client

    async def exists(self, key: str) -> bool:
        return bool(await self.client.exists(key))

    async def get(self, key: str) -> bytes | None:
        return cast(bytes | None, await self.client.get(key))

    async def set(self, key: str, value: bytes) -> None:
        """Store without expiry."""
        await self.client.set(key, value)

    async def set_with_expiry(self, key: str, value: bytes, ttl: int = DEFAULT_TTL) -> None:
        await self.client.setex(key, ttl, value)

    async def delete(self, *keys: str) -> int:
        if not keys:
            return 0
        return int(await self.client.delete(*keys))

    async def health_check(self) -> bool:
        """Check Redis connectivity."""
        try:
            await cast(Awaitable[bool], self.client.ping())
            return True
        except Exception:
            return False
