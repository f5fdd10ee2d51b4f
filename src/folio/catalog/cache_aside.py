"""Cache-aside helper shared by the author and book services.

Reads: existence check, then get, then snapshot decode. Any failure along
that path (Redis unreachable, entry expired between EXISTS and GET, a blob
that does not decode as the expected snapshot kind) is a miss, and the
caller falls back to the store.

Writes: every cache write or eviction is best effort. Failures are logged
and absorbed so they never change the outcome of an authoritative write.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from redis.exceptions import RedisError

from folio.cache.redis import DEFAULT_TTL, RedisCache
from folio.core.errors import SnapshotError
from folio.core.snapshots import Snapshot, decode_snapshot, encode_snapshot

logger = logging.getLogger(__name__)

# Errors that mean "the cache is not usable right now"
CACHE_ERRORS: tuple[type[Exception], ...] = (RedisError, OSError)

SnapshotT = TypeVar("SnapshotT", bound=Snapshot)
T = TypeVar("T")


class CacheAside:
    """Snapshot reads and writes against the cache adapter."""

    def __init__(self, cache: RedisCache, listing_ttl: int = DEFAULT_TTL) -> None:
        self.cache = cache
        self.listing_ttl = listing_ttl

    async def lookup(self, key: str, snapshot_type: type[SnapshotT]) -> SnapshotT | None:
        """Return the cached snapshot under ``key``, or None on a miss."""
        try:
            if not await self.cache.exists(key):
                logger.debug("Cache miss: %s", key)
                return None
            raw = await self.cache.get(key)
        except CACHE_ERRORS as exc:
            logger.warning("Cache read failed for %s, falling back to store: %s", key, exc)
            return None

        if raw is None:
            logger.debug("Cache entry expired during read: %s", key)
            return None

        try:
            snapshot = decode_snapshot(snapshot_type, raw)
        except SnapshotError as exc:
            logger.warning("Discarding undecodable cache entry %s: %s", key, exc)
            return None

        logger.debug("Cache hit: %s", key)
        return snapshot

    async def contains(self, key: str) -> bool:
        try:
            return await self.cache.exists(key)
        except CACHE_ERRORS as exc:
            logger.warning("Cache existence check failed for %s: %s", key, exc)
            return False

    async def store(self, key: str, snapshot: Snapshot, ttl: int | None = None) -> None:
        """Write a snapshot; ``ttl=None`` stores without expiry."""
        try:
            payload = encode_snapshot(snapshot)
            if ttl is None:
                await self.cache.set(key, payload)
            else:
                await self.cache.set_with_expiry(key, payload, ttl)
        except CACHE_ERRORS as exc:
            logger.warning("Cache write failed for %s: %s", key, exc)

    async def evict(self, *keys: str) -> None:
        if not keys:
            return
        try:
            await self.cache.delete(*keys)
        except CACHE_ERRORS as exc:
            logger.warning("Cache eviction failed for %s: %s", ", ".join(keys), exc)

    async def read_through(
        self,
        key: str,
        snapshot_type: type[Snapshot],
        load: Callable[[], Awaitable[T | None]],
        ttl: int | None = None,
    ) -> T | None:
        """Serve from cache, or load from the store and populate the cache.

        A loader result of None is not cached and is returned as-is.
        """
        snapshot = await self.lookup(key, snapshot_type)
        if snapshot is not None:
            cached: T = snapshot.data
            return cached

        value = await load()
        if value is None:
            return None
        await self.store(key, snapshot_type(data=value), ttl)
        return value

    async def read_listing(
        self,
        key: str,
        snapshot_type: type[Snapshot],
        load: Callable[[], Awaitable[list[Any]]],
    ) -> list[Any]:
        """``read_through`` with the listing TTL."""
        result = await self.read_through(key, snapshot_type, load, ttl=self.listing_ttl)
        return result if result is not None else []

    async def refresh_if_cached(
        self,
        key: str,
        snapshot_type: type[Snapshot],
        load: Callable[[], Awaitable[Any | None]],
    ) -> None:
        """Re-populate ``key`` from the store only when it is already cached.

        If the store no longer has the document the entry is evicted.
        """
        if not await self.contains(key):
            return
        value = await load()
        if value is None:
            await self.evict(key)
            return
        await self.store(key, snapshot_type(data=value))
