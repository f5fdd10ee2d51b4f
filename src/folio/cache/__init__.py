"""Cache layer for Folio.

Provides Redis caching with the cache-aside pattern:
- Single-entity snapshots with no expiry, refreshed or evicted on write
- Collection and query listings with a one-hour TTL, never evicted on write
"""

from folio.cache.keys import CacheKeys
from folio.cache.redis import DEFAULT_TTL, RedisCache, RedisConnection

__all__ = [
    "CacheKeys",
    "RedisCache",
    "RedisConnection",
    "DEFAULT_TTL",
]
