"""Tests for the cache-aside helper."""

import pytest

from folio.cache.redis import RedisCache
from folio.catalog.cache_aside import CacheAside
from folio.core.model import Author
from folio.core.snapshots import AuthorListSnapshot, AuthorSnapshot, encode_snapshot


@pytest.fixture
def cache(fake_redis) -> CacheAside:
    return CacheAside(RedisCache(fake_redis), listing_ttl=3600)


@pytest.fixture
def sample_author() -> Author:
    return Author(
        _id="3f2504e0-4f89-11d3-9a0c-0305e82c3301",
        first_name="Ursula",
        last_name="Le Guin",
        date_of_birth="10/21/1929",
        hometownCity="Berkeley",
        hometownState="CA",
    )


class Loader:
    """Async loader that counts its invocations."""

    def __init__(self, value):
        self.value = value
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        return self.value


class TestLookup:
    """Test cached snapshot reads."""

    @pytest.mark.asyncio
    async def test_miss_skips_get(self, cache: CacheAside, fake_redis) -> None:
        """A missing key is detected by EXISTS alone."""
        assert await cache.lookup("author:x", AuthorSnapshot) is None
        assert fake_redis.calls["get"] == 0

    @pytest.mark.asyncio
    async def test_hit(self, cache: CacheAside, sample_author: Author) -> None:
        await cache.store("author:x", AuthorSnapshot(data=sample_author))

        snapshot = await cache.lookup("author:x", AuthorSnapshot)
        assert snapshot is not None
        assert snapshot.data == sample_author

    @pytest.mark.asyncio
    async def test_redis_down_is_a_miss(self, cache: CacheAside, fake_redis) -> None:
        fake_redis.fail = True

        assert await cache.lookup("author:x", AuthorSnapshot) is None

    @pytest.mark.asyncio
    async def test_undecodable_is_a_miss(self, cache: CacheAside, fake_redis) -> None:
        fake_redis.data["author:x"] = b"{not json"

        assert await cache.lookup("author:x", AuthorSnapshot) is None

    @pytest.mark.asyncio
    async def test_wrong_kind_is_a_miss(
        self, cache: CacheAside, fake_redis, sample_author: Author
    ) -> None:
        fake_redis.data["authors"] = encode_snapshot(AuthorSnapshot(data=sample_author))

        assert await cache.lookup("authors", AuthorListSnapshot) is None


class TestWrites:
    """Test best-effort cache writes."""

    @pytest.mark.asyncio
    async def test_store_without_ttl(
        self, cache: CacheAside, fake_redis, sample_author: Author
    ) -> None:
        await cache.store("author:x", AuthorSnapshot(data=sample_author))

        assert "author:x" in fake_redis.data
        assert "author:x" not in fake_redis.ttls

    @pytest.mark.asyncio
    async def test_store_with_ttl(
        self, cache: CacheAside, fake_redis, sample_author: Author
    ) -> None:
        await cache.store("authors", AuthorListSnapshot(data=[sample_author]), ttl=60)

        assert fake_redis.ttls["authors"] == 60

    @pytest.mark.asyncio
    async def test_failures_are_absorbed(
        self, cache: CacheAside, fake_redis, sample_author: Author
    ) -> None:
        fake_redis.fail = True

        await cache.store("author:x", AuthorSnapshot(data=sample_author))
        await cache.evict("author:x")
        assert await cache.contains("author:x") is False


class TestReadThrough:
    """Test read-through population."""

    @pytest.mark.asyncio
    async def test_populates_then_serves_from_cache(
        self, cache: CacheAside, sample_author: Author
    ) -> None:
        load = Loader(sample_author)

        first = await cache.read_through("author:x", AuthorSnapshot, load)
        second = await cache.read_through("author:x", AuthorSnapshot, load)

        assert first == second == sample_author
        assert load.calls == 1

    @pytest.mark.asyncio
    async def test_absent_value_not_cached(self, cache: CacheAside, fake_redis) -> None:
        load = Loader(None)

        assert await cache.read_through("author:x", AuthorSnapshot, load) is None
        assert "author:x" not in fake_redis.data

    @pytest.mark.asyncio
    async def test_listing_uses_listing_ttl(
        self, cache: CacheAside, fake_redis, sample_author: Author
    ) -> None:
        result = await cache.read_listing("authors", AuthorListSnapshot, Loader([sample_author]))

        assert result == [sample_author]
        assert fake_redis.ttls["authors"] == 3600

    @pytest.mark.asyncio
    async def test_redis_down_falls_back_to_loader(
        self, cache: CacheAside, fake_redis, sample_author: Author
    ) -> None:
        fake_redis.fail = True
        load = Loader(sample_author)

        assert await cache.read_through("author:x", AuthorSnapshot, load) == sample_author
        assert load.calls == 1


class TestRefreshIfCached:
    """Test conditional refresh of single-entity entries."""

    @pytest.mark.asyncio
    async def test_not_cached_is_left_alone(
        self, cache: CacheAside, fake_redis, sample_author: Author
    ) -> None:
        load = Loader(sample_author)

        await cache.refresh_if_cached("author:x", AuthorSnapshot, load)

        assert load.calls == 0
        assert "author:x" not in fake_redis.data

    @pytest.mark.asyncio
    async def test_cached_entry_is_overwritten(
        self, cache: CacheAside, sample_author: Author
    ) -> None:
        await cache.store("author:x", AuthorSnapshot(data=sample_author))
        renamed = sample_author.model_copy(update={"first_name": "U. K."})

        await cache.refresh_if_cached("author:x", AuthorSnapshot, Loader(renamed))

        snapshot = await cache.lookup("author:x", AuthorSnapshot)
        assert snapshot is not None
        assert snapshot.data.first_name == "U. K."

    @pytest.mark.asyncio
    async def test_vanished_document_is_evicted(
        self, cache: CacheAside, fake_redis, sample_author: Author
    ) -> None:
        await cache.store("author:x", AuthorSnapshot(data=sample_author))

        await cache.refresh_if_cached("author:x", AuthorSnapshot, Loader(None))

        assert "author:x" not in fake_redis.data
