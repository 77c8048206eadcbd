"""Tests for InMemoryCache."""

from datetime import timedelta

import pytest

from kvcache.core.entities import CacheConfig
from kvcache.core.entities.cache_record import MAX_INSTANT
from kvcache.infrastructure.backends.memory import InMemoryCache


class FakeTimer:
    """Manually advanced clock for expiry tests."""

    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


class TestInMemoryCache:
    """Tests for InMemoryCache."""

    @pytest.fixture
    def timer(self) -> FakeTimer:
        """Create a controllable clock."""
        return FakeTimer()

    @pytest.fixture
    def cache(self, timer: FakeTimer) -> InMemoryCache:
        """Create a driver for testing."""
        return InMemoryCache(config=CacheConfig(max_size=100), timer=timer)

    def test_set_and_get(self, cache: InMemoryCache) -> None:
        """Test basic set and get operations."""
        cache.set("key1", {"a": 1})

        item = cache.get("key1")

        assert item is not None
        assert item.key == "key1"
        assert item.value == {"a": 1}
        assert item.ttl == timedelta(minutes=5)

    def test_get_missing_key(self, cache: InMemoryCache) -> None:
        """Test getting a missing key returns None."""
        assert cache.get("nonexistent") is None

    def test_get_returns_copy(self, cache: InMemoryCache) -> None:
        """Test mutating a returned value does not change the cache."""
        cache.set("key1", {"items": [1]})

        cache.get("key1").value["items"].append(2)

        assert cache.get("key1").value == {"items": [1]}

    def test_set_none_is_noop(self, cache: InMemoryCache) -> None:
        """Test setting None leaves the previous value."""
        cache.set("key1", "value1")
        cache.set("key1", None)

        assert cache.get("key1").value == "value1"

    def test_set_overwrites(self, cache: InMemoryCache) -> None:
        """Test a later set replaces the value."""
        cache.set("key1", "A")
        cache.set("key1", "B")

        assert cache.get("key1").value == "B"

    def test_per_item_ttl(self, cache: InMemoryCache, timer: FakeTimer) -> None:
        """Test each item expires on its own TTL."""
        cache.set("short", "s", ttl=timedelta(seconds=10))
        cache.set("long", "l", ttl=timedelta(seconds=60))

        timer.now += 11

        assert cache.get("short") is None
        assert cache.get("long").value == "l"
        assert cache.has("short") is False

    def test_huge_ttl_never_expires(self, cache: InMemoryCache, timer: FakeTimer) -> None:
        """Test a TTL past the datetime range is clamped, not rejected."""
        cache.set("key1", "value1", ttl=timedelta(days=365 * 9000))
        timer.now += 10**9

        item = cache.get("key1")

        assert item.value == "value1"
        assert item.expires_at == MAX_INSTANT

    def test_zero_ttl_removes_previous(self, cache: InMemoryCache) -> None:
        """Test a zero TTL write leaves nothing behind."""
        cache.set("key1", "A")
        cache.set("key1", "B", ttl=timedelta(0))

        assert cache.get("key1") is None

    def test_delete(self, cache: InMemoryCache) -> None:
        """Test deleting a key."""
        cache.set("key1", "value1")

        assert cache.delete("key1") is True
        assert cache.get("key1") is None
        assert cache.delete("key1") is False

    def test_has(self, cache: InMemoryCache) -> None:
        """Test checking if key exists."""
        cache.set("key1", "value1")

        assert cache.has("key1") is True
        assert cache.has("nonexistent") is False

    def test_flush(self, cache: InMemoryCache) -> None:
        """Test clearing all keys."""
        cache.set("key1", "value1")
        cache.set("key2", "value2")
        cache.set("key3", "value3")

        cache.flush()

        assert cache.get("key1") is None
        assert cache.get("key2") is None
        assert cache.get("key3") is None
        assert len(cache) == 0

    def test_size_bounded(self, timer: FakeTimer) -> None:
        """Test the cache never holds more than maxsize items."""
        cache = InMemoryCache(config=CacheConfig(max_size=3), timer=timer)

        for i in range(10):
            cache.set(f"key{i}", i)

        assert len(cache) == 3
        assert cache.get("key9").value == 9

    def test_maxsize_property(self) -> None:
        """Test maxsize property."""
        cache = InMemoryCache(config=CacheConfig(max_size=500))
        assert cache.maxsize == 500
