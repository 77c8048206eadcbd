"""In-memory cache driver implementation."""

import threading
import time
from datetime import datetime, timedelta, timezone
from typing import Any, NamedTuple

from cachetools import TLRUCache  # type: ignore[import-untyped]

from kvcache.core.entities.cache_config import CacheConfig
from kvcache.core.entities.cache_item import CacheItem
from kvcache.core.entities.cache_record import expiration_after
from kvcache.core.interfaces.serializer import ISerializer
from kvcache.infrastructure.serializers.json import JsonSerializer


class _Slot(NamedTuple):
    payload: bytes
    created_at: datetime
    expires_at: datetime


def _time_to_use(_key: str, slot: _Slot, now: float) -> float:
    return now + (slot.expires_at - slot.created_at).total_seconds()


class InMemoryCache:
    """In-memory cache driver using LRU with per-item TTL.

    Suitable for single-process deployments and tests. Uses cachetools'
    TLRUCache so each item expires on its own TTL, and the least
    recently used item is evicted once maxsize is reached.

    Values are serialized on the way in, so callers get a fresh copy
    on every ``get`` and mutating it does not touch the cache.
    """

    def __init__(
        self,
        config: CacheConfig | None = None,
        serializer: ISerializer | None = None,
        timer: Any = time.monotonic,
    ) -> None:
        """Initialize the in-memory cache driver.

        Args:
            config: Optional cache configuration. Uses defaults if not provided.
                ``max_size`` bounds the number of items.
            serializer: Converts values to payload bytes. Defaults to JSON.
            timer: Clock used for expiry, in seconds.
        """
        self._config = config or CacheConfig()
        self._serializer = serializer or JsonSerializer()
        self._cache: TLRUCache[str, _Slot] = TLRUCache(
            maxsize=self._config.max_size,
            ttu=_time_to_use,
            timer=timer,
        )
        # cachetools caches are not thread-safe
        self._lock = threading.RLock()

    def set(self, key: str, value: Any, ttl: timedelta | None = None) -> None:
        """Store value with optional TTL.

        Args:
            key: The cache key.
            value: The value to store. None is ignored.
            ttl: Optional time-to-live. If None, uses config default.
        """
        if value is None:
            return

        payload = self._serializer.serialize(value)
        now = datetime.now(timezone.utc)
        slot = _Slot(payload, now, expiration_after(now, self._config.resolve_ttl(ttl)))
        with self._lock:
            # TLRUCache skips already-expired items without evicting the old one
            self._cache.pop(key, None)
            self._cache[key] = slot

    def get(self, key: str) -> CacheItem | None:
        """Retrieve cached item by key.

        Args:
            key: The cache key to retrieve.

        Returns:
            The cached item, or None if not found or expired.
        """
        with self._lock:
            slot = self._cache.get(key)
        if slot is None:
            return None
        return CacheItem(
            key=key,
            value=self._serializer.deserialize(slot.payload),
            created_at=slot.created_at,
            expires_at=slot.expires_at,
        )

    def delete(self, key: str) -> bool:
        """Delete cached value.

        Args:
            key: The cache key to delete.

        Returns:
            True if the key existed and was deleted, False otherwise.
        """
        with self._lock:
            present = key in self._cache
            self._cache.pop(key, None)
            return present

    def flush(self) -> None:
        """Clear all cached values."""
        with self._lock:
            self._cache.clear()

    def has(self, key: str) -> bool:
        """Check if key exists in cache.

        Args:
            key: The cache key to check.

        Returns:
            True if the key exists, False otherwise.
        """
        with self._lock:
            return key in self._cache

    def __len__(self) -> int:
        """Return the number of items in the cache."""
        with self._lock:
            self._cache.expire()
            return len(self._cache)

    @property
    def maxsize(self) -> int:
        """Return the maximum size of the cache."""
        return int(self._cache.maxsize)
