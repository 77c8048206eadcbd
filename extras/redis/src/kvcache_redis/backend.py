"""Redis cache driver implementation."""

import io
import logging
import threading
import time
from datetime import timedelta
from typing import Any, Optional

import redis
from cachetools import TLRUCache  # type: ignore[import-untyped]

from kvcache.core.entities.cache_config import CacheConfig
from kvcache.core.entities.cache_item import CacheItem
from kvcache.core.entities.cache_record import CacheRecord
from kvcache.core.interfaces.record_codec import IRecordCodec
from kvcache.core.interfaces.serializer import ISerializer
from kvcache.infrastructure.codecs.jsonl import JsonLinesRecordCodec
from kvcache.infrastructure.serializers.json import JsonSerializer

logger = logging.getLogger(__name__)


class RedisCache:
    """Redis cache driver for distributed deployments.

    Each key holds one encoded record, so items come back with the
    instant they were written. Expiry is delegated to Redis. Suitable
    for multi-process and distributed deployments.
    """

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379",
        config: Optional[CacheConfig] = None,
        serializer: Optional[ISerializer] = None,
        codec: Optional[IRecordCodec] = None,
        client: Optional[redis.Redis] = None,
    ) -> None:
        """Initialize the Redis cache driver.

        Args:
            redis_url: Redis connection URL. Ignored when client is given.
            config: Optional cache configuration. ``key_prefix``
                namespaces every key.
            serializer: Converts values to payload bytes. Defaults to JSON.
            codec: Encodes the stored record. Defaults to JSON Lines.
            client: An existing Redis client to use.
        """
        self._redis: redis.Redis = client if client is not None else redis.from_url(redis_url)
        self._config = config or CacheConfig()
        self._serializer = serializer or JsonSerializer()
        self._codec = codec or JsonLinesRecordCodec()

    @property
    def config(self) -> CacheConfig:
        """Get the cache configuration."""
        return self._config

    def set(self, key: str, value: Any, ttl: Optional[timedelta] = None) -> None:
        """Store value with optional TTL.

        A zero or negative TTL removes the key instead.

        Args:
            key: The cache key.
            value: The value to store. None is ignored.
            ttl: Optional time-to-live. If None, uses config default.
        """
        self._write(key, value, ttl)

    def get(self, key: str) -> Optional[CacheItem]:
        """Retrieve cached item by key.

        Args:
            key: The cache key to retrieve.

        Returns:
            The cached item, or None if not found or expired.
        """
        data = self._redis.get(self._prefixed_key(key))
        if data is None:
            return None

        record = next(iter(self._codec.decode(io.BytesIO(data))), None)
        if record is None or not record.is_valid():
            return None
        return CacheItem.from_record(record, self._serializer.deserialize(record.value))

    def delete(self, key: str) -> bool:
        """Delete cached value.

        Args:
            key: The cache key to delete.

        Returns:
            True if the key existed and was deleted, False otherwise.
        """
        result = self._redis.delete(self._prefixed_key(key))
        return result > 0

    def has(self, key: str) -> bool:
        """Check if key exists in cache.

        Args:
            key: The cache key to check.

        Returns:
            True if the key exists, False otherwise.
        """
        result = self._redis.exists(self._prefixed_key(key))
        return result > 0

    def flush(self) -> None:
        """Clear all cached values with our prefix.

        Note: This only clears keys with our prefix, not the entire Redis DB.
        """
        count = self._delete_by_pattern(f"{self._config.key_prefix}:*")
        logger.debug("Flushed %d keys with prefix %r", count, self._config.key_prefix)

    def _write(self, key: str, value: Any, ttl: Optional[timedelta]) -> Optional[CacheItem]:
        """Store value and return the item written, if any."""
        if value is None:
            return None

        prefixed_key = self._prefixed_key(key)
        effective_ttl = self._config.resolve_ttl(ttl)
        if effective_ttl <= timedelta(0):
            self._redis.delete(prefixed_key)
            return None

        payload = self._serializer.serialize(value)
        record = CacheRecord.create(key, payload, effective_ttl)
        # PX takes whole milliseconds and rejects zero
        millis = max(1, effective_ttl // timedelta(milliseconds=1))
        self._redis.set(prefixed_key, self._codec.encode(record), px=millis)
        return CacheItem.from_record(record, self._serializer.deserialize(payload))

    def _delete_by_pattern(self, pattern: str) -> int:
        """Delete keys matching a pattern using SCAN.

        Uses SCAN instead of KEYS for production safety.

        Args:
            pattern: Redis glob pattern.

        Returns:
            Number of keys deleted.
        """
        count = 0
        cursor = 0

        while True:
            cursor, keys = self._redis.scan(cursor, match=pattern, count=100)

            if keys:
                deleted = self._redis.delete(*keys)
                count += deleted

            if cursor == 0:
                break

        return count

    def _prefixed_key(self, key: str) -> str:
        """Namespace a user key under the configured prefix.

        Args:
            key: The cache key.

        Returns:
            ``<prefix>:<key>``, for every key.
        """
        return f"{self._config.key_prefix}:{key}"

    def close(self) -> None:
        """Close the Redis connection."""
        self._redis.close()

    def __enter__(self) -> "RedisCache":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type: type, exc_val: Exception, exc_tb: object) -> None:
        """Context manager exit."""
        self.close()


def _expires_at(_key: str, item: CacheItem, _now: float) -> float:
    if item.expires_at is None:
        return float("inf")
    return item.expires_at.timestamp()


class OptimizedRedisCache(RedisCache):
    """Redis cache driver with a process-local front cache.

    Items written or read through this instance are kept in a bounded
    in-process cache until they expire, so repeated reads of a hot key
    skip the network round trip. The front cache is not coherent with
    other processes: a write made elsewhere is not seen here until the
    local copy expires or is deleted through this instance.

    Front-cache hits return the same CacheItem object each time.
    """

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379",
        config: Optional[CacheConfig] = None,
        serializer: Optional[ISerializer] = None,
        codec: Optional[IRecordCodec] = None,
        client: Optional[redis.Redis] = None,
    ) -> None:
        """Initialize the driver and its front cache.

        Args:
            redis_url: Redis connection URL. Ignored when client is given.
            config: Optional cache configuration. ``max_size`` bounds
                the front cache.
            serializer: Converts values to payload bytes. Defaults to JSON.
            codec: Encodes the stored record. Defaults to JSON Lines.
            client: An existing Redis client to use.
        """
        super().__init__(
            redis_url=redis_url,
            config=config,
            serializer=serializer,
            codec=codec,
            client=client,
        )
        self._front: TLRUCache[str, CacheItem] = TLRUCache(
            maxsize=self._config.max_size,
            ttu=_expires_at,
            timer=time.time,
        )
        self._front_lock = threading.Lock()

    def set(self, key: str, value: Any, ttl: Optional[timedelta] = None) -> None:
        """Store value in Redis and keep a local copy.

        Args:
            key: The cache key.
            value: The value to store. None is ignored.
            ttl: Optional time-to-live. If None, uses config default.
        """
        if value is None:
            return

        item = self._write(key, value, ttl)
        with self._front_lock:
            self._front.pop(key, None)
            if item is not None:
                self._front[key] = item

    def get(self, key: str) -> Optional[CacheItem]:
        """Retrieve cached item, from the front cache when possible.

        Args:
            key: The cache key to retrieve.

        Returns:
            The cached item, or None if not found or expired.
        """
        with self._front_lock:
            item = self._front.get(key)
        if item is not None:
            return item

        item = super().get(key)
        if item is not None:
            with self._front_lock:
                self._front[key] = item
        return item

    def delete(self, key: str) -> bool:
        """Delete cached value locally and in Redis.

        Args:
            key: The cache key to delete.

        Returns:
            True if the key existed in Redis and was deleted, False otherwise.
        """
        with self._front_lock:
            self._front.pop(key, None)
        return super().delete(key)

    def has(self, key: str) -> bool:
        """Check if key exists locally or in Redis.

        Args:
            key: The cache key to check.

        Returns:
            True if the key exists, False otherwise.
        """
        with self._front_lock:
            if key in self._front:
                return True
        return super().has(key)

    def flush(self) -> None:
        """Clear the front cache and all prefixed keys in Redis."""
        with self._front_lock:
            self._front.clear()
        super().flush()
