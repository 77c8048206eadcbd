"""kvcache - Pluggable key-value cache with a local filesystem driver.

A Python library offering one synchronous cache contract
(set/get/delete/flush/has) over interchangeable storage drivers:
an append-only journal per key on the local filesystem, a
process-local LRU cache, and Redis (``kvcache_redis``, installed
with the ``redis`` extra).

Example with the local file driver:
    from datetime import timedelta

    from kvcache import CacheConfig, LocalFileCache

    cache = LocalFileCache(
        "storage/cache",
        config=CacheConfig(default_ttl=timedelta(minutes=10)),
    )

    cache.set("user:1", {"id": 1, "name": "Alice"})
    item = cache.get("user:1")
    if item is not None:
        print(item.value, item.expires_at)

    cache.delete("user:1")

Memoizing functions:
    from kvcache import cached, configure

    configure(cache)

    @cached(ttl=timedelta(minutes=5), key="user:{id}")
    def load_user(id: int) -> dict:
        return db.load_user(id)
"""

from kvcache.core.entities import CacheConfig, CacheItem, CacheRecord
from kvcache.core.interfaces import (
    ICache,
    IKeyMapper,
    IRecordCodec,
    ISerializer,
)
from kvcache.core.services import find_valid_record
from kvcache.decorators import cached, configure, invalidates
from kvcache.infrastructure import (
    DigestKeyMapper,
    InMemoryCache,
    JournalStore,
    JsonLinesRecordCodec,
    JsonSerializer,
    LocalFileCache,
    RecordDecodeError,
    SerializationError,
)
from kvcache.utils.locking import ReadWriteLock

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Core entities
    "CacheConfig",
    "CacheItem",
    "CacheRecord",
    # Core interfaces
    "ICache",
    "IKeyMapper",
    "IRecordCodec",
    "ISerializer",
    # Core services
    "find_valid_record",
    # Drivers
    "LocalFileCache",
    "InMemoryCache",
    # Infrastructure implementations
    "DigestKeyMapper",
    "JsonLinesRecordCodec",
    "JournalStore",
    "JsonSerializer",
    "ReadWriteLock",
    # Errors
    "RecordDecodeError",
    "SerializationError",
    # Decorators
    "cached",
    "invalidates",
    "configure",
]
