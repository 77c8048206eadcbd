"""Domain entities for kvcache."""

from kvcache.core.entities.cache_config import CacheConfig
from kvcache.core.entities.cache_item import CacheItem
from kvcache.core.entities.cache_record import CacheRecord

__all__ = [
    "CacheConfig",
    "CacheItem",
    "CacheRecord",
]
