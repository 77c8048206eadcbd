"""Core domain layer for kvcache."""

from kvcache.core.entities import CacheConfig, CacheItem, CacheRecord
from kvcache.core.interfaces import (
    ICache,
    IKeyMapper,
    IRecordCodec,
    ISerializer,
)
from kvcache.core.services import find_valid_record

__all__ = [
    # Entities
    "CacheConfig",
    "CacheItem",
    "CacheRecord",
    # Interfaces
    "ICache",
    "IKeyMapper",
    "IRecordCodec",
    "ISerializer",
    # Services
    "find_valid_record",
]
