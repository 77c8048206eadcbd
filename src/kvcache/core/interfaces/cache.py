"""Cache driver interface."""

from datetime import timedelta
from typing import Any, Protocol

from kvcache.core.entities.cache_item import CacheItem


class ICache(Protocol):
    """Contract for cache storage drivers.

    All drivers implement this protocol so callers can swap storage
    without changing code. Methods are synchronous and may block on
    I/O for the duration of the call.
    """

    def set(self, key: str, value: Any, ttl: timedelta | None = None) -> None:
        """Store value with optional TTL.

        Args:
            key: The cache key.
            value: The value to store. None is ignored and nothing is written.
            ttl: Optional time-to-live. If None, uses driver default.
        """
        ...

    def get(self, key: str) -> CacheItem | None:
        """Retrieve cached item by key.

        Args:
            key: The cache key to retrieve.

        Returns:
            The cached item, or None if not found or expired.
        """
        ...

    def delete(self, key: str) -> bool:
        """Delete cached value.

        Args:
            key: The cache key to delete.

        Returns:
            True if the key existed and was deleted, False otherwise.
        """
        ...

    def flush(self) -> None:
        """Remove all cached values."""
        ...

    def has(self, key: str) -> bool:
        """Check if a valid value is cached for key.

        Args:
            key: The cache key to check.

        Returns:
            True if ``get`` would return an item, False otherwise.
        """
        ...
