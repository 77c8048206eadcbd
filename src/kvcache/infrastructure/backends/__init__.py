"""Cache driver implementations."""

from kvcache.infrastructure.backends.local import LocalFileCache
from kvcache.infrastructure.backends.memory import InMemoryCache

__all__ = ["InMemoryCache", "LocalFileCache"]
