"""Key mapper implementations."""

from kvcache.infrastructure.key_mappers.digest import DigestKeyMapper

__all__ = ["DigestKeyMapper"]
