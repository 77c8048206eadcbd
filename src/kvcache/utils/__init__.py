"""Utilities shared across kvcache drivers."""

from kvcache.utils.hashing import digest_key, encode_key, hash_value
from kvcache.utils.locking import ReadWriteLock

__all__ = [
    "digest_key",
    "encode_key",
    "hash_value",
    "ReadWriteLock",
]
