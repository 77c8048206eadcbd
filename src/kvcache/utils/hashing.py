"""Hashing utilities for cache key generation."""

import base64
import hashlib
import json
from typing import Any


def hash_value(value: Any) -> str:
    """Create a deterministic hash of a value.

    Args:
        value: Any JSON-serializable value.

    Returns:
        A hexadecimal hash string (first 16 chars of SHA-256).
    """
    if value is None:
        return "none"

    # Normalize to JSON with sorted keys for determinism
    normalized = json.dumps(value, sort_keys=True, default=str)
    return hashlib.sha256(normalized.encode()).hexdigest()[:16]


def encode_key(key: str) -> bytes:
    """Encode a raw cache key into the base64 alphabet.

    Args:
        key: The cache key, any string.

    Returns:
        The standard base64 encoding of the key's UTF-8 bytes.
    """
    return base64.b64encode(key.encode("utf-8"))


def digest_key(key: str, algorithm: str = "sha256") -> str:
    """Digest a cache key into a fixed-width hexadecimal string.

    The key is base64-encoded first, then hashed, so the result only
    contains ``[0-9a-f]`` regardless of what the key contains.

    Args:
        key: The cache key.
        algorithm: Any algorithm name accepted by :func:`hashlib.new`.

    Returns:
        The lowercase hex digest of the encoded key.

    Raises:
        ValueError: If the algorithm is not supported.
    """
    return hashlib.new(algorithm, encode_key(key)).hexdigest()
