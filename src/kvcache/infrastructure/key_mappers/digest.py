"""Digest key mapper implementation."""

import hashlib
import string

from kvcache.utils.hashing import digest_key

_HEX_DIGITS = frozenset(string.hexdigits.lower())


class DigestKeyMapper:
    """Key mapper using a digest of the base64-encoded key.

    Produces fixed-width lowercase hex names, so every key maps to a
    valid file name on any filesystem. Uses SHA-256 by default; MD5
    gives the shorter 32-character names used by older cache
    directories.
    """

    def __init__(self, algorithm: str = "sha256") -> None:
        """Initialize the key mapper.

        Args:
            algorithm: Digest algorithm name accepted by :func:`hashlib.new`.

        Raises:
            ValueError: If the algorithm is not supported or has no fixed
                digest size, such as the SHAKE family.
        """
        digest_size = hashlib.new(algorithm).digest_size
        if digest_size == 0:
            raise ValueError(f"digest algorithm {algorithm!r} has no fixed length")
        self._algorithm = algorithm
        self._width = digest_size * 2

    @property
    def algorithm(self) -> str:
        """Return the digest algorithm name."""
        return self._algorithm

    def map(self, key: str) -> str:
        """Map a cache key to a file name.

        Args:
            key: The cache key, any string.

        Returns:
            The hex digest of the base64-encoded key.
        """
        return digest_key(key, self._algorithm)

    def is_mapped_name(self, name: str) -> bool:
        """Check whether a name is a hex digest of the configured width.

        Args:
            name: A file name found in the cache directory.

        Returns:
            True if the name could be a journal file of this mapper.
        """
        return len(name) == self._width and all(c in _HEX_DIGITS for c in name)
