"""Cache configuration entity."""

from dataclasses import dataclass
from datetime import timedelta

DEFAULT_TTL = timedelta(minutes=5)


@dataclass
class CacheConfig:
    """Cache configuration.

    Shared by every driver. Each driver reads only the options that
    concern it and ignores the rest.

    Local File Driver:
        Uses hash_algorithm to name journal files, and dir_mode and
        file_mode when creating the cache directory and journal files.

    Redis Drivers:
        Use key_prefix to namespace keys, and max_size to bound the
        process-local front cache of the optimized variant.
    """

    default_ttl: timedelta | None = None
    key_prefix: str = "kvcache"
    max_size: int = 1000

    # Local file driver settings
    hash_algorithm: str = "sha256"
    dir_mode: int = 0o777
    file_mode: int = 0o666

    def __post_init__(self) -> None:
        """Set default TTL if not provided."""
        if self.default_ttl is None:
            self.default_ttl = DEFAULT_TTL

    def resolve_ttl(self, ttl: timedelta | None) -> timedelta:
        """Return the TTL to apply for a write.

        Args:
            ttl: The TTL passed by the caller, or None.

        Returns:
            The caller's TTL, or the configured default when None.
        """
        if ttl is not None:
            return ttl
        if self.default_ttl is None:
            return DEFAULT_TTL
        return self.default_ttl
