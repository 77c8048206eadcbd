"""Cache record entity - the unit stored in a journal."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

MAX_INSTANT = datetime.max.replace(tzinfo=timezone.utc)
MIN_INSTANT = datetime.min.replace(tzinfo=timezone.utc)


def expiration_after(now: datetime, ttl: timedelta) -> datetime:
    """Return ``now + ttl``, clamped to the representable datetime range.

    A TTL too large to add (such as ``timedelta.max``) yields
    :data:`MAX_INSTANT`, so the record never expires in practice.
    """
    try:
        return now + ttl
    except OverflowError:
        return MAX_INSTANT if ttl > timedelta(0) else MIN_INSTANT


@dataclass(frozen=True)
class CacheRecord:
    """Immutable record written by a single Set call.

    The value is the opaque payload produced by the driver's
    serializer; the journal machinery never looks inside it.
    """

    key: str
    value: bytes
    expiration: datetime
    created_at: datetime

    def is_valid(self, now: datetime | None = None) -> bool:
        """Check whether the record has not yet expired.

        Args:
            now: Instant to compare against. Defaults to the current time.

        Returns:
            True if ``now < expiration``.
        """
        if now is None:
            now = datetime.now(timezone.utc)
        return now < self.expiration

    @classmethod
    def create(
        cls,
        key: str,
        value: bytes,
        ttl: timedelta,
        now: datetime | None = None,
    ) -> "CacheRecord":
        """Factory method to create a record expiring ``ttl`` from now.

        Args:
            key: The original cache key.
            value: The serialized payload.
            ttl: Time-to-live. Zero or negative creates an expired record.
                Values past the datetime range are clamped.
            now: Creation instant. Defaults to the current time.

        Returns:
            A new CacheRecord instance.
        """
        if now is None:
            now = datetime.now(timezone.utc)
        return cls(
            key=key,
            value=value,
            expiration=expiration_after(now, ttl),
            created_at=now,
        )
