"""Cache item entity."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from kvcache.core.entities.cache_record import CacheRecord


@dataclass(frozen=True)
class CacheItem:
    """Immutable cache item value object.

    Returned by every driver's ``get``. Holds the deserialized value
    together with the instants it was written and expires at.
    """

    key: str
    value: Any
    created_at: datetime
    expires_at: datetime | None = None

    @property
    def ttl(self) -> timedelta | None:
        """Time-to-live the item was written with.

        Returns:
            The difference between expiry and creation, or None if the
            item never expires.
        """
        if self.expires_at is None:
            return None
        return self.expires_at - self.created_at

    @property
    def is_expired(self) -> bool:
        """Check if item has expired.

        Returns:
            True if the item has expired, False otherwise.
        """
        if self.expires_at is None:
            return False
        return datetime.now(timezone.utc) >= self.expires_at

    def remaining(self) -> timedelta | None:
        """Time left before the item expires, floored at zero."""
        if self.expires_at is None:
            return None
        left = self.expires_at - datetime.now(timezone.utc)
        return max(left, timedelta(0))

    @classmethod
    def from_record(cls, record: CacheRecord, value: Any) -> "CacheItem":
        """Build an item from a journal record and its decoded value.

        Args:
            record: The record located in the journal.
            value: The record's payload, already deserialized.

        Returns:
            A new CacheItem instance.
        """
        return cls(
            key=record.key,
            value=value,
            created_at=record.created_at,
            expires_at=record.expiration,
        )
