"""Lookup policy for append-only journals."""

import logging
from collections.abc import Iterable
from datetime import datetime, timezone

from kvcache.core.entities.cache_record import CacheRecord

logger = logging.getLogger(__name__)


def find_valid_record(
    records: Iterable[CacheRecord],
    key: str,
    now: datetime | None = None,
) -> CacheRecord | None:
    """Find the first valid record for a key in journal order.

    Records are examined oldest first. The first record whose key
    matches and which has not expired wins, even when a later record
    for the same key exists further down the journal: a newer write is
    only observed once every earlier valid record has expired.

    Records for other keys are skipped. They only appear when two keys
    map to the same journal file.

    Args:
        records: Journal records in file order. Consumed lazily, and
            not past the first valid match.
        key: The requested cache key.
        now: Instant used for expiry checks. Defaults to the current time.

    Returns:
        The first valid matching record, or None if there is none.

    Raises:
        RecordDecodeError: Propagated from ``records`` when the journal
            is corrupt before a match is found.
    """
    if now is None:
        now = datetime.now(timezone.utc)

    for record in records:
        if record.key != key:
            logger.warning(
                "Journal for key %r holds a record for key %r, skipping",
                key,
                record.key,
            )
            continue

        if record.is_valid(now):
            return record

    return None
