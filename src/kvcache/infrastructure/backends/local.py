"""Local filesystem cache driver implementation."""

import logging
import os
from datetime import timedelta
from pathlib import Path
from typing import Any

from kvcache.core.entities.cache_config import CacheConfig
from kvcache.core.entities.cache_item import CacheItem
from kvcache.core.entities.cache_record import CacheRecord
from kvcache.core.interfaces.key_mapper import IKeyMapper
from kvcache.core.interfaces.record_codec import IRecordCodec
from kvcache.core.interfaces.serializer import ISerializer
from kvcache.core.services.lookup import find_valid_record
from kvcache.infrastructure.codecs.jsonl import JsonLinesRecordCodec
from kvcache.infrastructure.journal.store import JournalStore
from kvcache.infrastructure.key_mappers.digest import DigestKeyMapper
from kvcache.infrastructure.serializers.json import JsonSerializer
from kvcache.utils.locking import ReadWriteLock

logger = logging.getLogger(__name__)


class LocalFileCache:
    """Cache driver storing each key in an append-only journal file.

    Every ``set`` appends a new record to the key's journal; nothing is
    overwritten. ``get`` reads the journal from the start and returns
    the first record that is still valid, so while an earlier write for
    a key is unexpired, later writes for that key are not observed.
    ``delete`` removes the journal and with it the key's whole history.

    One reader/writer lock guards the whole instance: writes exclude
    everything else, reads run concurrently. Nothing protects the
    directory against other processes or other instances.

    Example:
        >>> cache = LocalFileCache("storage/cache")
        >>> cache.set("greeting", {"text": "hello"}, ttl=timedelta(minutes=1))
        >>> cache.get("greeting").value
        {'text': 'hello'}
    """

    def __init__(
        self,
        path: str | os.PathLike[str],
        config: CacheConfig | None = None,
        serializer: ISerializer | None = None,
        key_mapper: IKeyMapper | None = None,
        codec: IRecordCodec | None = None,
    ) -> None:
        """Initialize the driver, creating the cache directory if absent.

        Args:
            path: Directory holding the journal files.
            config: Optional cache configuration. Uses defaults if not provided.
            serializer: Converts values to payload bytes. Defaults to JSON.
            key_mapper: Maps keys to file names. Defaults to a digest
                mapper using ``config.hash_algorithm``.
            codec: Encodes journal records. Defaults to JSON Lines.

        Raises:
            OSError: If the directory cannot be created.
            ValueError: If the configured hash algorithm is unsupported.
        """
        self._config = config or CacheConfig()
        self._serializer = serializer or JsonSerializer()
        self._store = JournalStore(
            path,
            key_mapper=key_mapper or DigestKeyMapper(self._config.hash_algorithm),
            codec=codec or JsonLinesRecordCodec(),
            dir_mode=self._config.dir_mode,
            file_mode=self._config.file_mode,
        )
        self._lock = ReadWriteLock()

    @property
    def config(self) -> CacheConfig:
        """Get the cache configuration."""
        return self._config

    @property
    def path(self) -> Path:
        """Return the cache directory."""
        return self._store.directory

    def path_for(self, key: str) -> Path:
        """Return the journal file used for a key."""
        return self._store.path_for(key)

    def set(self, key: str, value: Any, ttl: timedelta | None = None) -> None:
        """Append a new record for key.

        A None value is ignored: nothing is written and the key's
        existing state is left as is.

        Args:
            key: The cache key.
            value: The value to store.
            ttl: Optional time-to-live. If None, uses config default.
                Zero or negative writes a record that is already expired.

        Raises:
            SerializationError: If the value cannot be serialized.
            OSError: If the journal cannot be written.
        """
        with self._lock.write_locked():
            if value is None:
                return

            payload = self._serializer.serialize(value)
            record = CacheRecord.create(key, payload, self._config.resolve_ttl(ttl))
            path = self._store.path_for(key)
            self._store.append(path, record)
            logger.debug("Appended record for key %r to %s", key, path.name)

    def get(self, key: str) -> CacheItem | None:
        """Look up the first valid record for key.

        Args:
            key: The cache key to retrieve.

        Returns:
            The cached item, or None if the key has no valid record.

        Raises:
            RecordDecodeError: If the journal is corrupt before a match.
            SerializationError: If the stored payload cannot be decoded.
            OSError: If the journal exists but cannot be read.
        """
        with self._lock.read_locked():
            record = self._find(key)
            if record is None:
                return None
            return CacheItem.from_record(
                record, self._serializer.deserialize(record.value)
            )

    def delete(self, key: str) -> bool:
        """Remove the journal for key.

        Args:
            key: The cache key to delete.

        Returns:
            True if a journal existed and was removed, False otherwise.

        Raises:
            OSError: If the journal exists but cannot be removed.
        """
        with self._lock.write_locked():
            removed = self._store.remove(self._store.path_for(key))
            if removed:
                logger.debug("Deleted journal for key %r", key)
            return removed

    def flush(self) -> None:
        """Remove every journal in the cache directory.

        Files the key mapper could not have produced are left alone.

        Raises:
            OSError: If a journal cannot be removed.
        """
        with self._lock.write_locked():
            count = 0
            for path in self._store.paths():
                if self._store.remove(path):
                    count += 1
            logger.debug("Flushed %d journals from %s", count, self._store.directory)

    def has(self, key: str) -> bool:
        """Check if key has a valid record.

        Args:
            key: The cache key to check.

        Returns:
            True if ``get`` would return an item, False otherwise.
        """
        with self._lock.read_locked():
            return self._find(key) is not None

    def _find(self, key: str) -> CacheRecord | None:
        """Scan key's journal with the lookup policy. Caller holds the lock."""
        records = self._store.scan(self._store.path_for(key))
        try:
            return find_valid_record(records, key)
        finally:
            records.close()
