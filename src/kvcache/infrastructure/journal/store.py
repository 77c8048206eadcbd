"""Append-only journal store on the local filesystem."""

import logging
import os
from collections.abc import Generator
from pathlib import Path

from kvcache.core.entities.cache_record import CacheRecord
from kvcache.core.interfaces.key_mapper import IKeyMapper
from kvcache.core.interfaces.record_codec import IRecordCodec

logger = logging.getLogger(__name__)


class JournalStore:
    """Per-key append-only record files in one directory.

    Each cache key owns one journal file named by the key mapper.
    Records are only ever appended; a journal is never truncated or
    rewritten, only removed as a whole.

    The store does no locking of its own. Callers serialize access.
    """

    def __init__(
        self,
        directory: str | os.PathLike[str],
        key_mapper: IKeyMapper,
        codec: IRecordCodec,
        dir_mode: int = 0o777,
        file_mode: int = 0o666,
    ) -> None:
        """Initialize the store, creating the directory if needed.

        Args:
            directory: Base directory holding the journal files.
            key_mapper: Maps cache keys to journal file names.
            codec: Encodes and decodes journal records.
            dir_mode: Permission bits for a newly created directory.
            file_mode: Permission bits for newly created journal files.

        Raises:
            OSError: If the directory cannot be created.
        """
        self._directory = Path(directory)
        self._key_mapper = key_mapper
        self._codec = codec
        self._file_mode = file_mode

        if not self._directory.is_dir():
            self._directory.mkdir(mode=dir_mode, parents=True, exist_ok=True)
            logger.debug("Created cache directory %s", self._directory)

    @property
    def directory(self) -> Path:
        """Return the base directory."""
        return self._directory

    def path_for(self, key: str) -> Path:
        """Return the journal path for a cache key.

        Args:
            key: The cache key.

        Returns:
            ``<directory>/<mapped name>``.
        """
        return self._directory / self._key_mapper.map(key)

    def append(self, path: Path, record: CacheRecord) -> None:
        """Append a record to a journal, creating it if absent.

        Args:
            path: The journal path.
            record: The record to append.

        Raises:
            OSError: If the file cannot be opened or written.
        """
        data = self._codec.encode(record)
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_APPEND, self._file_mode)
        with os.fdopen(fd, "ab") as journal:
            journal.write(data)

    def scan(self, path: Path) -> Generator[CacheRecord, None, None]:
        """Lazily read a journal's records in file order.

        A missing journal yields nothing. The file stays open until the
        iterator is exhausted or closed.

        Args:
            path: The journal path.

        Yields:
            Records, oldest first.

        Raises:
            RecordDecodeError: On the first malformed record.
            OSError: If the file exists but cannot be read.
        """
        try:
            journal = open(path, "rb")
        except FileNotFoundError:
            return

        with journal:
            yield from self._codec.decode(journal)

    def remove(self, path: Path) -> bool:
        """Remove a journal.

        Args:
            path: The journal path.

        Returns:
            True if the file existed and was removed, False otherwise.

        Raises:
            OSError: If the file exists but cannot be removed.
        """
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        return True

    def paths(self) -> list[Path]:
        """List the journal files currently in the directory.

        Only regular files whose names the key mapper could have
        produced are returned; anything else in the directory is left
        alone.

        Returns:
            Journal paths, in no particular order.
        """
        return [
            entry
            for entry in self._directory.iterdir()
            if entry.is_file() and self._key_mapper.is_mapped_name(entry.name)
        ]
