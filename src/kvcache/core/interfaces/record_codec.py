"""Record codec interface."""

from collections.abc import Iterator
from typing import BinaryIO, Protocol

from kvcache.core.entities.cache_record import CacheRecord


class IRecordCodec(Protocol):
    """Contract for encoding journal records.

    Records are self-delimiting, so a stream of concatenated records
    can be decoded from the start without knowing how many there are.
    """

    def encode(self, record: CacheRecord) -> bytes:
        """Encode a single record.

        Args:
            record: The record to encode.

        Returns:
            The encoded record, including its delimiter.
        """
        ...

    def decode(self, stream: BinaryIO) -> Iterator[CacheRecord]:
        """Lazily decode records from a binary stream.

        Args:
            stream: A stream positioned at the start of a record.

        Yields:
            Records in stream order.

        Raises:
            RecordDecodeError: On the first malformed record.
        """
        ...
