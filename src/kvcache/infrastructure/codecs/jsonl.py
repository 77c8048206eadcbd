"""JSON Lines record codec implementation."""

import base64
import binascii
import json
from collections.abc import Iterator
from datetime import datetime, timedelta, timezone
from typing import Any, BinaryIO

from kvcache.core.entities.cache_record import CacheRecord

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class RecordDecodeError(ValueError):
    """Raised when a journal record cannot be decoded."""

    def __init__(self, message: str, line: int | None = None) -> None:
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class JsonLinesRecordCodec:
    """Codec writing one JSON object per line.

    Each line holds the record's key, its payload as base64, and its
    expiration and creation instants as integer nanoseconds since the
    Unix epoch::

        {"key": "user:1", "value": "eyJpZCI6IDF9", "expiration": 1700000300000000000, "created_at": 1700000000000000000}
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        """Initialize the codec.

        Args:
            encoding: Character encoding of journal lines.
        """
        self._encoding = encoding

    def encode(self, record: CacheRecord) -> bytes:
        """Encode a record as a newline-terminated JSON line.

        Args:
            record: The record to encode.

        Returns:
            The encoded line as bytes.
        """
        data = {
            "key": record.key,
            "value": base64.b64encode(record.value).decode("ascii"),
            "expiration": _to_nanos(record.expiration),
            "created_at": _to_nanos(record.created_at),
        }
        line = json.dumps(data, ensure_ascii=False)
        return (line + "\n").encode(self._encoding)

    def decode(self, stream: BinaryIO) -> Iterator[CacheRecord]:
        """Lazily decode records from a binary stream.

        Blank lines are skipped. Reaching the end of the stream ends
        the sequence.

        Args:
            stream: A binary stream of JSON lines.

        Yields:
            Records in stream order.

        Raises:
            RecordDecodeError: On the first malformed line.
        """
        for number, raw in enumerate(stream, start=1):
            if not raw.strip():
                continue
            yield self.decode_line(raw, line=number)

    def decode_line(self, raw: bytes, line: int | None = None) -> CacheRecord:
        """Decode a single JSON line into a record.

        Args:
            raw: The encoded line, with or without its newline.
            line: Optional line number used in error messages.

        Returns:
            The decoded record.

        Raises:
            RecordDecodeError: If the line is not a valid record.
        """
        try:
            data = json.loads(raw.decode(self._encoding))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise RecordDecodeError(f"invalid record: {e}", line) from e

        if not isinstance(data, dict):
            raise RecordDecodeError("record is not a JSON object", line)

        key = _field(data, "key", str, line)
        encoded_value = _field(data, "value", str, line)
        expiration = _field(data, "expiration", int, line)
        created_at = _field(data, "created_at", int, line)

        try:
            value = base64.b64decode(encoded_value, validate=True)
        except binascii.Error as e:
            raise RecordDecodeError(f"invalid value payload: {e}", line) from e

        try:
            return CacheRecord(
                key=key,
                value=value,
                expiration=_from_nanos(expiration),
                created_at=_from_nanos(created_at),
            )
        except OverflowError as e:
            raise RecordDecodeError(f"timestamp out of range: {e}", line) from e


def _field(data: dict[str, Any], name: str, kind: type, line: int | None) -> Any:
    """Fetch a required field of the given type from a decoded record."""
    if name not in data:
        raise RecordDecodeError(f"missing field {name!r}", line)
    value = data[name]
    # bool is a subclass of int, but never a valid timestamp
    if not isinstance(value, kind) or isinstance(value, bool):
        raise RecordDecodeError(
            f"field {name!r} must be {kind.__name__}, got {type(value).__name__}",
            line,
        )
    return value


def _to_nanos(instant: datetime) -> int:
    delta = instant - _EPOCH
    return (delta // timedelta(microseconds=1)) * 1000


def _from_nanos(nanos: int) -> datetime:
    return _EPOCH + timedelta(microseconds=nanos // 1000)
