"""Tests for JsonLinesRecordCodec."""

import io
import json
from datetime import datetime, timedelta, timezone

import pytest

from kvcache.core.entities import CacheRecord
from kvcache.infrastructure.codecs.jsonl import JsonLinesRecordCodec, RecordDecodeError

CREATED = datetime(2024, 1, 15, 10, 30, 0, 123456, tzinfo=timezone.utc)


class TestJsonLinesRecordCodec:
    """Tests for JsonLinesRecordCodec."""

    @pytest.fixture
    def codec(self) -> JsonLinesRecordCodec:
        """Create a codec for testing."""
        return JsonLinesRecordCodec()

    @pytest.fixture
    def record(self) -> CacheRecord:
        """Create a record for testing."""
        return CacheRecord.create("user:1", b'{"id": 1}', timedelta(minutes=5), now=CREATED)

    def test_encode_is_one_json_line(
        self, codec: JsonLinesRecordCodec, record: CacheRecord
    ) -> None:
        """Test a record encodes to a single newline-terminated object."""
        data = codec.encode(record)

        assert data.endswith(b"\n")
        assert data.count(b"\n") == 1
        obj = json.loads(data)
        assert set(obj) == {"key", "value", "expiration", "created_at"}
        assert obj["key"] == "user:1"

    def test_timestamps_are_epoch_nanoseconds(
        self, codec: JsonLinesRecordCodec, record: CacheRecord
    ) -> None:
        """Test instants are written as integer nanoseconds."""
        obj = json.loads(codec.encode(record))

        assert obj["created_at"] == 1705314600123456000
        assert obj["expiration"] == obj["created_at"] + 300 * 10**9

    def test_decode_stream(self, codec: JsonLinesRecordCodec) -> None:
        """Test decoding concatenated records in order."""
        first = CacheRecord.create("k", b"A", timedelta(hours=1), now=CREATED)
        second = CacheRecord.create("k", b"\x00\xffB\n", timedelta(hours=2), now=CREATED)
        stream = io.BytesIO(codec.encode(first) + codec.encode(second))

        assert list(codec.decode(stream)) == [first, second]

    def test_decode_empty_stream(self, codec: JsonLinesRecordCodec) -> None:
        """Test an empty stream is an empty sequence, not an error."""
        assert list(codec.decode(io.BytesIO(b""))) == []

    def test_decode_skips_blank_lines(
        self, codec: JsonLinesRecordCodec, record: CacheRecord
    ) -> None:
        """Test blank lines between records are ignored."""
        stream = io.BytesIO(b"\n" + codec.encode(record) + b"   \n")

        assert list(codec.decode(stream)) == [record]

    def test_decode_last_line_without_newline(
        self, codec: JsonLinesRecordCodec, record: CacheRecord
    ) -> None:
        """Test a complete final record without its newline still decodes."""
        stream = io.BytesIO(codec.encode(record).rstrip(b"\n"))

        assert list(codec.decode(stream)) == [record]

    def test_decode_is_lazy(self, codec: JsonLinesRecordCodec, record: CacheRecord) -> None:
        """Test records before a corrupt line are yielded first."""
        stream = io.BytesIO(codec.encode(record) + b"{not json\n")
        records = codec.decode(stream)

        assert next(records) == record
        with pytest.raises(RecordDecodeError, match="line 2"):
            next(records)

    @pytest.mark.parametrize(
        "line",
        [
            b"not json",
            b"[1, 2, 3]",
            b'{"value": "QQ==", "expiration": 1, "created_at": 1}',
            b'{"key": 1, "value": "QQ==", "expiration": 1, "created_at": 1}',
            b'{"key": "k", "value": "QQ==", "expiration": "soon", "created_at": 1}',
            b'{"key": "k", "value": "QQ==", "expiration": true, "created_at": 1}',
            b'{"key": "k", "value": "QQ==", "expiration": 1.5, "created_at": 1}',
            b'{"key": "k", "value": "not base64!", "expiration": 1, "created_at": 1}',
            b'{"key": "k", "value": "QQ==", "expiration": 1}',
            b"\xff\xfe",
        ],
    )
    def test_decode_malformed(self, codec: JsonLinesRecordCodec, line: bytes) -> None:
        """Test malformed records raise RecordDecodeError."""
        with pytest.raises(RecordDecodeError) as exc_info:
            list(codec.decode(io.BytesIO(line + b"\n")))

        assert exc_info.value.line == 1

    def test_decode_error_is_value_error(self, codec: JsonLinesRecordCodec) -> None:
        """Test RecordDecodeError can be caught as ValueError."""
        with pytest.raises(ValueError):
            codec.decode_line(b"{}")
