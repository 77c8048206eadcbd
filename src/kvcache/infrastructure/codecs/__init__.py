"""Record codec implementations."""

from kvcache.infrastructure.codecs.jsonl import JsonLinesRecordCodec, RecordDecodeError

__all__ = ["JsonLinesRecordCodec", "RecordDecodeError"]
