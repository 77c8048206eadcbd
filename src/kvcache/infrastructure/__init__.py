"""Infrastructure layer implementations for kvcache."""

from kvcache.infrastructure.backends import InMemoryCache, LocalFileCache
from kvcache.infrastructure.codecs import JsonLinesRecordCodec, RecordDecodeError
from kvcache.infrastructure.journal import JournalStore
from kvcache.infrastructure.key_mappers import DigestKeyMapper
from kvcache.infrastructure.serializers import JsonSerializer, SerializationError

__all__ = [
    "LocalFileCache",
    "InMemoryCache",
    "DigestKeyMapper",
    "JsonLinesRecordCodec",
    "JournalStore",
    "JsonSerializer",
    "RecordDecodeError",
    "SerializationError",
]
