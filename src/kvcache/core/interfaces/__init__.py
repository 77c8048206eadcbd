"""Core interfaces (Protocol classes) for kvcache."""

from kvcache.core.interfaces.cache import ICache
from kvcache.core.interfaces.key_mapper import IKeyMapper
from kvcache.core.interfaces.record_codec import IRecordCodec
from kvcache.core.interfaces.serializer import ISerializer

__all__ = [
    "ICache",
    "IKeyMapper",
    "IRecordCodec",
    "ISerializer",
]
