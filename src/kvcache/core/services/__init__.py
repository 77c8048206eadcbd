"""Domain services for kvcache."""

from kvcache.core.services.lookup import find_valid_record

__all__ = [
    "find_valid_record",
]
