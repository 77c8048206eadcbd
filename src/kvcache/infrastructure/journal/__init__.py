"""Journal storage for the local file driver."""

from kvcache.infrastructure.journal.store import JournalStore

__all__ = ["JournalStore"]
