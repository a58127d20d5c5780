"""Storage adapters implementing core ports."""

from telequery.adapters.storage.in_memory import InMemoryRecordStore

__all__ = ["InMemoryRecordStore"]
