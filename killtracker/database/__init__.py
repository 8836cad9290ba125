"""
Record storage for kill counts and pet drops.
"""

from .backends import (
    JsonFileBackend,
    MemoryBackend,
    PersistentStore,
    SQLiteBackend,
    open_backend,
)
from .models import KillRecord, utc_now
from .storage import AggregateStore

__all__ = [
    "JsonFileBackend",
    "MemoryBackend",
    "PersistentStore",
    "SQLiteBackend",
    "open_backend",
    "KillRecord",
    "utc_now",
    "AggregateStore",
]
