"""Record store and repositories for MindTrack services.

The store is a key-value collaborator with per-family id counters; the
in-memory implementation backs development and tests.
"""

from .record_store import (
    RecordStore,
    InMemoryRecordStore,
    StoreError,
)
from .repository import (
    BaseRepository,
    OwnedRepository,
)

__all__ = [
    "RecordStore",
    "InMemoryRecordStore",
    "StoreError",
    "BaseRepository",
    "OwnedRepository",
]
