"""Reference snapshot stores."""

from .memory import InMemorySnapshotStore
from .sqlite import SQLiteSnapshotStore

__all__ = ["InMemorySnapshotStore", "SQLiteSnapshotStore"]
