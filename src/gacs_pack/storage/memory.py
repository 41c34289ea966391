"""In-process snapshot store."""

import threading
from typing import Any, Dict, Optional

from ..ports import SnapshotStore


class InMemorySnapshotStore(SnapshotStore):
    """Snapshots kept in a dict keyed by context pack id.

    Saving an id that already exists replaces the entry, so repeated and
    concurrent saves of the same content converge on one record.
    """

    def __init__(self):
        self._records: Dict[str, Dict[str, Any]] = {}
        self._lock = threading.Lock()

    def save(self, *, id: str, snapshot: Any, meta: Dict[str, Any]) -> None:
        with self._lock:
            self._records[id] = {"snapshot": snapshot, "meta": dict(meta)}

    def load(self, id: str) -> Optional[Any]:
        """Return the stored snapshot, or None."""
        record = self._records.get(id)
        return record["snapshot"] if record else None

    def meta(self, id: str) -> Optional[Dict[str, Any]]:
        record = self._records.get(id)
        return dict(record["meta"]) if record else None

    def __contains__(self, id: str) -> bool:
        return id in self._records

    def __len__(self) -> int:
        return len(self._records)
