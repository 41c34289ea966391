"""SQLite snapshot store for gacs-pack."""

import json
import sqlite3
from contextlib import closing, contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

from ..canonical import canonical_json
from ..ports import SnapshotStore


class SQLiteSnapshotStore(SnapshotStore):
    """SQLite storage for context pack snapshots.

    One row per context pack id. The payload column holds the canonical JSON
    of the snapshot view, so the stored bytes hash back to the id.

    Each call opens its own connection and closes it before returning, so the
    database must be a file; ":memory:" is rejected.
    """

    def __init__(self, db_path: str = "gacs_pack.db", tenant_id: Optional[str] = None):
        """Initialize SQLite storage.

        Args:
            db_path: Path to SQLite database file
            tenant_id: Optional tenant recorded with every saved pack

        Raises:
            ValueError: If db_path is ":memory:"
        """
        if str(db_path) == ":memory:":
            raise ValueError("SQLiteSnapshotStore needs a database file, not :memory:")
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.tenant_id = tenant_id
        self._init_db()

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        """Connection committed on success, rolled back on error, always closed."""
        with closing(sqlite3.connect(self.db_path)) as conn:
            with conn:
                yield conn

    def _init_db(self):
        """Initialize database tables."""
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS context_packs (
                    id TEXT PRIMARY KEY,
                    tenant_id TEXT,
                    payload TEXT NOT NULL,
                    meta TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)

            conn.execute("""
                CREATE INDEX IF NOT EXISTS idx_context_packs_tenant
                ON context_packs(tenant_id)
            """)

    def save(self, *, id: str, snapshot: Any, meta: Dict[str, Any]) -> None:
        """Upsert a snapshot keyed by its context pack id.

        Args:
            id: Content-addressed context pack id
            snapshot: Snapshot instance or an already-built view dict
            meta: Snapshot metadata (intent, role, subject_id, subject_type)
        """
        view = snapshot.to_view() if hasattr(snapshot, "to_view") else snapshot
        now = datetime.now(timezone.utc).isoformat()

        with self._connect() as conn:
            conn.execute("""
                INSERT INTO context_packs
                (id, tenant_id, payload, meta, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    payload = excluded.payload,
                    meta = excluded.meta,
                    updated_at = excluded.updated_at
            """, (
                id,
                self.tenant_id,
                canonical_json(view),
                canonical_json(meta),
                now,
                now
            ))

    def load(self, id: str) -> Optional[Dict[str, Any]]:
        """Load a stored snapshot view.

        Args:
            id: Context pack id

        Returns:
            The snapshot view or None if not found
        """
        with self._connect() as conn:
            cursor = conn.execute("""
                SELECT payload FROM context_packs WHERE id = ?
            """, (id,))

            row = cursor.fetchone()
            if row:
                return json.loads(row[0])
            return None

    def load_payload(self, id: str) -> Optional[str]:
        """Raw canonical JSON payload for an id, or None."""
        with self._connect() as conn:
            row = conn.execute(
                "SELECT payload FROM context_packs WHERE id = ?", (id,)
            ).fetchone()
            return row[0] if row else None

    def list_packs(self, tenant_id: Optional[str] = None) -> List[dict]:
        """List stored packs, newest first.

        Args:
            tenant_id: Optional filter by tenant

        Returns:
            Dicts with id, tenant_id, meta, created_at and updated_at
        """
        query = "SELECT id, tenant_id, meta, created_at, updated_at FROM context_packs"
        params: tuple = ()
        if tenant_id is not None:
            query += " WHERE tenant_id = ?"
            params = (tenant_id,)
        query += " ORDER BY created_at DESC, id"

        with self._connect() as conn:
            rows = conn.execute(query, params).fetchall()

        return [
            {
                "id": row[0],
                "tenant_id": row[1],
                "meta": json.loads(row[2]),
                "created_at": row[3],
                "updated_at": row[4],
            }
            for row in rows
        ]

    def count(self) -> int:
        """Number of stored packs."""
        with self._connect() as conn:
            return conn.execute("SELECT COUNT(*) FROM context_packs").fetchone()[0]
