"""
layout_engine/sqlite_store.py -- SQLite-backed layout gateway.

Keeps one dashboard layout per user in a small SQLite database, for hosts
that serve several users from one process.  Each row holds the versioned
layout document as JSON text.

Usage:
    from layout_engine.sqlite_store import SqliteLayoutGateway

    gateway = SqliteLayoutGateway("runtime/dashboard.db", user_id="u-42")
    root = gateway.load()
    gateway.save(root)
    gateway.close()
"""

import json
import logging
import os
import sqlite3

from layout_engine.errors import LayoutLoadError
from layout_engine.models.base import Container
from layout_engine.persistence import LayoutGateway, layout_from_document, layout_to_document

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Schema DDL
# ---------------------------------------------------------------------------

_SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS dashboard_layouts (
    user_id TEXT PRIMARY KEY,
    layout JSON NOT NULL,
    version INTEGER NOT NULL,
    updated_at TEXT NOT NULL
);
"""

_UPSERT_SQL = """
INSERT INTO dashboard_layouts (user_id, layout, version, updated_at)
VALUES (?, ?, ?, ?)
ON CONFLICT(user_id) DO UPDATE SET
    layout = excluded.layout,
    version = excluded.version,
    updated_at = excluded.updated_at
"""


class SqliteLayoutGateway(LayoutGateway):
    """Per-user layout storage in SQLite.

    Parameters
    ----------
    db_path : str
        Path to the database file, or ``":memory:"``.
    user_id : str
        Whose layout this gateway reads and writes.
    """

    def __init__(self, db_path: str, user_id: str):
        self.db_path = str(db_path)
        self.user_id = user_id
        if self.db_path != ":memory:":
            parent = os.path.dirname(self.db_path)
            if parent:
                os.makedirs(parent, exist_ok=True)
        self.conn = sqlite3.connect(self.db_path)
        self.conn.row_factory = sqlite3.Row
        self.conn.executescript(_SCHEMA_SQL)
        self.conn.commit()

    def load(self) -> Container | None:
        row = self.conn.execute(
            "SELECT layout FROM dashboard_layouts WHERE user_id = ?",
            (self.user_id,),
        ).fetchone()
        if row is None:
            return None
        try:
            data = json.loads(row["layout"])
        except json.JSONDecodeError as exc:
            raise LayoutLoadError(f"user {self.user_id}: stored layout is not JSON") from exc
        return layout_from_document(data, source=f"user {self.user_id}")

    def save(self, root: Container) -> None:
        document = layout_to_document(root)
        self.conn.execute(
            _UPSERT_SQL,
            (
                self.user_id,
                json.dumps(document, ensure_ascii=False),
                document["version"],
                document["saved_at"],
            ),
        )
        self.conn.commit()
        logger.debug("Saved layout for user %s", self.user_id)

    def delete(self) -> bool:
        """Remove this user's saved layout.  Returns True if a row was deleted."""
        cursor = self.conn.execute(
            "DELETE FROM dashboard_layouts WHERE user_id = ?", (self.user_id,)
        )
        self.conn.commit()
        return cursor.rowcount > 0

    def list_users(self) -> list[str]:
        rows = self.conn.execute(
            "SELECT user_id FROM dashboard_layouts ORDER BY user_id"
        ).fetchall()
        return [row["user_id"] for row in rows]

    def close(self) -> None:
        """Close the database connection."""
        if self.conn:
            self.conn.close()
            self.conn = None
