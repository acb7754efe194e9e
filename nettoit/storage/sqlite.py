"""SQLite-backed key-value storage."""

import logging
import sqlite3

from nettoit.exceptions import StorageError
from nettoit.storage.base import KeyValueStorage

logger = logging.getLogger(__name__)


class SQLiteStorage(KeyValueStorage):
    """Key-value rows in the ``kv_store`` table (see ``create_schema``)."""

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def get(self, key: str) -> str | None:
        try:
            row = self.conn.execute(
                "SELECT value FROM kv_store WHERE key = ?", (key,)
            ).fetchone()
        except sqlite3.Error as exc:
            raise StorageError(key, str(exc)) from exc
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        try:
            self.conn.execute(
                """INSERT INTO kv_store (key, value, updated_at)
                   VALUES (?, ?, datetime('now'))
                   ON CONFLICT(key) DO UPDATE SET
                       value = excluded.value,
                       updated_at = excluded.updated_at""",
                (key, value),
            )
            self.conn.commit()
        except sqlite3.Error as exc:
            raise StorageError(key, str(exc)) from exc
        logger.info("Stored %d bytes under %s", len(value), key)

    def remove(self, key: str) -> None:
        try:
            self.conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
            self.conn.commit()
        except sqlite3.Error as exc:
            raise StorageError(key, str(exc)) from exc
        logger.info("Removed %s", key)
