"""SQLite database schema definition."""

import sqlite3
from pathlib import Path

from nettoit.exceptions import StorageError

SCHEMA_VERSION = 1

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER PRIMARY KEY,
    applied_at TEXT NOT NULL DEFAULT (datetime('now'))
);

CREATE TABLE IF NOT EXISTS kv_store (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT NOT NULL DEFAULT (datetime('now'))
);
"""


def create_schema(db_path: Path | str) -> sqlite3.Connection:
    """Create the database schema. Returns the connection.

    ``":memory:"`` gives a throwaway database.
    """
    conn = None
    try:
        conn = sqlite3.connect(str(db_path))
        conn.execute("PRAGMA journal_mode=WAL")
        conn.executescript(SCHEMA_SQL)
        conn.execute(
            "INSERT OR IGNORE INTO schema_version (version) VALUES (?)",
            (SCHEMA_VERSION,),
        )
        conn.commit()
    except sqlite3.Error as exc:
        if conn is not None:
            conn.close()
        raise StorageError(str(db_path), f"cannot open database: {exc}") from exc
    return conn
