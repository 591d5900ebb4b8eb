# src/tasklist/db/storage.py
import logging
import sqlite3
from pathlib import Path
from typing import Optional, Protocol

logger = logging.getLogger(__name__)

CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS kv_store (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
);
"""


class KeyValueStorage(Protocol):
    """Persistence port: string values under string keys."""

    def get_item(self, key: str) -> Optional[str]: ...
    def set_item(self, key: str, value: str) -> None: ...


class SqliteStorage:
    """Key-value table in a single SQLite file.

    Each call opens a short-lived connection, so the object can be shared
    freely and needs no explicit close.
    """

    def __init__(self, db_path):
        self.db_path = Path(db_path)
        self.init_db_if_needed()

    def get_conn(self):
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        return conn

    def init_db_if_needed(self):
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = self.get_conn()
        try:
            conn.executescript(CREATE_TABLE_SQL)
            conn.commit()
        finally:
            conn.close()
        logger.debug("Storage ready at %s", self.db_path)
        return str(self.db_path)

    def get_item(self, key: str) -> Optional[str]:
        conn = self.get_conn()
        try:
            row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
        finally:
            conn.close()
        return None if row is None else row["value"]

    def set_item(self, key: str, value: str) -> None:
        conn = self.get_conn()
        try:
            conn.execute(
                """
                INSERT INTO kv_store (key, value) VALUES (:key, :value)
                ON CONFLICT(key) DO UPDATE SET value=excluded.value
                """,
                {"key": key, "value": value},
            )
            conn.commit()
        finally:
            conn.close()

    def remove_item(self, key: str) -> None:
        conn = self.get_conn()
        try:
            conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
            conn.commit()
        finally:
            conn.close()
