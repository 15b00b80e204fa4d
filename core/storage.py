# core/storage.py
import os
import sqlite3
import datetime
import threading
from contextlib import closing
from typing import Dict, Optional

import pytz

from .config import DB_PATH
from .errors import StorageError
from .logger import get_logger

logger = get_logger(__name__)


def now_utc_iso() -> str:
    return datetime.datetime.now(tz=pytz.UTC).isoformat()


class SqliteKeyValueStorage:
    """
    Durable string key-value storage in a single SQLite table.
    Every call opens its own connection so writes may run on a worker thread.
    """

    def __init__(self, path: str = DB_PATH):
        self.path = path
        self._ready = False

    def _connect(self) -> sqlite3.Connection:
        parent = os.path.dirname(self.path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        return sqlite3.connect(self.path)

    def ensure_db(self) -> None:
        if self._ready:
            return
        try:
            with closing(self._connect()) as con:
                con.execute(
                    """
                    CREATE TABLE IF NOT EXISTS kv (
                        key TEXT PRIMARY KEY,
                        value TEXT NOT NULL,
                        updated_at TEXT
                    )
                """
                )
                con.commit()
        except (sqlite3.Error, OSError) as e:
            raise StorageError(f"Cannot initialize storage at {self.path}: {e}") from e
        self._ready = True

    def get(self, key: str) -> Optional[str]:
        self.ensure_db()
        try:
            with closing(self._connect()) as con:
                row = con.execute("SELECT value FROM kv WHERE key=?", (key,)).fetchone()
        except (sqlite3.Error, OSError) as e:
            raise StorageError(f"Cannot read {key!r}: {e}", key=key) from e
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        self.ensure_db()
        try:
            with closing(self._connect()) as con:
                con.execute(
                    """
                    INSERT INTO kv (key, value, updated_at) VALUES (?,?,?)
                    ON CONFLICT(key) DO UPDATE SET
                        value=excluded.value,
                        updated_at=excluded.updated_at
                """,
                    (key, value, now_utc_iso()),
                )
                con.commit()
        except (sqlite3.Error, OSError) as e:
            raise StorageError(f"Cannot write {key!r}: {e}", key=key) from e

    def delete(self, key: str) -> None:
        self.ensure_db()
        try:
            with closing(self._connect()) as con:
                con.execute("DELETE FROM kv WHERE key=?", (key,))
                con.commit()
        except (sqlite3.Error, OSError) as e:
            raise StorageError(f"Cannot delete {key!r}: {e}", key=key) from e


class MemoryKeyValueStorage:
    """In-process storage with the same interface, for tests and ephemeral sessions."""

    def __init__(self, initial: Dict[str, str] | None = None):
        self._data: Dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)
