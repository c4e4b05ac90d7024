# src/todo_list/storage/kv_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
import sqlite3
import threading
import time
from pathlib import Path

from ..tasks.errors import StorageError

logger = logging.getLogger(__name__)


class SQLiteKeyValueStore:
    """
    SQLite key/value store (default backend).

    The schema is intentionally simple and migration-safe:
    - create table if missing
    - one row per key, value stored as TEXT

    Thread-safety:
    - each method opens its own SQLite connection
    - a write is a single UPSERT inside one transaction, so it is atomic
    """

    def __init__(self, db_path: str | Path = "todo.sqlite3") -> None:
        self._db_path = Path(db_path)
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
            self._ensure_schema()
        except (OSError, sqlite3.Error) as e:
            # Opening must not crash the app; every later call will report the failure.
            logger.error("SQLiteKeyValueStore unavailable db=%s: %s", self._db_path, e)
        else:
            logger.info("SQLiteKeyValueStore ready db=%s", self._db_path)

    def describe(self) -> str:
        return f"sqlite:{self._db_path}"

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(Exception):
            conn.execute("PRAGMA journal_mode=WAL")

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at REAL NOT NULL
                )
                """
            )
            conn.commit()
        finally:
            conn.close()

    # ---- public API ----

    def get(self, key: str) -> str | None:
        try:
            conn = self._get_conn()
            try:
                row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StorageError(f"read failed key={key} db={self._db_path}: {e}") from e
        return None if row is None else str(row[0])

    def set(self, key: str, value: str) -> None:
        try:
            conn = self._get_conn()
            try:
                with conn:
                    conn.execute(
                        """
                        INSERT INTO kv(key, value, updated_at)
                        VALUES (?, ?, ?)
                        ON CONFLICT(key) DO UPDATE SET
                            value = excluded.value,
                            updated_at = excluded.updated_at
                        """,
                        (key, value, time.time()),
                    )
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StorageError(f"write failed key={key} db={self._db_path}: {e}") from e

    def delete(self, key: str) -> None:
        try:
            conn = self._get_conn()
            try:
                with conn:
                    conn.execute("DELETE FROM kv WHERE key = ?", (key,))
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StorageError(f"delete failed key={key} db={self._db_path}: {e}") from e


class JsonFileKeyValueStore:
    """
    Key/value store kept in one JSON object on disk.

    Writes go to a temp file that replaces the real one with os.replace, so an
    interrupted write leaves the previous file intact.
    """

    def __init__(self, path: str | Path = "todo.json") -> None:
        self._path = Path(path)
        self._lock = threading.Lock()

    def describe(self) -> str:
        return f"json:{self._path}"

    def _read_all(self, *, discard_corrupt: bool = False) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            raw = self._path.read_bytes()
        except OSError as e:
            raise StorageError(f"read failed path={self._path}: {e}") from e
        try:
            data = json.loads(raw.decode("utf-8"))
        except (ValueError, RecursionError):
            # not UTF-8, not JSON, or nested too deeply
            data = None
        if not isinstance(data, dict):
            if discard_corrupt:
                logger.warning("Overwriting corrupt key/value file %s", self._path)
                return {}
            raise StorageError(f"corrupt key/value file path={self._path}")
        return {str(k): v if isinstance(v, str) else json.dumps(v) for k, v in data.items()}

    def _write_all(self, data: dict[str, str]) -> None:
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2), "utf-8")
            os.replace(tmp, self._path)
        except OSError as e:
            raise StorageError(f"write failed path={self._path}: {e}") from e
        with contextlib.suppress(OSError):
            # Best-effort: personal data, keep the file private on disk.
            os.chmod(self._path, 0o600)

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = self._read_all(discard_corrupt=True)
            data[key] = value
            self._write_all(data)

    def delete(self, key: str) -> None:
        with self._lock:
            data = self._read_all()
            if data.pop(key, None) is not None:
                self._write_all(data)
