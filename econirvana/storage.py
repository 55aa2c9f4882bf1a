"""Key/value "local storage" persisted through libsql.

The site keeps exactly the state a browser would keep in ``localStorage``:
string values under string keys. The synchronous ``libsql`` driver is
wrapped with ``asyncio.to_thread()``. Connection target is determined by
settings:

- **Production**: ``TURSO_DATABASE_URL`` + ``TURSO_AUTH_TOKEN`` → remote Turso
- **Dev/test**: no Turso env vars → local SQLite file via ``database_path``
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

import libsql

from econirvana.config import settings

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

_CREATE_TABLE = """
CREATE TABLE IF NOT EXISTS local_storage (
    key   TEXT PRIMARY KEY,
    value TEXT NOT NULL
)
"""


def _open_local(path: str) -> Any:
    """Open a local libsql connection with WAL mode and busy timeout."""
    conn = libsql.connect(path)
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute("PRAGMA busy_timeout=5000")
    return conn


def _connect(db_path: Path | None) -> Any:
    if db_path:
        db_path.parent.mkdir(parents=True, exist_ok=True)
        return _open_local(str(db_path))

    if settings.turso_database_url:
        return libsql.connect(
            database=settings.turso_database_url,
            auth_token=settings.turso_auth_token,
        )

    settings.database_path.parent.mkdir(parents=True, exist_ok=True)
    return _open_local(str(settings.database_path))


class LocalStorage:
    """String key/value store with ``localStorage`` semantics.

    Singleton accessed via ``LocalStorage.get()``.  Pass an explicit *db_path*
    for test isolation (e.g. ``tmp_path / "test.db"``).
    """

    _instance: LocalStorage | None = None

    def __init__(self, db_path: Path | None = None) -> None:
        self._db_path = db_path
        self._initialised = False

    @classmethod
    def get(cls) -> LocalStorage:
        """Return the shared LocalStorage instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def _reset(cls) -> None:
        """Reset the singleton (for testing)."""
        cls._instance = None

    def _run(self, sql: str, params: tuple = (), *, fetch: bool = False) -> tuple | None:
        """Execute one statement on a fresh connection and commit."""
        conn = _connect(self._db_path)
        try:
            if not self._initialised:
                conn.execute(_CREATE_TABLE)
                self._initialised = True
            cursor = conn.execute(sql, params)
            row = cursor.fetchone() if fetch else None
            conn.commit()
            return row
        finally:
            conn.close()

    async def get_item(self, key: str) -> str | None:
        """Return the stored value for *key*, or None if absent."""
        row = await asyncio.to_thread(
            self._run, "SELECT value FROM local_storage WHERE key = ?", (key,), fetch=True
        )
        return row[0] if row else None

    async def set_item(self, key: str, value: str) -> None:
        """Store *value* under *key*, replacing any previous value."""
        await asyncio.to_thread(
            self._run,
            "INSERT OR REPLACE INTO local_storage (key, value) VALUES (?, ?)",
            (key, value),
        )
        logger.debug("local_storage set: %s (%d chars)", key, len(value))

    async def remove_item(self, key: str) -> None:
        """Delete *key*. Removing a missing key is a no-op."""
        await asyncio.to_thread(self._run, "DELETE FROM local_storage WHERE key = ?", (key,))
        logger.debug("local_storage removed: %s", key)
