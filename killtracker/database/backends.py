"""
Persistent snapshot backends for the record store.

Every backend stores one serialized snapshot of the whole record mapping.
Reads return the last complete snapshot; writes replace it in one step.
"""

import os
import sqlite3
import logging
import tempfile
import time
from pathlib import Path
from typing import Optional, Protocol, Union

logger = logging.getLogger(__name__)

SQLITE_SUFFIXES = {".db", ".sqlite", ".sqlite3"}


class PersistentStore(Protocol):
    """Whole-snapshot key value durability."""

    def read(self) -> Optional[str]:
        """Return the stored snapshot, or None if nothing was stored yet."""
        ...

    def write(self, payload: str) -> None:
        """Replace the stored snapshot."""
        ...


class MemoryBackend:
    """In-process backend, mainly for tests and dry runs."""

    def __init__(self, payload: Optional[str] = None):
        self.payload = payload
        self.writes = 0

    def read(self) -> Optional[str]:
        return self.payload

    def write(self, payload: str) -> None:
        self.payload = payload
        self.writes += 1


class JsonFileBackend:
    """
    Stores the snapshot as a JSON document on disk.

    Writes go to a temporary file in the same directory which is then
    renamed over the target, so readers never see a half written file.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()

    def read(self) -> Optional[str]:
        if not self.path.exists():
            return None

        try:
            return self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read record store {self.path}: {e}")
            return None

    def write(self, payload: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise

        logger.debug(f"Wrote record store {self.path} ({len(payload)} bytes)")


class SQLiteBackend:
    """
    Stores the snapshot in a single-row SQLite table.

    A file that is not a usable database is moved aside to
    ``<name>.corrupt`` and a fresh, empty store is created in its place.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()
        self.path.parent.mkdir(parents=True, exist_ok=True)

        try:
            self.connection = self._open()
        except sqlite3.DatabaseError as e:
            aside = self.path.with_name(f"{self.path.name}.corrupt")
            logger.warning(f"Record store {self.path} is not a usable database ({e}), moving it to {aside}")
            os.replace(self.path, aside)
            self.connection = self._open()

        logger.info(f"SQLite record store initialized at {self.path}")

    def _open(self) -> sqlite3.Connection:
        connection = sqlite3.connect(self.path, timeout=30.0, check_same_thread=False)
        try:
            connection.execute("PRAGMA journal_mode=WAL")
            connection.execute("PRAGMA synchronous=NORMAL")
            connection.execute(
                """
                CREATE TABLE IF NOT EXISTS record_snapshot (
                    id INTEGER PRIMARY KEY CHECK (id = 1),
                    payload TEXT NOT NULL,
                    written_at REAL NOT NULL
                )
                """
            )
            connection.commit()
        except sqlite3.DatabaseError:
            connection.close()
            raise
        return connection

    def read(self) -> Optional[str]:
        try:
            row = self.connection.execute(
                "SELECT payload FROM record_snapshot WHERE id = 1"
            ).fetchone()
        except sqlite3.DatabaseError as e:
            logger.warning(f"Failed to read record store {self.path}: {e}")
            return None
        return row[0] if row else None

    def write(self, payload: str) -> None:
        with self.connection:
            self.connection.execute(
                "INSERT OR REPLACE INTO record_snapshot (id, payload, written_at) VALUES (1, ?, ?)",
                (payload, time.time()),
            )

    def close(self):
        """Close the database connection."""
        self.connection.close()


def open_backend(path: Union[str, Path]) -> PersistentStore:
    """
    Open a backend for a store path.

    Args:
        path: ``.db``, ``.sqlite`` or ``.sqlite3`` opens SQLite, anything else a JSON file

    Returns:
        Backend instance
    """
    path = Path(path).expanduser()
    if path.suffix.lower() in SQLITE_SUFFIXES:
        return SQLiteBackend(path)
    return JsonFileBackend(path)
