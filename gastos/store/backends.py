"""Key-value backends that persist the stores' serialized payloads.

Stores see a backend as an opaque string-keyed slot store: ``read`` returns
the text last written under a key (or None) and ``write`` replaces it.
"""

import logging
import os
import sqlite3
from pathlib import Path
from typing import Protocol

from gastos.errors import PersistenceError

logger = logging.getLogger(__name__)

DB_FILENAME = "gastos.db"


class KeyValueBackend(Protocol):
    """String-keyed text storage."""

    def read(self, key: str) -> str | None: ...

    def write(self, key: str, value: str) -> None: ...


def get_xdg_data_home() -> Path:
    """Get XDG data directory, with fallback to ~/.local/share."""
    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        return Path(xdg_data)
    return Path.home() / ".local" / "share"


def get_data_dir() -> Path:
    """Get the default data directory (XDG compliant)."""
    return get_xdg_data_home() / "gastos"


def init_database(db_path: Path) -> None:
    """Initialize the database with the key-value table.

    Args:
        db_path: Path to the database file.

    Raises:
        sqlite3.Error: If database initialization fails.
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(db_path)
    cursor = conn.cursor()

    try:
        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS kv (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at TEXT NOT NULL DEFAULT (datetime('now'))
            )
        """
        )
        conn.commit()

    except sqlite3.Error:
        conn.rollback()
        raise
    finally:
        conn.close()


class SqliteBackend:
    """Key-value slots stored in a single SQLite table."""

    def __init__(self, db_path: Path) -> None:
        self.db_path = db_path
        try:
            init_database(db_path)
        except (sqlite3.Error, OSError) as e:
            raise PersistenceError(f"Unable to open database {db_path}: {e}") from e

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path)

    def read(self, key: str) -> str | None:
        """Return the value stored under key, or None if absent.

        Raises:
            PersistenceError: If the database cannot be read.
        """
        try:
            conn = self._connect()
            try:
                row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise PersistenceError(f"Unable to read '{key}' from {self.db_path}: {e}") from e
        return row[0] if row else None

    def write(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value.

        Raises:
            PersistenceError: If the database cannot be written.
        """
        try:
            conn = self._connect()
            try:
                conn.execute(
                    """
                    INSERT INTO kv (key, value, updated_at) VALUES (?, ?, datetime('now'))
                    ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
                    """,
                    (key, value),
                )
                conn.commit()
            except sqlite3.Error:
                conn.rollback()
                raise
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise PersistenceError(f"Unable to write '{key}' to {self.db_path}: {e}") from e
        logger.debug("Wrote %d bytes to %s:%s", len(value), self.db_path.name, key)


class JsonFileBackend:
    """Key-value slots stored as one ``<key>.json`` file each."""

    def __init__(self, base_path: Path) -> None:
        self.base_path = base_path
        try:
            self.base_path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise PersistenceError(f"Unable to create data directory {base_path}: {e}") from e

    def path_for(self, key: str) -> Path:
        return self.base_path / f"{key}.json"

    def read(self, key: str) -> str | None:
        """Return the file contents for key, or None if the file is missing.

        Raises:
            PersistenceError: If the file exists but cannot be read.
        """
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceError(f"Unable to read from {path}: {e}") from e

    def write(self, key: str, value: str) -> None:
        """Write value for key through a temp file and atomic replace.

        Raises:
            PersistenceError: If the file cannot be written.
        """
        path = self.path_for(key)
        temp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            temp_path.write_text(value, encoding="utf-8")
            temp_path.replace(path)
        except OSError as e:
            raise PersistenceError(f"Unable to write to {path}: {e}") from e
        logger.debug("Wrote %d bytes to %s", len(value), path)
