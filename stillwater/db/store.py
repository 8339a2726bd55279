"""Key-value slot storage for Stillwater.

Each slot holds one serialized JSON document. Slots are written whole on
every committed change and read once at startup.
"""

import json
import logging
import sqlite3
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from stillwater.errors import PersistenceReadError, PersistenceWriteError

logger = logging.getLogger(__name__)

JOURNAL_SLOT = "journalEntries"
SETTINGS_SLOT = "userSettings"
FEEDBACK_COUNT_SLOT = "feedbackSessionCount"


class SlotStore(ABC):
    """Abstract durable key -> string storage.

    Implementations must return None for a missing key and must write a
    single key atomically.
    """

    @abstractmethod
    def load(self, key: str) -> Optional[str]:
        """Read the value stored under a key.

        Args:
            key: Slot name.

        Returns:
            The stored text, or None if the slot is empty.

        Raises:
            PersistenceReadError: If the backend cannot be read.
        """
        pass

    @abstractmethod
    def save(self, key: str, value: str) -> None:
        """Replace the value stored under a key.

        Args:
            key: Slot name.
            value: Serialized payload.

        Raises:
            PersistenceWriteError: If the backend cannot be written.
        """
        pass

    @abstractmethod
    def keys(self) -> list[str]:
        """List the slots that currently hold a value."""
        pass


class DataStore(SlotStore):
    """SQLite-based slot store."""

    def __init__(self, db_path: Path):
        """Initialize the data store.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = Path(db_path)
        self._ensure_db_dir()
        self._init_schema()

    def _ensure_db_dir(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        """Initialize database schema on first run."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS slots (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    saved_at TEXT NOT NULL
                )
            """)
            conn.commit()
        finally:
            conn.close()

    def load(self, key: str) -> Optional[str]:
        try:
            conn = self._get_connection()
        except sqlite3.Error as e:
            raise PersistenceReadError(key, str(e)) from e
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT value FROM slots WHERE key = ?", (key,))
            row = cursor.fetchone()
            return row["value"] if row else None
        except sqlite3.Error as e:
            raise PersistenceReadError(key, str(e)) from e
        finally:
            conn.close()

    def save(self, key: str, value: str) -> None:
        try:
            conn = self._get_connection()
        except sqlite3.Error as e:
            raise PersistenceWriteError(key, str(e)) from e
        try:
            with conn:
                conn.execute(
                    """
                    INSERT OR REPLACE INTO slots (key, value, saved_at)
                    VALUES (?, ?, ?)
                    """,
                    (key, value, datetime.now().isoformat()),
                )
        except sqlite3.Error as e:
            raise PersistenceWriteError(key, str(e)) from e
        finally:
            conn.close()

    def keys(self) -> list[str]:
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT key FROM slots ORDER BY key")
            return [row["key"] for row in cursor.fetchall()]
        finally:
            conn.close()


class MemoryStore(SlotStore):
    """In-process slot store.

    Every save is recorded in ``writes`` as a ``(key, value)`` pair.
    """

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._slots: dict[str, str] = dict(initial or {})
        self.writes: list[tuple[str, str]] = []

    def load(self, key: str) -> Optional[str]:
        return self._slots.get(key)

    def save(self, key: str, value: str) -> None:
        self._slots[key] = value
        self.writes.append((key, value))

    def keys(self) -> list[str]:
        return sorted(self._slots)


def _decode(key: str, raw: str) -> Any:
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, TypeError) as e:
        raise PersistenceReadError(key, str(e)) from e


def load_json(store: SlotStore, key: str) -> Any:
    """Load and decode a JSON slot.

    A missing slot, an unreadable backend and a malformed payload all
    return None so the caller falls back to its defaults.

    Args:
        store: Slot store to read from.
        key: Slot name.

    Returns:
        The decoded payload, or None.
    """
    try:
        raw = store.load(key)
        if raw is None:
            return None
        return _decode(key, raw)
    except PersistenceReadError as e:
        logger.warning("%s; using defaults", e)
        return None


def save_json(store: SlotStore, key: str, payload: Any) -> None:
    """Serialize a payload and write it to a slot.

    Raises:
        PersistenceWriteError: If the payload cannot be serialized or written.
    """
    try:
        raw = json.dumps(payload)
    except (TypeError, ValueError) as e:
        raise PersistenceWriteError(key, str(e)) from e
    store.save(key, raw)
    logger.debug("Saved slot '%s' (%d bytes)", key, len(raw))
