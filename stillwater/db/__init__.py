"""Durable key-value storage for Stillwater."""

from stillwater.db.store import (
    FEEDBACK_COUNT_SLOT,
    JOURNAL_SLOT,
    SETTINGS_SLOT,
    DataStore,
    MemoryStore,
    SlotStore,
    load_json,
    save_json,
)

__all__ = [
    "DataStore",
    "FEEDBACK_COUNT_SLOT",
    "JOURNAL_SLOT",
    "MemoryStore",
    "SETTINGS_SLOT",
    "SlotStore",
    "load_json",
    "save_json",
]
