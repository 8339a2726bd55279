"""Journal entry collection manager.

Owns the committed entries (newest first), the edit draft and the edit
target. Every successful create, update or delete is flushed to the
``journalEntries`` slot before the call returns.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Optional, Union

from pydantic import ValidationError

from stillwater.db.store import JOURNAL_SLOT, SlotStore, load_json, save_json
from stillwater.errors import PreconditionViolation
from stillwater.models.journal import ALL_MOODS, JournalDraft, JournalEntry, Mood, as_utc

logger = logging.getLogger(__name__)

DELETE_PROMPT = "Are you sure you want to delete this entry?"


class JournalManager:
    """Create, edit, delete and filter journal entries."""

    def __init__(
        self,
        store: SlotStore,
        confirm: Callable[[str], bool],
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        """Initialize the manager and load stored entries.

        Args:
            store: Slot store holding the journal.
            confirm: Yes/no prompt asked before deleting an entry.
            clock: Source of the current time. Naive readings are taken
                as local time and stored in UTC.
        """
        self._store = store
        self._confirm = confirm
        self._clock = clock
        self._entries: list[JournalEntry] = self._load_entries()
        self._last_id = max((e.id for e in self._entries), default=0)
        self._draft = JournalDraft.blank()
        self._form_open = False

    def _load_entries(self) -> list[JournalEntry]:
        payload = load_json(self._store, JOURNAL_SLOT)
        if payload is None:
            return []
        if not isinstance(payload, list):
            logger.warning("Failed to load journal entries: expected a list, got %s",
                           type(payload).__name__)
            return []

        entries = []
        seen_ids = set()
        for item in payload:
            try:
                entry = JournalEntry.model_validate(item)
            except ValidationError as e:
                logger.warning("Skipping malformed journal entry: %s", e)
                continue
            if entry.id in seen_ids:
                logger.warning("Skipping journal entry with duplicate id %s", entry.id)
                continue
            seen_ids.add(entry.id)
            entries.append(entry)
        return entries

    def _flush(self) -> None:
        payload = [
            entry.model_dump(mode="json", by_alias=True, exclude_none=True)
            for entry in self._entries
        ]
        save_json(self._store, JOURNAL_SLOT, payload)

    def _now(self) -> datetime:
        return as_utc(self._clock())

    def _next_id(self, now: datetime) -> int:
        # Millisecond timestamps, bumped past the last id when the clock stalls
        candidate = int(now.timestamp() * 1000)
        self._last_id = max(candidate, self._last_id + 1)
        return self._last_id

    def _reset_draft(self) -> None:
        self._draft = JournalDraft.blank()
        self._form_open = False

    def _reject(self, operation: str, reason: str) -> None:
        logger.debug("%s", PreconditionViolation(f"{operation} ignored: {reason}"))

    # ==================== State ====================

    @property
    def entries(self) -> list[JournalEntry]:
        """Committed entries, newest first."""
        return list(self._entries)

    @property
    def draft(self) -> JournalDraft:
        return self._draft

    @property
    def editing_id(self) -> Optional[int]:
        return self._draft.editing_id

    @property
    def is_form_open(self) -> bool:
        return self._form_open

    def get(self, entry_id: int) -> Optional[JournalEntry]:
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def __len__(self) -> int:
        return len(self._entries)

    # ==================== Draft ====================

    def set_field(self, name: str, value: Any) -> None:
        """Change one field of the draft.

        Raises:
            KeyError: If name is not an editable field.
            pydantic.ValidationError: If value does not fit the field
                (e.g. an unknown mood).
        """
        if name not in JournalDraft.EDITABLE_FIELDS:
            raise KeyError(name)
        setattr(self._draft, name, value)

    def toggle_form(self) -> bool:
        """Open or close the editor, keeping the draft."""
        self._form_open = not self._form_open
        return self._form_open

    def begin_edit(self, entry_id: int) -> bool:
        """Load an entry into the draft and open the editor.

        Returns:
            False if no entry has that id.
        """
        entry = self.get(entry_id)
        if entry is None:
            self._reject("edit", f"unknown entry {entry_id}")
            return False
        self._draft = JournalDraft.from_entry(entry)
        self._form_open = True
        return True

    def cancel_edit(self) -> None:
        """Drop the draft and edit target and close the editor."""
        self._reset_draft()

    # ==================== Commits ====================

    def submit(self) -> Optional[JournalEntry]:
        """Commit the current draft.

        Updates the edit target when one is set, otherwise creates a new
        entry.

        Returns:
            The committed entry, or None if the draft was rejected.
        """
        if self._draft.editing_id is not None:
            return self.update(self._draft.editing_id, self._draft)
        return self.create(self._draft)

    def create(self, draft: JournalDraft) -> Optional[JournalEntry]:
        """Add a new entry at the front of the journal.

        Args:
            draft: Draft holding the new entry's fields.

        Returns:
            The new entry, or None if the title is blank.
        """
        if not draft.has_title():
            self._reject("create", "blank title")
            return None

        now = self._now()
        entry = JournalEntry(
            id=self._next_id(now),
            created_at=now,
            **draft.editable_values(),
        )
        self._entries.insert(0, entry)
        self._reset_draft()
        self._flush()
        logger.info("Created journal entry %s", entry.id)
        return entry

    def update(self, entry_id: int, draft: JournalDraft) -> Optional[JournalEntry]:
        """Replace the editable fields of an existing entry in place.

        The entry keeps its id, creation time and position.

        Args:
            entry_id: ID of the entry to replace.
            draft: Draft holding the new field values.

        Returns:
            The updated entry, or None if the id is unknown or the title
            is blank.
        """
        if not draft.has_title():
            self._reject("update", "blank title")
            return None

        for index, entry in enumerate(self._entries):
            if entry.id == entry_id:
                break
        else:
            self._reject("update", f"unknown entry {entry_id}")
            return None

        now = self._now()
        if now <= entry.created_at:
            now = entry.created_at + timedelta(microseconds=1)

        updated = entry.model_copy(update={**draft.editable_values(), "updated_at": now})
        self._entries[index] = updated
        self._reset_draft()
        self._flush()
        logger.info("Updated journal entry %s", entry_id)
        return updated

    def delete(self, entry_id: int) -> bool:
        """Remove an entry after the user confirms.

        Returns:
            True if the entry was removed.
        """
        if self.get(entry_id) is None:
            self._reject("delete", f"unknown entry {entry_id}")
            return False

        if not self._confirm(DELETE_PROMPT):
            logger.debug("Delete of entry %s declined", entry_id)
            return False

        self._entries = [e for e in self._entries if e.id != entry_id]
        if self._draft.editing_id == entry_id:
            self._reset_draft()
        self._flush()
        logger.info("Deleted journal entry %s", entry_id)
        return True

    # ==================== Views ====================

    def filter(self, mood: Union[Mood, str] = ALL_MOODS) -> list[JournalEntry]:
        """Entries matching a mood, in journal order.

        Args:
            mood: A Mood, its value, or "all" for every entry.

        Raises:
            ValueError: If mood is not a known mood or "all".
        """
        if mood == ALL_MOODS:
            return list(self._entries)
        wanted = Mood(mood)
        return [entry for entry in self._entries if entry.mood == wanted]
