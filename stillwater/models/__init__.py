"""Data models for Stillwater."""

from stillwater.models.journal import ALL_MOODS, JournalDraft, JournalEntry, Mood
from stillwater.models.settings import SettingsProfile
from stillwater.models.feedback import FeedbackSession

__all__ = [
    "ALL_MOODS",
    "FeedbackSession",
    "JournalDraft",
    "JournalEntry",
    "Mood",
    "SettingsProfile",
]
