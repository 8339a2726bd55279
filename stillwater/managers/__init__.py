"""Record managers for Stillwater."""

from stillwater.managers.feedback import FeedbackManager
from stillwater.managers.journal import JournalManager
from stillwater.managers.settings import ProfileState, SettingsManager

__all__ = [
    "FeedbackManager",
    "JournalManager",
    "ProfileState",
    "SettingsManager",
]
