"""Journal entry data models."""

from datetime import date as date_type
from datetime import datetime, timezone
from enum import Enum
from typing import ClassVar, Optional

from pydantic import BaseModel, Field, field_validator


class Mood(str, Enum):
    """How the user felt when writing an entry."""

    GREAT = "great"
    GOOD = "good"
    NEUTRAL = "neutral"
    LOW = "low"
    STRESSED = "stressed"


# Filter value that matches every mood
ALL_MOODS = "all"

MOOD_EMOJI = {
    Mood.GREAT: "😊",
    Mood.GOOD: "🙂",
    Mood.NEUTRAL: "😐",
    Mood.LOW: "😔",
    Mood.STRESSED: "😰",
}

MOOD_COLORS = {
    Mood.GREAT: "#4ade80",
    Mood.GOOD: "#86efac",
    Mood.NEUTRAL: "#fbbf24",
    Mood.LOW: "#fb923c",
    Mood.STRESSED: "#f87171",
}


def mood_emoji(mood) -> str:
    """Get the emoji for a mood, falling back to neutral."""
    try:
        return MOOD_EMOJI[Mood(mood)]
    except ValueError:
        return MOOD_EMOJI[Mood.NEUTRAL]


def mood_color(mood) -> str:
    """Get the badge colour for a mood, falling back to neutral."""
    try:
        return MOOD_COLORS[Mood(mood)]
    except ValueError:
        return MOOD_COLORS[Mood.NEUTRAL]


def today_iso() -> str:
    """Today's date as YYYY-MM-DD text."""
    return date_type.today().isoformat()


def as_utc(value: datetime) -> datetime:
    """Convert a timestamp to UTC; naive values are read as local time."""
    return value.astimezone(timezone.utc)


class JournalEntry(BaseModel):
    """A committed journal entry."""

    id: int = Field(..., description="Unique entry ID, assigned at creation")
    date: str = Field(default_factory=today_iso, description="Entry date (YYYY-MM-DD)")
    mood: Mood = Field(default=Mood.NEUTRAL, description="Mood at time of writing")
    title: str = Field(..., min_length=1, description="Entry title")
    content: str = Field(default="", description="Reflection text")
    gratitude: str = Field(default="", description="Things the user is thankful for")
    goals: str = Field(default="", description="Intentions for tomorrow")
    created_at: datetime = Field(..., alias="createdAt", description="Creation timestamp")
    updated_at: Optional[datetime] = Field(
        default=None, alias="updatedAt", description="Last edit timestamp"
    )

    model_config = {"frozen": True, "populate_by_name": True}

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title must not be blank")
        return value

    @field_validator("content", "gratitude", "goals", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return "" if value is None else value

    @field_validator("created_at", "updated_at")
    @classmethod
    def _normalize_timestamp(cls, value: Optional[datetime]) -> Optional[datetime]:
        return None if value is None else as_utc(value)


class JournalDraft(BaseModel):
    """Editable buffer for a journal entry that has not been committed."""

    EDITABLE_FIELDS: ClassVar[tuple[str, ...]] = (
        "date", "mood", "title", "content", "gratitude", "goals",
    )

    date: str = Field(default_factory=today_iso)
    mood: Mood = Mood.NEUTRAL
    title: str = ""
    content: str = ""
    gratitude: str = ""
    goals: str = ""
    editing_id: Optional[int] = Field(
        default=None, description="ID of the entry being replaced, None when creating"
    )

    model_config = {"validate_assignment": True}

    @classmethod
    def blank(cls) -> "JournalDraft":
        """Draft reset to field defaults."""
        return cls()

    @classmethod
    def from_entry(cls, entry: JournalEntry) -> "JournalDraft":
        """Copy an entry's editable fields into a draft targeting it."""
        return cls(
            date=entry.date,
            mood=entry.mood,
            title=entry.title,
            content=entry.content,
            gratitude=entry.gratitude or "",
            goals=entry.goals or "",
            editing_id=entry.id,
        )

    def has_title(self) -> bool:
        return bool(self.title.strip())

    def editable_values(self) -> dict:
        """The fields copied onto a committed entry."""
        return {name: getattr(self, name) for name in self.EDITABLE_FIELDS}
