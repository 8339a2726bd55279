"""Post-session feedback model."""

from pydantic import BaseModel, Field

MOOD_SCORE_EMOJI = ["😢", "😔", "😐", "🙂", "😊"]
MOOD_SCORE_LABELS = ["Very Low", "Low", "Neutral", "Good", "Excellent"]


class FeedbackSession(BaseModel):
    """How the user felt after a breathing or meditation session."""

    mood_score: int = Field(default=3, ge=1, le=5, description="Mood score from 1 to 5")
    feedback: str = Field(default="", description="Optional free-text feedback")

    model_config = {"frozen": True}

    @property
    def emoji(self) -> str:
        return MOOD_SCORE_EMOJI[self.mood_score - 1]

    @property
    def label(self) -> str:
        return MOOD_SCORE_LABELS[self.mood_score - 1]
