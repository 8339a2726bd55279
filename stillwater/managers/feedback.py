"""Post-session feedback counter."""

import logging

from stillwater.db.store import FEEDBACK_COUNT_SLOT, SlotStore, load_json, save_json
from stillwater.models.feedback import FeedbackSession

logger = logging.getLogger(__name__)

MIN_MOOD_SCORE = 1
MAX_MOOD_SCORE = 5
DEFAULT_MOOD_SCORE = 3


class FeedbackManager:
    """Collect session feedback and count submissions."""

    def __init__(self, store: SlotStore):
        self._store = store
        self.session_count = self._load_count()
        self.mood_score = DEFAULT_MOOD_SCORE
        self.feedback = ""
        self.submitted = False

    def _load_count(self) -> int:
        payload = load_json(self._store, FEEDBACK_COUNT_SLOT)
        if payload is None:
            return 0
        if isinstance(payload, bool) or not isinstance(payload, int) or payload < 0:
            logger.warning("Ignoring invalid feedback session count: %r", payload)
            return 0
        return payload

    def set_mood(self, score: int) -> int:
        """Set the mood score, clamped to 1..5."""
        self.mood_score = max(MIN_MOOD_SCORE, min(MAX_MOOD_SCORE, int(score)))
        return self.mood_score

    def set_feedback(self, text: str) -> None:
        self.feedback = text or ""

    def submit(self) -> FeedbackSession:
        """Record the feedback and bump the persisted session count."""
        session = FeedbackSession(mood_score=self.mood_score, feedback=self.feedback)
        self.submitted = True
        self.session_count += 1
        save_json(self._store, FEEDBACK_COUNT_SLOT, self.session_count)
        logger.info("Feedback session %d recorded", self.session_count)
        return session

    def reset(self) -> None:
        """Clear the form for another submission; the count is kept."""
        self.mood_score = DEFAULT_MOOD_SCORE
        self.feedback = ""
        self.submitted = False
