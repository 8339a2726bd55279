"""Field validation for settings profiles and journal drafts.

All functions here are pure: they never mutate their input and keep no
state, so callers may run them on every change or only on blur/submit.
"""

import re
from collections.abc import Mapping
from typing import Any, Union

from pydantic import BaseModel

from stillwater.errors import ValidationErrors
from stillwater.models.journal import JournalDraft
from stillwater.models.settings import FIELD_NAMES, SettingsProfile

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

MIN_DISPLAY_NAME_LENGTH = 2
MIN_DAILY_GOAL = 1
MAX_DAILY_GOAL = 120

# Fields marked touched by a submit
REQUIRED_FIELDS = ("displayName", "email", "dailyGoal")

MESSAGES = {
    "displayName.required": "Display name is required",
    "displayName.short": "Name must be at least 2 characters",
    "email.required": "Email is required",
    "email.invalid": "Please enter a valid email",
    "dailyGoal.range": "Goal must be between 1 and 120 minutes",
    "title.required": "Please enter a title for your journal entry",
}

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def coerce_int(value: Any) -> int:
    """Coerce form input to an integer.

    Integers pass through, floats are truncated and text is read up to its
    first non-digit ("42min" -> 42). Anything else, including empty
    input, becomes 0.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            return 0
        return int(value)
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        return int(match.group(1)) if match else 0
    return 0


def _field_values(draft: Union[SettingsProfile, Mapping]) -> dict:
    """Read a draft into a camelCase-keyed dict."""
    if isinstance(draft, BaseModel):
        return draft.model_dump(by_alias=True)
    values = {}
    for alias, attribute in FIELD_NAMES.items():
        if alias in draft:
            values[alias] = draft[alias]
        elif attribute in draft:
            values[alias] = draft[attribute]
    return values


def validate(draft: Union[SettingsProfile, Mapping]) -> ValidationErrors:
    """Validate a settings draft.

    Args:
        draft: A SettingsProfile or a mapping keyed by camelCase or
            snake_case field names.

    Returns:
        Mapping of camelCase field name to message for every invalid
        field. Valid fields are absent, so an empty mapping means valid.
    """
    values = _field_values(draft)
    errors: ValidationErrors = {}

    display_name = str(values.get("displayName") or "")
    if not display_name.strip():
        errors["displayName"] = MESSAGES["displayName.required"]
    elif len(display_name) < MIN_DISPLAY_NAME_LENGTH:
        errors["displayName"] = MESSAGES["displayName.short"]

    email = str(values.get("email") or "")
    if not email.strip():
        errors["email"] = MESSAGES["email.required"]
    elif not EMAIL_PATTERN.match(email):
        errors["email"] = MESSAGES["email.invalid"]

    daily_goal = values.get("dailyGoal")
    if (
        isinstance(daily_goal, bool)
        or not isinstance(daily_goal, int)
        or not MIN_DAILY_GOAL <= daily_goal <= MAX_DAILY_GOAL
    ):
        errors["dailyGoal"] = MESSAGES["dailyGoal.range"]

    return errors


def is_valid(draft: Union[SettingsProfile, Mapping]) -> bool:
    return not validate(draft)


def validate_journal_draft(draft: JournalDraft) -> ValidationErrors:
    """Validate a journal draft; only the title is required."""
    if not draft.has_title():
        return {"title": MESSAGES["title.required"]}
    return {}
