"""Property-based tests for settings and journal validation.

**Feature: stillwater-record-store**
"""

import copy

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from stillwater.models import JournalDraft, SettingsProfile
from stillwater.validation import (
    MESSAGES,
    coerce_int,
    is_valid,
    validate,
    validate_journal_draft,
)


valid_names = st.text(min_size=2, max_size=40).filter(lambda s: s.strip() != "")
valid_emails = st.builds(
    lambda local, domain, tld: f"{local}@{domain}.{tld}",
    st.text(alphabet="abcdefghijklmnopqrstuvwxyz0123456789._", min_size=1, max_size=10),
    st.text(alphabet="abcdefghijklmnopqrstuvwxyz0123456789-", min_size=1, max_size=10),
    st.text(alphabet="abcdefghijklmnopqrstuvwxyz", min_size=2, max_size=5),
)
valid_goals = st.integers(min_value=1, max_value=120)


def profile_strategy():
    """Generate profiles that pass every rule."""
    return st.fixed_dictionaries({
        "display_name": valid_names,
        "email": valid_emails,
        "daily_goal": valid_goals,
        "notifications": st.booleans(),
        "sound_enabled": st.booleans(),
    }).map(SettingsProfile.model_validate)


class TestValidProfiles:
    """
    **Property: Valid Profiles Have No Errors**

    *For any* profile with a name of at least two characters, a
    well-formed email and a goal in 1..120, validate returns {}.
    """

    def test_minimal_valid_profile(self):
        draft = {"displayName": "Al", "email": "a@b.co", "dailyGoal": 30}
        assert validate(draft) == {}

    @given(profile=profile_strategy())
    @settings(max_examples=100)
    def test_generated_profiles_are_valid(self, profile: SettingsProfile):
        assert validate(profile) == {}
        assert is_valid(profile)

    def test_snake_case_mapping_is_accepted(self):
        draft = {"display_name": "Sam", "email": "sam@example.com", "daily_goal": 10}
        assert validate(draft) == {}


class TestFieldRules:
    """Each field is checked on its own; errors are keyed by field."""

    def test_invalid_email_is_the_only_error(self):
        draft = {"displayName": "Al", "email": "not-an-email", "dailyGoal": 30}
        assert validate(draft) == {"email": MESSAGES["email.invalid"]}

    @pytest.mark.parametrize("name", ["", "   ", "\t"])
    def test_blank_name_is_required(self, name: str):
        errors = validate({"displayName": name, "email": "a@b.co", "dailyGoal": 30})
        assert errors == {"displayName": MESSAGES["displayName.required"]}

    def test_single_character_name_is_too_short(self):
        errors = validate({"displayName": "A", "email": "a@b.co", "dailyGoal": 30})
        assert errors == {"displayName": MESSAGES["displayName.short"]}

    @pytest.mark.parametrize("email", ["", "  "])
    def test_blank_email_is_required(self, email: str):
        errors = validate({"displayName": "Al", "email": email, "dailyGoal": 30})
        assert errors == {"email": MESSAGES["email.required"]}

    @pytest.mark.parametrize(
        "email",
        ["plain", "a@b", "@b.co", "a@.co", "a b@c.de", "a@b c.de", "a@@b.co"],
    )
    def test_malformed_email(self, email: str):
        errors = validate({"displayName": "Al", "email": email, "dailyGoal": 30})
        assert errors == {"email": MESSAGES["email.invalid"]}

    @given(goal=st.one_of(st.integers(max_value=0), st.integers(min_value=121)))
    @settings(max_examples=50)
    def test_goal_out_of_range(self, goal: int):
        errors = validate({"displayName": "Al", "email": "a@b.co", "dailyGoal": goal})
        assert errors == {"dailyGoal": MESSAGES["dailyGoal.range"]}

    @pytest.mark.parametrize("goal", [1, 120])
    def test_goal_bounds_are_inclusive(self, goal: int):
        assert validate({"displayName": "Al", "email": "a@b.co", "dailyGoal": goal}) == {}

    def test_missing_goal_is_out_of_range(self):
        errors = validate({"displayName": "Al", "email": "a@b.co"})
        assert set(errors) == {"dailyGoal"}

    @pytest.mark.parametrize(
        "name,expected",
        [
            (12345, {}),
            (7, {"displayName": MESSAGES["displayName.short"]}),
            (0, {"displayName": MESSAGES["displayName.required"]}),
        ],
    )
    def test_non_string_name_is_read_as_text(self, name, expected: dict):
        errors = validate({"displayName": name, "email": "a@b.co", "dailyGoal": 30})
        assert errors == expected

    def test_all_fields_invalid(self):
        errors = validate({"displayName": "", "email": "x", "dailyGoal": 0})
        assert set(errors) == {"displayName", "email", "dailyGoal"}


class TestPurity:
    """
    **Property: Validation Is Pure**

    *For any* draft, validating twice gives the same errors and leaves
    the draft unchanged.
    """

    @given(
        draft=st.fixed_dictionaries({
            "displayName": st.text(max_size=10),
            "email": st.text(max_size=20),
            "dailyGoal": st.integers(min_value=-10, max_value=200),
        })
    )
    @settings(max_examples=100)
    def test_idempotent_and_non_mutating(self, draft: dict):
        before = copy.deepcopy(draft)

        first = validate(draft)
        second = validate(draft)

        assert first == second
        assert draft == before


class TestCoerceInt:
    """Numeric form input becomes an integer; invalid input becomes 0."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("42", 42),
            (" 15 ", 15),
            ("42min", 42),
            ("-3", -3),
            ("", 0),
            ("abc", 0),
            (None, 0),
            (12.9, 12),
            (float("nan"), 0),
            (7, 7),
        ],
    )
    def test_coercion(self, value, expected: int):
        assert coerce_int(value) == expected

    @given(number=st.integers())
    @settings(max_examples=50)
    def test_integer_text_round_trips(self, number: int):
        assert coerce_int(str(number)) == number


class TestJournalDraftValidation:
    """A journal draft only needs a non-blank title."""

    def test_blank_title(self):
        assert validate_journal_draft(JournalDraft(title="   ")) == {
            "title": MESSAGES["title.required"]
        }

    def test_titled_draft_is_valid(self):
        assert validate_journal_draft(JournalDraft(title="Morning")) == {}
