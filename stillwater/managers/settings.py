"""Settings profile manager.

Holds the editable settings draft with its errors and touched flags.
The profile is written to the ``userSettings`` slot only by a submit
that passed validation.
"""

import asyncio
import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any, Awaitable, Callable, Optional, Union

from pydantic import ValidationError

from stillwater.context import UserIdentity
from stillwater.db.store import SETTINGS_SLOT, SlotStore, load_json, save_json
from stillwater.errors import PersistenceWriteError, ValidationErrors
from stillwater.models.settings import (
    BOOLEAN_FIELDS,
    FIELD_NAMES,
    NUMERIC_FIELDS,
    SettingsProfile,
    alias_name,
    attribute_name,
)
from stillwater.timers import GenerationTimer, Scheduler
from stillwater.validation import REQUIRED_FIELDS, coerce_int, validate

logger = logging.getLogger(__name__)

DEFAULT_SUBMIT_LATENCY = 0.5
DEFAULT_SUCCESS_WINDOW = 3.0


class ProfileState(str, Enum):
    """Edit state of the settings draft."""

    CLEAN = "clean"
    EDITING = "editing"
    VALIDATING = "validating"


class SettingsManager:
    """Edit, validate and save the settings profile."""

    def __init__(
        self,
        store: SlotStore,
        latency: float = DEFAULT_SUBMIT_LATENCY,
        success_window: float = DEFAULT_SUCCESS_WINDOW,
        scheduler: Optional[Scheduler] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        """Initialize the manager with a default profile.

        Call ``hydrate`` to load the stored profile.

        Args:
            store: Slot store holding the profile.
            latency: Seconds the save step waits before writing.
            success_window: Seconds the success flag stays set.
            scheduler: Timer scheduler for clearing the success flag.
            sleep: Coroutine used for the save latency.
        """
        self._store = store
        self._latency = latency
        self._success_window = success_window
        self._sleep = sleep
        self._banner = GenerationTimer(scheduler)

        self._draft: dict[str, Any] = SettingsProfile.defaults().model_dump()
        self._errors: ValidationErrors = {}
        self._touched: dict[str, bool] = {}
        self._state = ProfileState.CLEAN
        self._edits = 0
        self.is_submitting = False
        self.submit_success = False

    # ==================== Loading ====================

    def _load_stored(self) -> dict[str, Any]:
        payload = load_json(self._store, SETTINGS_SLOT)
        if payload is None:
            return {}
        if not isinstance(payload, dict):
            logger.warning("Failed to load settings: expected an object, got %s",
                           type(payload).__name__)
            return {}

        known = {FIELD_NAMES[k]: v for k, v in payload.items() if k in FIELD_NAMES}
        try:
            merged = SettingsProfile.model_validate(
                {**SettingsProfile.defaults().model_dump(), **known}
            )
        except ValidationError as e:
            logger.warning("Failed to load settings: %s", e)
            return {}
        return merged.model_dump()

    def hydrate(self, identity: Optional[UserIdentity] = None) -> SettingsProfile:
        """Load the stored profile over the defaults.

        Args:
            identity: Signed-in user. Only the fields it provides are
                overlaid; missing ones keep their stored or default value.

        Returns:
            The hydrated profile.
        """
        draft = SettingsProfile.defaults().model_dump()
        draft.update(self._load_stored())
        if identity is not None:
            draft.update(identity.overlay())

        self._draft = draft
        self._errors = {}
        self._touched = {}
        self._state = ProfileState.CLEAN
        return self.profile

    # ==================== State ====================

    @property
    def profile(self) -> SettingsProfile:
        """Snapshot of the current draft."""
        return SettingsProfile.model_validate(self._draft)

    @property
    def draft(self) -> dict[str, Any]:
        """Copy of the draft keyed by camelCase field names."""
        return {alias: self._draft[attr] for alias, attr in FIELD_NAMES.items()}

    @property
    def errors(self) -> ValidationErrors:
        return dict(self._errors)

    @property
    def touched(self) -> dict[str, bool]:
        return dict(self._touched)

    @property
    def state(self) -> ProfileState:
        return self._state

    def visible_errors(self) -> ValidationErrors:
        """Errors for fields the user has touched."""
        return {name: msg for name, msg in self._errors.items() if self._touched.get(name)}

    # ==================== Field events ====================

    def set_field(self, name: str, value: Any) -> None:
        """Change one draft field and clear its error.

        Numeric fields are coerced to integers (invalid input becomes 0).
        The field is not re-validated until it is touched or submitted.

        Raises:
            KeyError: If name is not a settings field.
        """
        attr = attribute_name(name)
        if attr in NUMERIC_FIELDS:
            value = coerce_int(value)
        elif attr in BOOLEAN_FIELDS:
            value = bool(value)
        elif value is None:
            value = ""
        else:
            value = str(value)

        self._draft[attr] = value
        self._edits += 1
        self._errors.pop(alias_name(attr), None)
        self._state = ProfileState.EDITING

    def touch_field(self, name: str) -> Optional[str]:
        """Mark a field touched and validate it.

        Returns:
            The field's error message, or None if it is valid.
        """
        alias = alias_name(name)
        self._touched[alias] = True

        message = validate(self._draft).get(alias)
        if message is None:
            self._errors.pop(alias, None)
        else:
            self._errors[alias] = message
        return message

    # ==================== Submit ====================

    def _clear_success(self) -> None:
        self.submit_success = False

    def _arm_success_clear(self) -> None:
        self._banner.schedule(self._success_window, self._clear_success)

    async def _save(self, draft: Union[SettingsProfile, Mapping, None]) -> bool:
        if draft is not None:
            values = draft.model_dump() if isinstance(draft, SettingsProfile) else draft
            for name, value in values.items():
                self.set_field(name, value)

        self._banner.cancel()
        self.submit_success = False
        self.is_submitting = True

        for name in REQUIRED_FIELDS:
            self._touched[name] = True

        errors = validate(self._draft)
        if errors:
            self._errors = errors
            self._state = ProfileState.EDITING
            self.is_submitting = False
            logger.debug("Settings submit rejected: %s", sorted(errors))
            return False

        # Saved as validated, even if the draft changes during the wait
        profile = self.profile
        edits = self._edits
        self._errors = {}
        self._state = ProfileState.VALIDATING
        try:
            await self._sleep(self._latency)
            save_json(self._store, SETTINGS_SLOT, profile.to_payload())
        except (PersistenceWriteError, asyncio.CancelledError):
            self._state = ProfileState.EDITING
            raise
        finally:
            self.is_submitting = False

        if edits == self._edits:
            self._state = ProfileState.CLEAN
        else:
            self._state = ProfileState.EDITING
        self.submit_success = True
        logger.info("Settings saved")
        return True

    async def submit(self, draft: Union[SettingsProfile, Mapping, None] = None) -> bool:
        """Validate and save the profile.

        Args:
            draft: Optional replacement for the whole draft.

        Returns:
            True if the profile was saved, False if validation failed.

        Raises:
            PersistenceWriteError: If the store rejected the write.
        """
        saved = await self._save(draft)
        if saved:
            self._arm_success_clear()
        return saved

    def submit_sync(self, draft: Union[SettingsProfile, Mapping, None] = None) -> bool:
        """Run ``submit`` to completion outside an event loop.

        The success flag is cleared by a timer armed after the loop exits,
        since ``asyncio.run`` closes its loop on return.
        """
        saved = asyncio.run(self._save(draft))
        if saved:
            self._arm_success_clear()
        return saved
