"""Settings profile data model."""

from pydantic import BaseModel, Field


class SettingsProfile(BaseModel):
    """The user's settings profile.

    The model accepts any values of the right type; field rules are
    enforced by ``stillwater.validation.validate`` before a profile is
    persisted, so a freshly loaded profile may still be unvalidated.
    """

    display_name: str = Field(default="", alias="displayName", description="Name shown in the app")
    email: str = Field(default="", description="Contact email")
    daily_goal: int = Field(default=10, alias="dailyGoal", description="Daily practice goal in minutes")
    notifications: bool = Field(default=True, description="Reminder notifications enabled")
    sound_enabled: bool = Field(default=True, alias="soundEnabled", description="Session sounds enabled")

    model_config = {"frozen": True, "populate_by_name": True}

    @staticmethod
    def defaults() -> "SettingsProfile":
        return SettingsProfile()

    def to_payload(self) -> dict:
        """Serializable form using the stored (camelCase) field names."""
        return self.model_dump(by_alias=True)


# camelCase name -> attribute name
FIELD_NAMES = {
    "displayName": "display_name",
    "email": "email",
    "dailyGoal": "daily_goal",
    "notifications": "notifications",
    "soundEnabled": "sound_enabled",
}

NUMERIC_FIELDS = frozenset({"daily_goal"})
BOOLEAN_FIELDS = frozenset({"notifications", "sound_enabled"})


def attribute_name(name: str) -> str:
    """Resolve a camelCase or snake_case settings field name.

    Raises:
        KeyError: If the name is not a settings field.
    """
    if name in FIELD_NAMES:
        return FIELD_NAMES[name]
    if name in FIELD_NAMES.values():
        return name
    raise KeyError(name)


def alias_name(name: str) -> str:
    """The camelCase name used for errors, touched flags and storage."""
    attr = attribute_name(name)
    for alias, attribute in FIELD_NAMES.items():
        if attribute == attr:
            return alias
    raise KeyError(name)
