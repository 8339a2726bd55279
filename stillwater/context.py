"""Explicit context objects passed to the managers and the CLI."""

from typing import Optional

from pydantic import BaseModel, Field


class UserIdentity(BaseModel):
    """Identity supplied by the signed-in user's account.

    Either field may be missing; only provided fields are overlaid onto
    the settings draft.
    """

    name: Optional[str] = Field(default=None, description="Display name")
    email: Optional[str] = Field(default=None, description="Email address")

    model_config = {"frozen": True}

    def overlay(self) -> dict:
        """Settings fields this identity provides, keyed by attribute name."""
        values = {}
        if self.name is not None:
            values["display_name"] = self.name
        if self.email is not None:
            values["email"] = self.email
        return values


class SensoryContext(BaseModel):
    """Theme and breathing preferences shared by the session views."""

    theme: str = Field(default="dark", description="Colour theme (dark/light)")
    breathing_speed: str = Field(default="normal", description="Breathing animation speed")
    breathing_pattern: str = Field(default="4-7-8", description="Breathing pattern")
    user: Optional[UserIdentity] = Field(default=None, description="Signed-in user")

    model_config = {"frozen": True}

    def toggled_theme(self) -> "SensoryContext":
        """Copy of this context with the other theme selected."""
        return self.model_copy(update={"theme": "light" if self.theme == "dark" else "dark"})
