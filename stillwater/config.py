"""Configuration for Stillwater.

Settings live in ``~/.config/stillwater/config.toml``; the
``STILLWATER_CONFIG`` environment variable points at another file.
A missing or unreadable file means defaults everywhere.
"""

import logging
import os
from pathlib import Path
from typing import Optional

import toml
from pydantic import BaseModel, Field, ValidationError

from stillwater.context import SensoryContext, UserIdentity

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "STILLWATER_CONFIG"
DEFAULT_CONFIG_DIR = Path.home() / ".config" / "stillwater"
DEFAULT_DB_PATH = DEFAULT_CONFIG_DIR / "stillwater.db"


class StorageConfig(BaseModel):
    db_path: Path = Field(default=DEFAULT_DB_PATH, description="SQLite slot store location")


class SettingsConfig(BaseModel):
    submit_latency: float = Field(default=0.5, ge=0, description="Simulated save latency (s)")
    success_window: float = Field(default=3.0, ge=0, description="Success banner duration (s)")


class LoggingConfig(BaseModel):
    level: str = Field(default="WARNING", description="Log level name")


class SensoryConfig(BaseModel):
    theme: str = "dark"
    breathing_speed: str = "normal"
    breathing_pattern: str = "4-7-8"


class UserConfig(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None


class AppConfig(BaseModel):
    """Top-level application configuration."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    settings: SettingsConfig = Field(default_factory=SettingsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    sensory: SensoryConfig = Field(default_factory=SensoryConfig)
    user: UserConfig = Field(default_factory=UserConfig)

    def identity(self) -> Optional[UserIdentity]:
        """The configured user identity, or None if nothing is set.

        Empty strings count as not set.
        """
        name = self.user.name or None
        email = self.user.email or None
        if name is None and email is None:
            return None
        return UserIdentity(name=name, email=email)

    def sensory_context(self) -> SensoryContext:
        return SensoryContext(
            theme=self.sensory.theme,
            breathing_speed=self.sensory.breathing_speed,
            breathing_pattern=self.sensory.breathing_pattern,
            user=self.identity(),
        )


def config_path() -> Path:
    """Path of the active config file."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return DEFAULT_CONFIG_DIR / "config.toml"


def _read_config_file(path: Path) -> Optional[dict]:
    """Read the raw config dict.

    Returns:
        Config dict or None if missing or unreadable.
    """
    if not path.exists():
        return None

    try:
        return toml.load(path)
    except (toml.TomlDecodeError, OSError) as e:
        logger.warning("Ignoring unreadable config %s: %s", path, e)
        return None


def load_config(path: Optional[Path] = None) -> AppConfig:
    """Load configuration, falling back to defaults.

    Args:
        path: Config file to read. Defaults to ``config_path()``.

    Returns:
        The parsed configuration.
    """
    path = path or config_path()
    raw = _read_config_file(path)
    if raw is None:
        return AppConfig()

    try:
        config = AppConfig.model_validate(raw)
    except ValidationError as e:
        logger.warning("Invalid config %s, using defaults: %s", path, e)
        return AppConfig()

    storage = config.storage.model_copy(update={"db_path": config.storage.db_path.expanduser()})
    return config.model_copy(update={"storage": storage})


def create_template_config(path: Optional[Path] = None) -> Path:
    """Create a template configuration file.

    Returns:
        Path of the written file.
    """
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    template = {
        "storage": {
            "db_path": str(DEFAULT_DB_PATH),
        },
        "settings": {
            "submit_latency": 0.5,
            "success_window": 3.0,
        },
        "logging": {
            "level": "WARNING",  # DEBUG, INFO, WARNING, ERROR
        },
        "sensory": {
            "theme": "dark",  # dark or light
            "breathing_speed": "normal",
            "breathing_pattern": "4-7-8",
        },
        "user": {
            "name": "",
            "email": "",
        },
    }

    with open(path, "w") as f:
        toml.dump(template, f)

    return path
