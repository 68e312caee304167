"""
settings.py

Application configuration management for replkit.

Features:
- Centralized configuration using Pydantic settings
- Constants for application-wide use
- Default history location resolved through appdirs

Usage:
Import appsettings for configuration values.
"""

from pathlib import Path
from typing import Final
from appdirs import user_data_dir
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Per-user data directory for the persisted command history
DATA_DIR: Final[Path] = Path(user_data_dir("replkit", ""))
HISTORY_FILE: Final[Path] = DATA_DIR / "history"
HISTORY_LENGTH: Final[int] = 1000


class App(BaseSettings):
    """
    Application settings model.

    Settings can be overridden through environment variables with the
    REPLKIT_ prefix.

    Attributes:
        beQuiet: Suppress detailed logging output
        prompt: Default prompt shown by the bundled CLI
        history_file: Where the bundled CLI loads and saves history
        history_size: Maximum number of history entries kept
        history_ignore_dups: Skip an entry equal to the most recent one
        require_tty: Refuse to start a terminal session on a non-tty stdin
    """

    beQuiet: bool = False

    prompt: str = "replkit> "

    history_file: Path = HISTORY_FILE
    history_size: int = Field(default=HISTORY_LENGTH, gt=0)
    history_ignore_dups: bool = True

    require_tty: bool = True

    model_config = SettingsConfigDict(
        env_prefix="REPLKIT_",  # Environment variables with this prefix override settings
        case_sensitive=False,
        extra="allow",
    )


# Create the application settings instance
appsettings: Final[App] = App()
