"""Centralized path management for Marquee.

All state (config, database) is stored under a single base directory.
The base directory can be overridden with the MARQUEE_HOME environment
variable.

Default locations:
- Linux/macOS: ~/.marquee
- Windows: %USERPROFILE%\\.marquee
"""

import os
from pathlib import Path

ENV_VAR = "MARQUEE_HOME"


def get_marquee_home() -> Path:
    """Get the base directory for all Marquee data.

    Resolution order:
    1. MARQUEE_HOME environment variable (if set)
    2. Platform default (~/.marquee)
    """
    if env_home := os.environ.get(ENV_VAR):
        return Path(env_home).expanduser().resolve()
    return Path.home() / ".marquee"


def get_config_path() -> Path:
    """Get the default config file path."""
    return get_marquee_home() / "config.toml"


def get_database_path() -> Path:
    """Get the default showtime database path."""
    return get_marquee_home() / "cinema_bot.db"
