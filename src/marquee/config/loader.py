"""Configuration loading from TOML files and environment variables."""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import SecretStr

from marquee.config.models import MarqueeConfig
from marquee.config.paths import get_config_path

logger = logging.getLogger(__name__)

NICKSERV_PASSWORD_ENV = "MARQUEE_NICKSERV_PASSWORD"


def _get_default_config_paths() -> list[Path]:
    """Get ordered list of default config file locations."""
    return [
        Path("config.toml"),  # Current directory
        get_config_path(),  # ~/.marquee/config.toml (or MARQUEE_HOME)
        Path("/etc/marquee/config.toml"),  # System-wide
    ]


def _resolve_env_secrets(config: dict[str, Any]) -> dict[str, Any]:
    """Fill secrets from environment variables where not set in config."""
    irc = config.setdefault("irc", {})
    if irc.get("nickserv_password") is None:
        value = os.environ.get(NICKSERV_PASSWORD_ENV)
        if value:
            irc["nickserv_password"] = SecretStr(value)
    return config


def find_config_path(path: Path | None = None) -> Path | None:
    """Resolve the config file to load.

    Raises:
        FileNotFoundError: If an explicit path does not exist.
    """
    if path is not None:
        config_path = Path(path).expanduser()
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        return config_path

    for default_path in _get_default_config_paths():
        expanded = default_path.expanduser()
        if expanded.exists():
            return expanded
    return None


def load_config(path: Path | None = None) -> MarqueeConfig:
    """Load configuration from a TOML file.

    Args:
        path: Explicit path to config file. If None, searches default
            locations and falls back to built-in defaults.

    Returns:
        Validated MarqueeConfig instance.

    Raises:
        FileNotFoundError: If an explicit config file is missing.
        tomllib.TOMLDecodeError: If the file is not valid TOML.
        pydantic.ValidationError: If the config values are invalid.
    """
    config_path = find_config_path(path)

    raw_config: dict[str, Any] = {}
    if config_path is None:
        logger.info("config_defaults_used")
    else:
        with config_path.open("rb") as f:
            raw_config = tomllib.load(f)
        logger.info("config_loaded", extra={"config.path": str(config_path)})

    raw_config = _resolve_env_secrets(raw_config)
    return MarqueeConfig.model_validate(raw_config)
