"""Configuration module."""

from marquee.config.loader import find_config_path, load_config
from marquee.config.models import (
    IrcConfig,
    MarqueeConfig,
    ServerConfig,
    ShowtimesConfig,
)
from marquee.config.paths import (
    get_config_path,
    get_database_path,
    get_marquee_home,
)

__all__ = [
    "IrcConfig",
    "MarqueeConfig",
    "ServerConfig",
    "ShowtimesConfig",
    "find_config_path",
    "get_config_path",
    "get_database_path",
    "get_marquee_home",
    "load_config",
]
