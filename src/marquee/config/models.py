"""Configuration models using Pydantic."""

from datetime import timedelta
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, SecretStr, field_validator

from marquee.config.paths import get_database_path
from marquee.showtimes.types import RecencyPolicy


class IrcConfig(BaseModel):
    """Configuration for the IRC connection."""

    server: str = "irc.snoonet.org:6667"
    nick: str = "marquee"
    channel: str = "#stopdrinkingcinema"
    nickserv_password: SecretStr | None = None
    # Nicks allowed to manage showtimes (must also carry the user/<nick> cloak)
    authorized_nicks: list[str] = []
    command_prefix: str = "."

    @field_validator("server")
    @classmethod
    def _validate_server(cls, value: str) -> str:
        _, sep, port = value.rpartition(":")
        if sep and not port.isdigit():
            raise ValueError(f"Invalid port in server address: {value}")
        return value


class ShowtimesConfig(BaseModel):
    """Configuration for showtime storage and queries."""

    backend: Literal["memory", "sqlite"] = "sqlite"
    database_path: Path = Field(default_factory=get_database_path)
    # "bounded": only showtimes started within current_window_hours are current
    # "unbounded": the latest past showtime is always current
    recency_policy: RecencyPolicy = RecencyPolicy.BOUNDED
    current_window_hours: float = Field(default=3.0, gt=0)
    # Seconds before a storage call is abandoned; None disables the limit
    storage_timeout: float | None = Field(default=10.0, gt=0)

    @property
    def current_window(self) -> timedelta:
        return timedelta(hours=self.current_window_hours)


class ServerConfig(BaseModel):
    """Configuration for the health-check HTTP server."""

    enabled: bool = True
    host: str = "0.0.0.0"
    port: int = 8000


class MarqueeConfig(BaseModel):
    """Root configuration model."""

    irc: IrcConfig = Field(default_factory=IrcConfig)
    showtimes: ShowtimesConfig = Field(default_factory=ShowtimesConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
