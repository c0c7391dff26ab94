"""Tests for configuration loading and models."""

from datetime import timedelta
from pathlib import Path

import pytest
from pydantic import ValidationError

from marquee.config import (
    IrcConfig,
    ServerConfig,
    ShowtimesConfig,
    load_config,
)
from marquee.config.loader import NICKSERV_PASSWORD_ENV
from marquee.config.paths import ENV_VAR, get_config_path, get_marquee_home
from marquee.showtimes import RecencyPolicy


class TestIrcConfig:
    def test_defaults(self):
        config = IrcConfig()
        assert config.server == "irc.snoonet.org:6667"
        assert config.nick == "marquee"
        assert config.channel == "#stopdrinkingcinema"
        assert config.nickserv_password is None
        assert config.authorized_nicks == []
        assert config.command_prefix == "."

    def test_invalid_port(self):
        with pytest.raises(ValidationError):
            IrcConfig(server="irc.example.com:abc")


class TestShowtimesConfig:
    def test_defaults(self):
        config = ShowtimesConfig()
        assert config.backend == "sqlite"
        assert config.recency_policy == RecencyPolicy.BOUNDED
        assert config.current_window == timedelta(hours=3)
        assert config.storage_timeout == 10.0

    def test_policy_from_string(self):
        config = ShowtimesConfig(recency_policy="unbounded")
        assert config.recency_policy == RecencyPolicy.UNBOUNDED

    def test_unknown_policy_rejected(self):
        with pytest.raises(ValidationError):
            ShowtimesConfig(recency_policy="sometimes")

    def test_unknown_backend_rejected(self):
        with pytest.raises(ValidationError):
            ShowtimesConfig(backend="postgres")

    def test_window_must_be_positive(self):
        with pytest.raises(ValidationError):
            ShowtimesConfig(current_window_hours=0)


class TestServerConfig:
    def test_defaults(self):
        config = ServerConfig()
        assert config.enabled is True
        assert config.port == 8000


class TestLoadConfig:
    def test_load_file(self, config_file: Path):
        config = load_config(config_file)

        assert config.irc.server == "irc.example.com:6667"
        assert config.irc.nick == "testbot"
        assert config.irc.channel == "#testchan"
        assert config.irc.nickserv_password.get_secret_value() == "secret"
        assert config.irc.authorized_nicks == ["alice"]
        assert config.showtimes.backend == "memory"
        assert config.showtimes.recency_policy == RecencyPolicy.UNBOUNDED

    def test_missing_explicit_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nonexistent.toml")

    def test_invalid_toml(self, tmp_path: Path):
        import tomllib

        path = tmp_path / "bad.toml"
        path.write_text("{invalid toml")
        with pytest.raises(tomllib.TOMLDecodeError):
            load_config(path)

    def test_defaults_when_no_file(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv(ENV_VAR, str(tmp_path / "home"))
        monkeypatch.delenv(NICKSERV_PASSWORD_ENV, raising=False)

        config = load_config()

        assert config.irc == IrcConfig()
        assert config.server == ServerConfig()
        assert config.showtimes.backend == "sqlite"
        assert config.showtimes.database_path == (tmp_path / "home").resolve() / (
            "cinema_bot.db"
        )

    def test_password_from_env(self, tmp_path: Path, monkeypatch):
        path = tmp_path / "config.toml"
        path.write_text('[irc]\nnick = "bot"\n')
        monkeypatch.setenv(NICKSERV_PASSWORD_ENV, "from-env")

        config = load_config(path)

        assert config.irc.nickserv_password.get_secret_value() == "from-env"

    def test_file_password_wins_over_env(self, config_file: Path, monkeypatch):
        monkeypatch.setenv(NICKSERV_PASSWORD_ENV, "from-env")
        config = load_config(config_file)
        assert config.irc.nickserv_password.get_secret_value() == "secret"


class TestPaths:
    def test_home_from_env(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv(ENV_VAR, str(tmp_path))
        assert get_marquee_home() == tmp_path.resolve()
        assert get_config_path() == tmp_path.resolve() / "config.toml"

    def test_default_home(self, monkeypatch):
        monkeypatch.delenv(ENV_VAR, raising=False)
        assert get_marquee_home() == Path.home() / ".marquee"

    def test_default_database_under_home(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv(ENV_VAR, str(tmp_path))
        assert ShowtimesConfig().database_path == tmp_path.resolve() / "cinema_bot.db"
