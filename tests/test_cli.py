"""Tests for CLI commands."""

from marquee.cli.app import app


class TestConfigCommand:
    def test_config_show_displays_content(self, cli_runner, config_file):
        result = cli_runner.invoke(app, ["config", "show", "--path", str(config_file)])
        assert result.exit_code == 0
        assert "#testchan" in result.stdout

    def test_config_show_missing_file(self, cli_runner, tmp_path):
        result = cli_runner.invoke(
            app, ["config", "show", "--path", str(tmp_path / "missing.toml")]
        )
        assert result.exit_code == 1
        assert "not found" in result.stdout

    def test_config_validate_success(self, cli_runner, config_file):
        result = cli_runner.invoke(
            app, ["config", "validate", "--path", str(config_file)]
        )
        assert result.exit_code == 0
        assert "valid" in result.stdout.lower()
        assert "unbounded" in result.stdout

    def test_config_validate_invalid_config(self, cli_runner, tmp_path):
        bad = tmp_path / "bad.toml"
        bad.write_text('[showtimes]\nrecency_policy = "sometimes"\n')

        result = cli_runner.invoke(app, ["config", "validate", "--path", str(bad)])

        assert result.exit_code == 1
        assert "validation failed" in result.stdout.lower()

    def test_config_validate_invalid_toml(self, cli_runner, tmp_path):
        bad = tmp_path / "bad.toml"
        bad.write_text("not valid toml [[[")

        result = cli_runner.invoke(app, ["config", "validate", "--path", str(bad)])

        assert result.exit_code == 1

    def test_config_unknown_action(self, cli_runner):
        result = cli_runner.invoke(app, ["config", "unknown"])
        assert result.exit_code == 1
        assert "Unknown action" in result.stdout


class TestTokenizeCommand:
    def test_prints_tokens(self, cli_runner):
        result = cli_runner.invoke(app, ["tokenize", "--", '-title="My Movie" -id=abc'])
        assert result.exit_code == 0
        assert "0: '-title=My Movie'" in result.stdout
        assert "1: '-id=abc'" in result.stdout

    def test_no_tokens(self, cli_runner):
        result = cli_runner.invoke(app, ["tokenize", "   "])
        assert result.exit_code == 0
        assert "no tokens" in result.stdout


class TestServeCommand:
    def test_missing_config(self, cli_runner, tmp_path):
        result = cli_runner.invoke(
            app, ["serve", "--config", str(tmp_path / "missing.toml")]
        )
        assert result.exit_code == 1
        assert "Error loading config" in result.stdout
