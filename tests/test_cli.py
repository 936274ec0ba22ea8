"""Tests for the root m2boot CLI."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from m2boot import __version__
from m2boot.cli import cli


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "m2boot" in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


@pytest.mark.usefixtures("_isolated_env")
def test_cli_no_args(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage" in result.output


@pytest.mark.usefixtures("_isolated_env")
def test_commands_registered(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    for name in ("locate", "settings", "repos", "session"):
        assert name in result.output


# --- Global flags ---


@pytest.mark.parametrize("flag", ["--json", "-q", "-v", "--log-json"])
def test_global_flag_accepted(cli_runner: CliRunner, flag: str) -> None:
    result = cli_runner.invoke(cli, [flag, "--version"])
    assert result.exit_code == 0


@pytest.mark.usefixtures("_isolated_env")
def test_quiet_prints_status_only(cli_runner: CliRunner, user_home: Path) -> None:
    result = cli_runner.invoke(cli, ["-q", "--user-home", str(user_home), "locate"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "OK: locate_settings"


@pytest.mark.usefixtures("_isolated_env")
def test_user_home_from_config_file(cli_runner: CliRunner, tmp_path: Path) -> None:
    home = tmp_path / "configured-home"
    config = tmp_path / "custom.toml"
    config.write_text(f'user_home = "{home.as_posix()}"\n')
    result = cli_runner.invoke(cli, ["--json", "-c", str(config), "locate"])
    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)["data"]
    assert data["local_repository"] == str(home / ".m2" / "repository")


@pytest.mark.usefixtures("_isolated_env")
def test_invalid_config_file(cli_runner: CliRunner, tmp_path: Path) -> None:
    config = tmp_path / "bad.toml"
    config.write_text("user_home = [unterminated\n")
    result = cli_runner.invoke(cli, ["-c", str(config), "locate"])
    assert result.exit_code != 0
    assert "Invalid TOML" in result.output
