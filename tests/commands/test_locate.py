"""Tests for the locate command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from m2boot.cli import cli
from tests.conftest import settings_xml, write_global_settings, write_user_settings


@pytest.mark.usefixtures("_isolated_env")
class TestLocateCommand:
    def test_nothing_found(self, cli_runner: CliRunner, user_home: Path) -> None:
        result = cli_runner.invoke(cli, ["--json", "--user-home", str(user_home), "locate"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)["data"]
        assert data["installation_home"] is None
        assert data["user_settings"] is None
        assert data["global_settings"] is None
        assert data["local_repository"] == str(user_home / ".m2" / "repository")

    def test_finds_both_files(
        self,
        cli_runner: CliRunner,
        user_home: Path,
        maven_home: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        user = write_user_settings(user_home, settings_xml())
        glob = write_global_settings(maven_home, settings_xml())
        monkeypatch.setenv("M2_HOME", str(maven_home))

        result = cli_runner.invoke(cli, ["--json", "--user-home", str(user_home), "locate"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)["data"]
        assert data["installation_home"] == str(maven_home)
        assert data["user_settings"] == str(user)
        assert data["global_settings"] == str(glob)

    def test_installation_found_on_path(
        self,
        cli_runner: CliRunner,
        user_home: Path,
        maven_home: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("PATH", str(maven_home / "bin"))
        result = cli_runner.invoke(cli, ["--json", "--user-home", str(user_home), "locate"])
        assert json.loads(result.stdout)["data"]["installation_home"] == str(maven_home)

    def test_human_output(self, cli_runner: CliRunner, user_home: Path) -> None:
        result = cli_runner.invoke(cli, ["--user-home", str(user_home), "locate"])
        assert result.exit_code == 0
        assert result.stdout.startswith("OK: locate_settings")
        assert "local_repository:" in result.stdout
