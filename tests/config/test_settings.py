"""Tests for BootSettings (CLI flags, env vars, m2boot.toml)."""

from __future__ import annotations

from pathlib import Path

import click
import pytest

from m2boot.config.models import CENTRAL_REPOSITORY
from m2boot.config.settings import BootSettings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for name in (
        "M2BOOT_CONFIG",
        "M2BOOT_USER_HOME",
        "M2BOOT_LOCAL_REPOSITORY",
        "M2BOOT_DISCOVER_LISTENERS",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


class TestBootSettings:
    def test_defaults(self, tmp_path: Path) -> None:
        settings = BootSettings.from_cli(start=tmp_path)
        assert settings.repositories == [CENTRAL_REPOSITORY]
        assert settings.local_repository is None
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.discover_listeners is False

    def test_local_repository_default(self, tmp_path: Path) -> None:
        settings = BootSettings.from_cli(start=tmp_path, user_home=tmp_path / "u")
        assert settings.local_repository_path == tmp_path / "u" / ".m2" / "repository"

    def test_env_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("M2BOOT_LOCAL_REPOSITORY", str(tmp_path / "cache"))
        settings = BootSettings.from_cli(start=tmp_path)
        assert settings.local_repository_path == tmp_path / "cache"

    def test_toml_discovered(self, tmp_path: Path) -> None:
        (tmp_path / "m2boot.toml").write_text(
            'user_home = "/srv/ci"\n'
            "\n"
            "[[repositories]]\n"
            'id = "internal"\n'
            'url = "https://nexus.example.com/repository/maven/"\n'
        )
        settings = BootSettings.from_cli(start=tmp_path)
        assert settings.config_path == tmp_path / "m2boot.toml"
        assert settings.user_home == Path("/srv/ci")
        assert [r.id for r in settings.repositories] == ["internal"]

    def test_cli_flag_beats_toml(self, tmp_path: Path) -> None:
        (tmp_path / "m2boot.toml").write_text('user_home = "/srv/ci"\n')
        settings = BootSettings.from_cli(start=tmp_path, user_home=tmp_path)
        assert settings.user_home == tmp_path

    def test_none_flags_fall_through(self, tmp_path: Path) -> None:
        (tmp_path / "m2boot.toml").write_text('user_home = "/srv/ci"\n')
        settings = BootSettings.from_cli(start=tmp_path, user_home=None)
        assert settings.user_home == Path("/srv/ci")

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom.toml"
        custom.write_text("discover_listeners = true\n")
        settings = BootSettings.from_cli(config_path=str(custom))
        assert settings.config_path == custom
        assert settings.discover_listeners is True

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "m2boot.toml").write_text("user_home = \n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            BootSettings.from_cli(start=tmp_path)

    def test_frozen(self, tmp_path: Path) -> None:
        settings = BootSettings.from_cli(start=tmp_path)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]
