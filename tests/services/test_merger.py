"""Tests for SettingsMerger fail-open behavior."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from m2boot.config.models import SettingsRequest
from m2boot.services.merger import SETTINGS_BUILD_FAILED, SettingsMerger
from tests.conftest import mirror_xml, settings_xml


def _request(user: Path | None) -> SettingsRequest:
    return SettingsRequest(user_settings_file=user, user_home=Path("/home/u"), environ={})


class TestSettingsMerger:
    def test_success(self, tmp_path: Path) -> None:
        user = tmp_path / "settings.xml"
        user.write_text(settings_xml(mirrors=[mirror_xml("m", "http://m", "*")]))
        result = SettingsMerger().merge(_request(user))
        assert result.ok is True
        assert result.settings is not None
        assert [m.id for m in result.settings.mirrors] == ["m"]
        assert result.error is None

    def test_no_files_is_success(self) -> None:
        result = SettingsMerger().merge(_request(None))
        assert result.ok is True
        assert result.settings is not None
        assert result.settings.mirrors == ()

    def test_failure_returned_not_raised(self, tmp_path: Path) -> None:
        user = tmp_path / "settings.xml"
        user.write_text("<settings>")
        result = SettingsMerger().merge(_request(user))
        assert result.ok is False
        assert result.settings is None
        assert result.error is not None
        assert result.error.code == SETTINGS_BUILD_FAILED
        assert result.error.detail["files"] == [str(user)]
        assert len(result.error.detail["problems"]) == 1

    def test_failure_is_logged(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        user = tmp_path / "settings.xml"
        user.write_text("<settings>")
        with caplog.at_level(logging.ERROR, logger="m2boot"):
            SettingsMerger().merge(_request(user))
        assert any("maven settings" in r.getMessage() for r in caplog.records)

    def test_warnings_surface(self, tmp_path: Path) -> None:
        user = tmp_path / "settings.xml"
        user.write_text(settings_xml(mirrors=[mirror_xml("local", "http://m", "*")]))
        result = SettingsMerger().merge(_request(user))
        assert result.ok is True
        assert len(result.warnings) == 1
        assert "reserved" in result.warnings[0]
