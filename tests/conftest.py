"""Shared pytest fixtures and helpers for m2boot tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

SETTINGS_NS = "http://maven.apache.org/SETTINGS/1.0.0"


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo handler changes made by configure_logging()."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    m2 = logging.getLogger("m2boot")
    m2_level = m2.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    m2.setLevel(m2_level)


@pytest.fixture
def user_home(tmp_path: Path) -> Path:
    """Empty home directory (no ``.m2/`` yet)."""
    home = tmp_path / "home"
    home.mkdir()
    return home


@pytest.fixture
def maven_home(tmp_path: Path) -> Path:
    """Maven installation directory with ``bin/m2.conf``."""
    home = tmp_path / "apache-maven"
    (home / "bin").mkdir(parents=True)
    (home / "bin" / "m2.conf").write_text(
        "main is org.apache.maven.cli.MavenCli from plexus.core\n"
    )
    return home


@pytest.fixture
def _isolated_env(tmp_path: Path, user_home: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Process environment with no Maven hints and no m2boot config.

    Use via ``@pytest.mark.usefixtures("_isolated_env")`` on CLI tests.
    """
    for name in ("M2_HOME", "MVN_HOME", "M2BOOT_CONFIG", "M2BOOT_USER_HOME"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("PATH", str(tmp_path / "empty-bin"))
    monkeypatch.setenv("M2BOOT_DISCOVER_LISTENERS", "false")
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# settings.xml helpers
# ---------------------------------------------------------------------------


def mirror_xml(mirror_id: str, url: str, mirror_of: str, layout: str | None = None) -> str:
    layout_xml = f"<layout>{layout}</layout>" if layout else ""
    return (
        f"<mirror><id>{mirror_id}</id><url>{url}</url>"
        f"<mirrorOf>{mirror_of}</mirrorOf>{layout_xml}</mirror>"
    )


def proxy_xml(
    host: str,
    port: int | str = 8080,
    *,
    proxy_id: str | None = None,
    protocol: str = "http",
    non_proxy_hosts: str | None = None,
    username: str | None = None,
    password: str | None = None,
) -> str:
    parts = [f"<protocol>{protocol}</protocol>", f"<host>{host}</host>", f"<port>{port}</port>"]
    if proxy_id:
        parts.insert(0, f"<id>{proxy_id}</id>")
    if non_proxy_hosts:
        parts.append(f"<nonProxyHosts>{non_proxy_hosts}</nonProxyHosts>")
    if username:
        parts.append(f"<username>{username}</username>")
    if password:
        parts.append(f"<password>{password}</password>")
    return f"<proxy>{''.join(parts)}</proxy>"


def settings_xml(
    *,
    mirrors: list[str] | None = None,
    proxies: list[str] | None = None,
    local_repository: str | None = None,
) -> str:
    body = []
    if local_repository:
        body.append(f"<localRepository>{local_repository}</localRepository>")
    if mirrors:
        body.append(f"<mirrors>{''.join(mirrors)}</mirrors>")
    if proxies:
        body.append(f"<proxies>{''.join(proxies)}</proxies>")
    return f'<?xml version="1.0"?>\n<settings xmlns="{SETTINGS_NS}">{"".join(body)}</settings>\n'


def write_user_settings(user_home: Path, content: str) -> Path:
    path = user_home / ".m2" / "settings.xml"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def write_global_settings(maven_home: Path, content: str) -> Path:
    path = maven_home / "settings.xml"
    path.write_text(content, encoding="utf-8")
    return path
