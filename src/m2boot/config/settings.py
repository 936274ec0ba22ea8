"""Unified tool settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``M2BOOT_*`` prefix
  3. TOML file    — ``m2boot.toml`` discovered via walk-up
  4. Code defaults

These settings configure m2boot itself. The Maven ``settings.xml`` files
are located and merged separately (:mod:`m2boot.config.discovery`,
:mod:`m2boot.services.merger`).
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from m2boot.config.discovery import default_local_repository_path, find_config
from m2boot.config.models import CENTRAL_REPOSITORY, RepositoryDescriptor


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from an ``m2boot.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


def _default_repositories() -> list[RepositoryDescriptor]:
    return [CENTRAL_REPOSITORY]


class BootSettings(BaseSettings):
    """Settings for the m2boot CLI and bootstrapper.

    Attributes:
        user_home: Home directory holding ``.m2/``.
        local_repository: Explicit local repository; defaults to
            ``<user_home>/.m2/repository``.
        repositories: Remote repositories handed to the engine. Defaults to
            Maven Central only.
        discover_listeners: Also load listeners from the
            ``m2boot.listeners`` entry-point group. Off by default.
        config_path: The ``m2boot.toml`` in effect, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "M2BOOT_",
        "env_nested_delimiter": "__",
    }

    user_home: Path = Field(default_factory=Path.home)
    local_repository: Path | None = None
    repositories: list[RepositoryDescriptor] = Field(default_factory=_default_repositories)
    discover_listeners: bool = False
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    @property
    def local_repository_path(self) -> Path:
        """Configured local repository, or the conventional default."""
        if self.local_repository is not None:
            return self.local_repository
        return default_local_repository_path(self.user_home)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        **cli_flags: Any,
    ) -> BootSettings:
        """Construct settings from a CLI invocation.

        Uses an explicit *config_path* when given, otherwise discovers
        ``m2boot.toml`` by walking up from *start* (default: cwd). Flags
        whose value is None are left to lower-priority sources.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(start)

        overrides = {k: v for k, v in cli_flags.items() if v is not None}

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **overrides)
        finally:
            _tls.toml_path = None
