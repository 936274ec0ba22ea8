"""Pydantic models for located and merged Maven settings.

Everything here is frozen: a model is built once per bootstrap call and
handed on by reference.
"""

from __future__ import annotations

import re
from pathlib import Path

from pydantic import BaseModel, Field

# Protocol may carry a sub-protocol (``dav:http``); host sits after ``//`` and
# optional user info.
_URL_PATTERN = re.compile(r"([^:/]+(:[^:/]{2,}(?=://))?):(//([^@/]*@)?([^/:]+))?.*")


# --- Settings building input ---


class SettingsRequest(BaseModel):
    """Files and context handed to the settings builder.

    Either file reference may be absent; an empty request builds empty
    settings.
    """

    model_config = {"frozen": True}

    user_settings_file: Path | None = None
    global_settings_file: Path | None = None
    user_home: Path = Field(default_factory=Path.home)
    environ: dict[str, str] = Field(default_factory=dict)

    @property
    def files(self) -> list[Path]:
        """Present settings files, dominant (user) first."""
        return [p for p in (self.user_settings_file, self.global_settings_file) if p is not None]


# --- Effective settings ---


class MirrorRule(BaseModel):
    """``<mirror>`` entry: a substitute for repositories matching ``mirror_of``."""

    model_config = {"frozen": True}

    id: str
    url: str
    mirror_of: str
    layout: str = "default"
    mirror_of_layouts: str = "default,legacy"
    name: str | None = None


class ProxyRule(BaseModel):
    """``<proxy>`` entry.

    Credentials are not modeled; the reader drops ``username`` and
    ``password`` elements.
    """

    model_config = {"frozen": True}

    id: str = "default"
    protocol: str = "http"
    host: str
    port: int = 8080
    non_proxy_hosts: str | None = None


class EffectiveSettings(BaseModel):
    """Merged user-over-installation settings."""

    model_config = {"frozen": True}

    mirrors: tuple[MirrorRule, ...] = ()
    proxies: tuple[ProxyRule, ...] = ()
    local_repository: str | None = None


# --- Remote repositories ---


class RepositoryDescriptor(BaseModel):
    """A remote repository handed to the resolution engine."""

    model_config = {"frozen": True}

    id: str
    type: str = "default"
    url: str

    @property
    def protocol(self) -> str:
        match = _URL_PATTERN.fullmatch(self.url)
        return match.group(1) if match else ""

    @property
    def host(self) -> str:
        match = _URL_PATTERN.fullmatch(self.url)
        return (match.group(5) or "") if match else ""


CENTRAL_REPOSITORY = RepositoryDescriptor(
    id="central",
    type="default",
    url="https://repo.maven.apache.org/maven2/",
)
