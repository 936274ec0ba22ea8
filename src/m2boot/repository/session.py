"""RepositorySession — configuration handed to the resolution engine.

A session is assembled once by the bootstrapper and then only read by the
engine. It is not safe to mutate from more than one thread; build one
session per concurrent caller.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from m2boot.listeners.manager import ListenerManager
from m2boot.repository.selectors import MirrorSelector, ProxySelector

if TYPE_CHECKING:
    from m2boot.config.models import EffectiveSettings


@dataclass(frozen=True)
class LocalRepository:
    """On-disk cache location; its layout belongs to the engine."""

    basedir: Path
    content_type: str = "default"


@dataclass(frozen=True)
class LocalRepositoryManager:
    repository: LocalRepository

    @property
    def basedir(self) -> Path:
        return self.repository.basedir


@dataclass
class RepositorySession:
    """Mutable session state accumulated during bootstrap.

    Attributes:
        local_repository_manager: Set by ``new_session``.
        mirror_selector: Empty until settings are loaded.
        proxy_selector: Empty until settings are loaded.
        listeners: Transfer and repository listeners.
        settings: Effective settings behind the current selectors, if any.
    """

    local_repository_manager: LocalRepositoryManager | None = None
    mirror_selector: MirrorSelector = field(default_factory=MirrorSelector)
    proxy_selector: ProxySelector = field(default_factory=ProxySelector)
    listeners: ListenerManager = field(default_factory=ListenerManager)
    settings: EffectiveSettings | None = None

    def attach_selectors(
        self,
        mirror_selector: MirrorSelector,
        proxy_selector: ProxySelector,
        settings: EffectiveSettings | None = None,
    ) -> None:
        """Replace both selectors at once; previous selectors are discarded."""
        self.mirror_selector = mirror_selector
        self.proxy_selector = proxy_selector
        self.settings = settings

    def reset_selectors(self) -> None:
        """Fall back to empty selectors."""
        self.attach_selectors(MirrorSelector(), ProxySelector(), None)
