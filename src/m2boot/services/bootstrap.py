"""SessionBootstrapper — assemble a repository session for the resolution engine.

``new_session`` builds the session skeleton (local repository manager and
listeners). ``load_settings`` locates and merges ``settings.xml`` files and
attaches mirror and proxy selectors. A settings failure leaves the session
usable with empty selectors; the failure is reported in the returned
ServiceResult.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any

from m2boot.config.discovery import build_settings_request, default_local_repository_path
from m2boot.config.models import CENTRAL_REPOSITORY, RepositoryDescriptor
from m2boot.listeners.console import ConsoleRepositoryListener, ConsoleTransferListener
from m2boot.repository.selectors import build_mirror_selector, build_proxy_selector
from m2boot.repository.session import LocalRepository, RepositorySession
from m2boot.repository.system import RepositorySystem, new_repository_system
from m2boot.services.merger import SettingsMerger
from m2boot.services.result import ServiceResult

if TYPE_CHECKING:
    from m2boot.config.settings import BootSettings

logger = logging.getLogger(__name__)


class SessionBootstrapper:
    """Builds sessions from the environment it was given.

    Parameters:
        user_home: Home directory holding ``.m2/``. Defaults to the current
            user's home.
        environ: Environment used for installation discovery and settings
            interpolation. Defaults to a snapshot of ``os.environ``.
        repositories: Remote repositories to hand to the engine. Defaults
            to Maven Central only.
        merger: Settings merger; replaceable for tests.
        discover_listeners: Also load listeners from entry points. Off by
            default, as in :class:`~m2boot.config.settings.BootSettings`.
    """

    def __init__(
        self,
        *,
        user_home: Path | None = None,
        environ: Mapping[str, str] | None = None,
        repositories: Sequence[RepositoryDescriptor] | None = None,
        merger: SettingsMerger | None = None,
        discover_listeners: bool = False,
    ) -> None:
        self._user_home = user_home if user_home is not None else Path.home()
        self._environ = dict(os.environ if environ is None else environ)
        self._repositories = list(repositories) if repositories else [CENTRAL_REPOSITORY]
        self._merger = merger or SettingsMerger()
        self._discover_listeners = discover_listeners

    @classmethod
    def from_settings(
        cls,
        settings: BootSettings,
        environ: Mapping[str, str] | None = None,
    ) -> SessionBootstrapper:
        return cls(
            user_home=settings.user_home,
            environ=environ,
            repositories=settings.repositories,
            discover_listeners=settings.discover_listeners,
        )

    @property
    def user_home(self) -> Path:
        return self._user_home

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def new_session(
        self,
        system: RepositorySystem,
        local_repo_path: Path | str,
    ) -> RepositorySession:
        """Create a session with a local repository and console listeners."""
        session = RepositorySession()
        local_repo = LocalRepository(Path(local_repo_path))
        session.local_repository_manager = system.new_local_repository_manager(session, local_repo)

        session.listeners.register(ConsoleTransferListener(), name="console-transfer")
        session.listeners.register(ConsoleRepositoryListener(), name="console-repository")
        if self._discover_listeners:
            session.listeners.discover()

        logger.debug("New session with local repository %s", local_repo.basedir)
        return session

    def load_settings(
        self,
        session: RepositorySession,
        user_home: Path | None = None,
    ) -> ServiceResult:
        """Attach selectors built from the located settings files.

        Both selectors are replaced together. When the settings cannot be
        built the session gets empty selectors and the result has
        ``ok=False``.
        """
        op = "load_settings"
        home = user_home if user_home is not None else self._user_home
        request = build_settings_request(home, self._environ)
        files = {
            "user_settings": str(request.user_settings_file or ""),
            "global_settings": str(request.global_settings_file or ""),
        }

        merged = self._merger.merge(request)
        if merged.settings is None:
            session.reset_selectors()
            return ServiceResult(
                ok=False,
                op=op,
                data={**files, "mirrors": [], "proxies": []},
                warnings=merged.warnings,
                error=merged.error,
            )

        effective = merged.settings
        session.attach_selectors(
            build_mirror_selector(effective.mirrors),
            build_proxy_selector(effective.proxies),
            effective,
        )
        return ServiceResult(
            ok=True,
            op=op,
            data={
                **files,
                "mirrors": [m.id for m in effective.mirrors],
                "proxies": [f"{p.protocol}://{p.host}:{p.port}" for p in effective.proxies],
            },
            warnings=merged.warnings,
        )

    def list_repositories(self) -> list[RepositoryDescriptor]:
        """Remote repositories to resolve against (Maven Central by default)."""
        return list(self._repositories)

    def default_local_repository_path(self) -> Path:
        return default_local_repository_path(self._user_home)

    def bootstrap(
        self,
        system: RepositorySystem | None = None,
        local_repo_path: Path | str | None = None,
    ) -> tuple[RepositorySession, ServiceResult]:
        """``new_session`` followed by ``load_settings``."""
        engine = system if system is not None else new_repository_system()
        if local_repo_path is None:
            local_repo_path = self.default_local_repository_path()
        session = self.new_session(engine, local_repo_path)
        return session, self.load_settings(session)


def repository_routes(
    session: RepositorySession,
    repositories: Sequence[RepositoryDescriptor],
) -> list[dict[str, Any]]:
    """How the session would reach each repository: mirror and proxy, if any."""
    routes: list[dict[str, Any]] = []
    for repository in repositories:
        mirror = session.mirror_selector.get_mirror(repository)
        target = repository
        if mirror is not None:
            target = RepositoryDescriptor(id=mirror.id, type=mirror.type, url=mirror.url)
        proxy = session.proxy_selector.get_proxy(target)
        routes.append(
            {
                "id": repository.id,
                "url": repository.url,
                "mirror": mirror.id if mirror else None,
                "effective_url": target.url,
                "proxy": f"{proxy.host}:{proxy.port}" if proxy else None,
            }
        )
    return routes
