"""The resolution engine handle, seen from the bootstrapper.

The bootstrapper needs exactly one thing from the engine: a local
repository manager for a session. :class:`SimpleRepositorySystem` is a
minimal stand-in used by the CLI and in tests.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from m2boot.repository.session import LocalRepository, LocalRepositoryManager

if TYPE_CHECKING:
    from m2boot.repository.session import RepositorySession


@runtime_checkable
class RepositorySystem(Protocol):
    def new_local_repository_manager(
        self,
        session: RepositorySession,
        local_repository: LocalRepository,
    ) -> LocalRepositoryManager: ...


class SimpleRepositorySystem:
    """Hands out plain local repository managers."""

    def new_local_repository_manager(
        self,
        session: RepositorySession,
        local_repository: LocalRepository,
    ) -> LocalRepositoryManager:
        basedir = Path(local_repository.basedir).absolute()
        return LocalRepositoryManager(LocalRepository(basedir, local_repository.content_type))


def new_repository_system() -> RepositorySystem:
    """Return the default engine handle."""
    return SimpleRepositorySystem()
