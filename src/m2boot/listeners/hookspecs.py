"""Pluggy hook specifications for transfer and repository listeners.

The resolution engine fires these hooks through the session's
:class:`~m2boot.listeners.manager.ListenerManager`. Implementations are
diagnostic only and must not change resolution behavior.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from m2boot.listeners.events import RepositoryEvent, TransferEvent

PROJECT_NAME = "m2boot"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class TransferListenerSpec:
    """Resource transfer lifecycle."""

    @hookspec
    def transfer_initiated(self, event: TransferEvent) -> None:
        """Called before a transfer is attempted."""

    @hookspec
    def transfer_started(self, event: TransferEvent) -> None:
        """Called once the remote side has answered."""

    @hookspec
    def transfer_progressed(self, event: TransferEvent) -> None:
        """Called each time a chunk of data is transferred."""

    @hookspec
    def transfer_corrupted(self, event: TransferEvent) -> None:
        """Called when a checksum check fails."""

    @hookspec
    def transfer_succeeded(self, event: TransferEvent) -> None:
        """Called after a transfer completes."""

    @hookspec
    def transfer_failed(self, event: TransferEvent) -> None:
        """Called after a transfer fails."""


class RepositoryListenerSpec:
    """Artifact and metadata events in local or remote repositories."""

    @hookspec
    def repository_event(self, event: RepositoryEvent) -> None:
        """Called for every repository event; switch on ``event.type``."""
