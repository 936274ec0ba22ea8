"""Listener registration and event dispatch.

Each session owns one :class:`ListenerManager`. Listeners come from the
session bootstrapper (console listeners), from the ``m2boot.listeners``
entry-point group, or from direct registration.

INVARIANT: Listener failures are logged, never raised.
"""

from __future__ import annotations

import inspect
import logging

import pluggy

from m2boot.listeners.events import RepositoryEvent, TransferEvent
from m2boot.listeners.hookspecs import PROJECT_NAME, RepositoryListenerSpec, TransferListenerSpec

ENTRY_POINT_GROUP = "m2boot.listeners"

logger = logging.getLogger(__name__)


class ListenerManager:
    """Holds transfer and repository listeners for one session."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(TransferListenerSpec)
        self._pm.add_hookspecs(RepositoryListenerSpec)

    def discover(self) -> list[str]:
        """Load listeners from the ``m2boot.listeners`` entry-point group.

        Returns the names of all registered listeners.
        """
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._normalize_listener_instances()
        return self.list_names()

    def register(self, listener: object, name: str | None = None) -> None:
        """Register a listener instance."""
        resolved_name = name or listener.__class__.__name__
        self._pm.register(listener, name=resolved_name)
        logger.debug("Registered listener: %s", resolved_name)

    def unregister(self, listener: object) -> None:
        self._pm.unregister(listener)

    @property
    def hook(self) -> pluggy.HookRelay:
        """Raw hook relay; prefer :meth:`fire_transfer` / :meth:`fire_repository`."""
        return self._pm.hook

    def get_listeners(self) -> list[object]:
        return list(self._pm.get_plugins())

    def list_names(self) -> list[str]:
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    def fire_transfer(self, event: TransferEvent) -> None:
        """Dispatch *event* to the ``transfer_<type>`` hook."""
        self._fire(f"transfer_{event.type.value}", event)

    def fire_repository(self, event: RepositoryEvent) -> None:
        self._fire("repository_event", event)

    def _fire(self, hook_name: str, event: TransferEvent | RepositoryEvent) -> None:
        try:
            getattr(self._pm.hook, hook_name)(event=event)
        except Exception:
            logger.debug("Listener dispatch failed for %s", hook_name, exc_info=True)

    def _normalize_listener_instances(self) -> None:
        """Replace listener classes registered by entry points with instances."""
        for listener in list(self._pm.get_plugins()):
            if not inspect.isclass(listener):
                continue
            name = self._pm.get_name(listener) or listener.__name__
            self._pm.unregister(listener)
            try:
                instance = listener()
            except Exception:
                logger.warning("Failed to instantiate entry-point listener %s", name, exc_info=True)
                continue
            self._pm.register(instance, name=name)
            logger.debug("Instantiated entry-point listener: %s", name)

