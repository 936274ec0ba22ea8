"""Transfer and repository listeners via pluggy.

INVARIANT: Listeners observe; they never change resolution behavior.
"""

from m2boot.listeners.console import ConsoleRepositoryListener, ConsoleTransferListener
from m2boot.listeners.hookspecs import hookimpl
from m2boot.listeners.manager import ListenerManager

__all__ = [
    "ConsoleRepositoryListener",
    "ConsoleTransferListener",
    "ListenerManager",
    "hookimpl",
]
