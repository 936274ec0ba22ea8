"""Subcommand modules for m2boot.

``register_commands()`` uses deferred imports to keep ``m2boot --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all commands on the root CLI group."""
    from m2boot.commands.locate import locate
    from m2boot.commands.repos import repos
    from m2boot.commands.session import session
    from m2boot.commands.settings import settings

    cli.add_command(locate)
    cli.add_command(settings)
    cli.add_command(repos)
    cli.add_command(session)
