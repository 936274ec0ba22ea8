"""Command: print the effective (merged) settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from m2boot.commands._base import M2Command

if TYPE_CHECKING:
    from m2boot.commands._context import AppContext


@click.command(
    cls=M2Command,
    examples="""\
  m2boot settings
  m2boot --json settings""",
)
@click.pass_obj
def settings(app: AppContext) -> None:
    """Merge user and installation settings and show mirrors and proxies."""
    app.emit(app.settings_service().effective())
