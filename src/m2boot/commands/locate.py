"""Command: show which settings files apply."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from m2boot.commands._base import M2Command

if TYPE_CHECKING:
    from m2boot.commands._context import AppContext


@click.command(
    cls=M2Command,
    examples="""\
  m2boot locate
  M2_HOME=/opt/maven m2boot locate
  m2boot --json locate""",
)
@click.pass_obj
def locate(app: AppContext) -> None:
    """Locate the Maven installation and settings files."""
    app.emit(app.settings_service().locate())
