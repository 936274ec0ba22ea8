"""Command: list remote repositories and how they are reached."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from m2boot.commands._base import M2Command
from m2boot.services.result import ServiceResult

if TYPE_CHECKING:
    from m2boot.commands._context import AppContext


@click.command(
    cls=M2Command,
    examples="""\
  m2boot repos
  m2boot --json repos""",
)
@click.pass_obj
def repos(app: AppContext) -> None:
    """List remote repositories with the mirror and proxy each one uses."""
    from m2boot.services.bootstrap import repository_routes

    bootstrapper = app.bootstrapper
    session, loaded = bootstrapper.bootstrap(local_repo_path=app.settings.local_repository_path)
    warnings = list(loaded.warnings)
    if loaded.error is not None:
        warnings.append(f"Settings ignored: {loaded.error.message}")
    app.emit(
        ServiceResult(
            ok=True,
            op="list_repositories",
            data={"repositories": repository_routes(session, bootstrapper.list_repositories())},
            warnings=warnings,
        )
    )
