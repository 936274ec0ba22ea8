"""Command: bootstrap a repository session and summarize it."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from m2boot.commands._base import M2Command
from m2boot.services.result import ServiceResult

if TYPE_CHECKING:
    from m2boot.commands._context import AppContext


@click.command(
    cls=M2Command,
    examples="""\
  m2boot session
  m2boot session --local-repo /tmp/m2-cache
  m2boot session --strict
  m2boot --json session""",
)
@click.option(
    "--local-repo",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Local repository directory (default: ~/.m2/repository).",
)
@click.option("--strict", is_flag=True, help="Fail if the settings files cannot be used.")
@click.pass_obj
def session(app: AppContext, local_repo: Path | None, strict: bool) -> None:
    """Bootstrap a session from the located settings files."""
    local = local_repo if local_repo is not None else app.settings.local_repository_path
    repo_session, loaded = app.bootstrapper.bootstrap(local_repo_path=local)

    if not loaded.ok and strict:
        app.emit(loaded)
        return

    manager = repo_session.local_repository_manager
    warnings = list(loaded.warnings)
    if loaded.error is not None:
        warnings.append(f"Settings ignored, no mirrors or proxies: {loaded.error.message}")
    app.emit(
        ServiceResult(
            ok=True,
            op="bootstrap_session",
            data={
                "local_repository": str(manager.basedir) if manager else None,
                "user_settings": loaded.data.get("user_settings", ""),
                "global_settings": loaded.data.get("global_settings", ""),
                "mirrors": loaded.data.get("mirrors", []),
                "proxies": loaded.data.get("proxies", []),
                "listeners": repo_session.listeners.list_names(),
            },
            warnings=warnings,
        )
    )
