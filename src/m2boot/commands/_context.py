"""AppContext — shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. Holds the tool settings and a snapshot of the
environment, builds services on demand, and centralizes result emission
(stdout/stderr routing + exit codes).
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import click

from m2boot.output.formatters import format_result

if TYPE_CHECKING:
    from m2boot.config.settings import BootSettings
    from m2boot.services.bootstrap import SessionBootstrapper
    from m2boot.services.result import ServiceResult
    from m2boot.services.settings import SettingsService


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: BootSettings) -> None:
        self.settings = settings
        self.environ = dict(os.environ)
        self._bootstrapper: SessionBootstrapper | None = None

        from m2boot.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def bootstrapper(self) -> SessionBootstrapper:
        """Session bootstrapper (created lazily on first access)."""
        if self._bootstrapper is None:
            from m2boot.services.bootstrap import SessionBootstrapper

            self._bootstrapper = SessionBootstrapper.from_settings(self.settings, self.environ)
        return self._bootstrapper

    def settings_service(self) -> SettingsService:
        from m2boot.services.settings import SettingsService

        return SettingsService(self.settings.user_home, self.environ)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings go to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        output = format_result(
            result,
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
        )
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not self.settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
