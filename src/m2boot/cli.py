"""Root CLI group for m2boot with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from m2boot import __version__
from m2boot.commands import register_commands
from m2boot.commands._context import AppContext
from m2boot.config.settings import BootSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="m2boot")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging to stderr.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override m2boot.toml path.")
@click.option(
    "--user-home",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Home directory holding .m2/ (default: current user's home).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    user_home: Path | None,
) -> None:
    """m2boot — Maven settings discovery and session bootstrap."""
    ctx.ensure_object(dict)
    settings = BootSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        user_home=user_home,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
