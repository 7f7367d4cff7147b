"""Root CLI group for officedev with global flags and command registration."""

from __future__ import annotations

import click
from pydantic import ValidationError

from officedev import __version__
from officedev.commands import register_commands
from officedev.commands._context import AppContext
from officedev.config.settings import OfficeSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="officedev")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging to stderr.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Fleet file to use.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """officedev — print, scan and fax on capability-segregated devices."""
    try:
        settings = OfficeSettings.from_cli(
            config_path=config_path,
            json_output=json_output,
            quiet=quiet,
            verbose=verbose,
            log_json=log_json,
        )
    except ValidationError as exc:
        msg = f"Invalid configuration: {exc}"
        raise click.ClickException(msg) from exc
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
