"""AppContext — shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. The fleet is built lazily so ``--help`` and
``--version`` never load plugins or validate the fleet file.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from officedev.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from officedev.config.settings import OfficeSettings
    from officedev.registry import DeviceRegistry
    from officedev.services.devices import DeviceService
    from officedev.services.result import ServiceResult


class AppContext:
    """Settings plus the lazily built registry and service."""

    def __init__(self, settings: OfficeSettings) -> None:
        self.settings = settings
        self._service: DeviceService | None = None

        from officedev.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def service(self) -> DeviceService:
        """Device service over the configured fleet (built on first access)."""
        if self._service is None:
            from officedev.plugins.manager import PluginManager
            from officedev.services.devices import DeviceService

            plugins = PluginManager()
            plugins.discover_and_load()
            self._service = DeviceService(self._build_registry(), plugins)
        return self._service

    def _build_registry(self) -> DeviceRegistry:
        from officedev.registry import FleetConfigError, build_registry

        try:
            return build_registry(self.settings.fleet)
        except FleetConfigError as exc:
            source = self.settings.config_path or "built-in defaults"
            msg = f"Invalid fleet ({source}): {exc}"
            raise click.ClickException(msg) from exc

    def emit(self, result: ServiceResult) -> None:
        """Write a result with exit semantics.

        Success goes to stdout (warnings to stderr); failure goes to stderr
        and exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
