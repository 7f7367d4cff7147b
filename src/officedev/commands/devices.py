"""Commands: list and describe devices."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from officedev.domain.capabilities import Capability

if TYPE_CHECKING:
    from officedev.commands._context import AppContext


@click.command()
@click.option(
    "--capability",
    type=click.Choice([c.value for c in Capability]),
    default=None,
    help="Only devices that declare this capability.",
)
@click.pass_obj
def devices(app: AppContext, capability: str | None) -> None:
    """List configured devices and their capabilities."""
    app.emit(app.service.list_devices(Capability(capability) if capability else None))


@click.command()
@click.argument("name")
@click.pass_obj
def describe(app: AppContext, name: str) -> None:
    """Show one device, its capabilities and its delegates."""
    app.emit(app.service.describe(name))
