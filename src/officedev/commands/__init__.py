"""Subcommand modules for officedev.

register_commands() imports command modules on demand to keep
``officedev --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Attach the listing commands and one command per capability."""
    from officedev.commands.devices import describe, devices
    from officedev.commands.operate import OPERATION_COMMANDS

    cli.add_command(devices)
    cli.add_command(describe)
    for command in OPERATION_COMMANDS:
        cli.add_command(command)
