"""Commands: print, scan and fax, one per capability.

DOCUMENT is either a ``doc_xxxxxxxx`` ID or a title; titles map to a
stable ID.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from officedev.domain.capabilities import Capability
from officedev.domain.document import Document

if TYPE_CHECKING:
    from officedev.commands._context import AppContext


def _operation_command(capability: Capability) -> click.Command:
    @click.command(name=capability.value, help=f"{capability.value.title()} DOCUMENT on device NAME.")
    @click.argument("name")
    @click.argument("document")
    @click.pass_obj
    def command(app: AppContext, name: str, document: str) -> None:
        app.emit(app.service.operate(name, capability, Document.resolve(document)))

    return command


OPERATION_COMMANDS: list[click.Command] = [_operation_command(c) for c in Capability]
