"""Pluggy hook specifications for officedev.

One setup-time hook lets plugins add device kinds to the fleet catalog.
One event hook runs after every service-level device operation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from officedev.devices.contracts import Device

hookspec = pluggy.HookspecMarker("officedev")


class OfficedevHookSpec:
    """Hook specifications for the officedev plugin system."""

    @hookspec
    def register_device_kinds(self) -> dict[str, type[Device]] | None:
        """Return kind name -> leaf Device class mappings to extend DEVICE_KINDS."""

    @hookspec
    def post_operation(
        self,
        device_name: str,
        capability: str,
        document_id: str,
        ok: bool,
    ) -> None:
        """Called after a device operation, whether or not it succeeded."""
