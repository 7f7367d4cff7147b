"""Capability enum.

A capability is one named operation a device may or may not support.
The enum value doubles as the method name on the matching contract.
"""

from __future__ import annotations

from enum import StrEnum


class Capability(StrEnum):
    """Operations an office device can expose."""

    PRINT = "print"
    SCAN = "scan"
    FAX = "fax"
