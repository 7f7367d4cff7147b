"""Device contracts, leaf devices and composites."""

from officedev.devices.composite import CompositeDevice, MultifunctionMachine, compose
from officedev.devices.contracts import (
    Device,
    Faxable,
    Machine,
    MultiFunctionDevice,
    Printable,
    Scannable,
)
from officedev.devices.leaf import (
    FaxMachine,
    FlatbedScanner,
    MultiFunctionPrinter,
    OldFashionedPrinter,
    OrdinaryPrinter,
    PhotoCopier,
)

__all__ = [
    "CompositeDevice",
    "Device",
    "FaxMachine",
    "Faxable",
    "FlatbedScanner",
    "Machine",
    "MultiFunctionDevice",
    "MultiFunctionPrinter",
    "MultifunctionMachine",
    "OldFashionedPrinter",
    "OrdinaryPrinter",
    "PhotoCopier",
    "Printable",
    "Scannable",
    "compose",
]
