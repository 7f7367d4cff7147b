"""Leaf devices: capability logic implemented directly."""

from __future__ import annotations

from officedev.devices.contracts import Faxable, Machine, MultiFunctionDevice, Printable, Scannable
from officedev.domain.capabilities import Capability
from officedev.domain.document import Document
from officedev.domain.result import OperationResult


class MultiFunctionPrinter(MultiFunctionDevice):
    """Supports every operation."""

    def print(self, document: Document) -> OperationResult:
        return self._succeed(Capability.PRINT, document)

    def scan(self, document: Document) -> OperationResult:
        return self._succeed(Capability.SCAN, document)

    def fax(self, document: Document) -> OperationResult:
        return self._succeed(Capability.FAX, document)


class OldFashionedPrinter(Machine, declares={Capability.PRINT}):
    """Prints only, yet the fat :class:`Machine` contract makes it carry scan and fax.

    The stubs return ``unsupported_operation`` instead of pretending to work.
    """

    def print(self, document: Document) -> OperationResult:
        return self._succeed(Capability.PRINT, document)

    def scan(self, document: Document) -> OperationResult:
        return self._unsupported(Capability.SCAN, document)

    def fax(self, document: Document) -> OperationResult:
        return self._unsupported(Capability.FAX, document)


class OrdinaryPrinter(Printable):
    def print(self, document: Document) -> OperationResult:
        return self._succeed(Capability.PRINT, document)


class FlatbedScanner(Scannable):
    def scan(self, document: Document) -> OperationResult:
        return self._succeed(Capability.SCAN, document)


class FaxMachine(Faxable):
    def fax(self, document: Document) -> OperationResult:
        return self._succeed(Capability.FAX, document)


class PhotoCopier(Printable, Scannable):
    """Two narrow contracts, no wide one needed."""

    def print(self, document: Document) -> OperationResult:
        return self._succeed(Capability.PRINT, document)

    def scan(self, document: Document) -> OperationResult:
        return self._succeed(Capability.SCAN, document)
