"""Composite devices: satisfy a capability set by delegating to other devices.

A composite holds one delegate per capability it exposes and forwards each
call to it unchanged. Delegates are plain references and may be shared by
several composites.

INVARIANT: A composite's capabilities are fixed by its class, and its
constructor refuses to build one that claims a capability with no delegate
(unless the class handles that capability itself).
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import ClassVar

from officedev.devices.contracts import (
    Device,
    Faxable,
    MultiFunctionDevice,
    Printable,
    Scannable,
    kind_name,
)
from officedev.domain.capabilities import Capability
from officedev.domain.document import Document
from officedev.domain.errors import InvalidDelegateError, MissingDelegateError
from officedev.domain.result import OperationResult

logger = logging.getLogger(__name__)


def check_delegate(capability: Capability, delegate: Device) -> Device:
    """Return *delegate* if it can serve *capability*, else raise InvalidDelegateError."""
    operation = getattr(delegate, capability.value, None)
    if not delegate.supports(capability) or not callable(operation):
        msg = f"Device '{delegate.name}' cannot serve as {capability} delegate"
        raise InvalidDelegateError(
            msg,
            capability=capability.value,
            delegate=delegate.name,
            declared=sorted(delegate.capabilities),
        )
    return delegate


class CompositeDevice(Device):
    """Base for devices assembled from per-capability delegates.

    Attributes:
        handles_directly: Capabilities the class implements itself, so a
            delegate for them is optional.
    """

    handles_directly: ClassVar[frozenset[Capability]] = frozenset()

    def __init__(self, delegates: Mapping[Capability, Device], *, name: str | None = None) -> None:
        super().__init__(name or kind_name(type(self)))
        unexpected = set(delegates) - self.capabilities
        if unexpected:
            cap = sorted(unexpected)[0]
            msg = f"Composite '{self.name}' does not expose {cap}"
            raise InvalidDelegateError(msg, capability=cap.value, delegate=delegates[cap].name)
        missing = self.capabilities - set(delegates) - self.handles_directly
        if missing:
            names = ", ".join(sorted(missing))
            msg = f"Composite '{self.name}' has no delegate for: {names}"
            raise MissingDelegateError(msg, capabilities=sorted(missing))
        for capability, delegate in delegates.items():
            check_delegate(capability, delegate)
        self._delegates: Mapping[Capability, Device] = MappingProxyType(dict(delegates))

    @property
    def delegates(self) -> Mapping[Capability, Device]:
        return self._delegates

    def _forward(self, capability: Capability, document: Document) -> OperationResult:
        delegate = self._delegates[capability]
        logger.debug(
            "%s forwarding %s of %s to %s", self.name, capability, document.id, delegate.name
        )
        return getattr(delegate, capability.value)(document)


class _PrintForwarding(CompositeDevice, Printable):
    def print(self, document: Document) -> OperationResult:
        return self._forward(Capability.PRINT, document)


class _ScanForwarding(CompositeDevice, Scannable):
    def scan(self, document: Document) -> OperationResult:
        return self._forward(Capability.SCAN, document)


class _FaxForwarding(CompositeDevice, Faxable):
    def fax(self, document: Document) -> OperationResult:
        return self._forward(Capability.FAX, document)


_FORWARDERS: dict[Capability, type[CompositeDevice]] = {
    Capability.PRINT: _PrintForwarding,
    Capability.SCAN: _ScanForwarding,
    Capability.FAX: _FaxForwarding,
}


@functools.cache
def composite_class(capabilities: frozenset[Capability]) -> type[CompositeDevice]:
    """Return the composite class conforming to exactly *capabilities*.

    Classes are generated once per capability set, so two composites with
    the same set share a type.
    """
    ordered = [c for c in Capability if c in capabilities]
    if not ordered:
        msg = "A composite needs at least one capability"
        raise MissingDelegateError(msg, capabilities=[])
    bases = tuple(_FORWARDERS[c] for c in ordered)
    name = "".join(c.value.title() for c in ordered) + "Composite"
    return type(name, bases, {"__module__": __name__})


def compose(
    *devices: Device,
    printer: Device | None = None,
    scanner: Device | None = None,
    faxer: Device | None = None,
    advertise: Iterable[Capability] | None = None,
    name: str | None = None,
) -> CompositeDevice:
    """Build a composite from per-capability delegates.

    Keyword delegates bind one capability each. Positional *devices* then
    fill every still-unbound capability they declare, first one wins. The
    result exposes exactly the bound capabilities and nothing else.

    Raises:
        MissingDelegateError: A capability in *advertise* has no delegate,
            or nothing was bound at all.
        InvalidDelegateError: A keyword delegate does not support its
            capability.
    """
    bound: dict[Capability, Device] = {}
    for capability, delegate in (
        (Capability.PRINT, printer),
        (Capability.SCAN, scanner),
        (Capability.FAX, faxer),
    ):
        if delegate is not None:
            bound[capability] = check_delegate(capability, delegate)

    for device in devices:
        for capability in Capability:
            if capability not in bound and device.supports(capability):
                bound[capability] = check_delegate(capability, device)

    missing = set(advertise or ()) - set(bound)
    if missing:
        names = ", ".join(sorted(missing))
        msg = f"Composite advertises {names} but no delegate was supplied"
        raise MissingDelegateError(msg, capabilities=sorted(missing))

    cls = composite_class(frozenset(bound))
    return cls(bound, name=name)


class MultifunctionMachine(CompositeDevice, MultiFunctionDevice):
    """Full multifunction device built from a printer and a scanner.

    Fax goes to *faxer* when one is given; otherwise the machine faxes on
    its own.
    """

    handles_directly = frozenset({Capability.FAX})

    def __init__(
        self,
        printer: Device | None,
        scanner: Device | None,
        faxer: Device | None = None,
        *,
        name: str | None = None,
    ) -> None:
        delegates = {
            capability: delegate
            for capability, delegate in (
                (Capability.PRINT, printer),
                (Capability.SCAN, scanner),
                (Capability.FAX, faxer),
            )
            if delegate is not None
        }
        super().__init__(delegates, name=name)

    def print(self, document: Document) -> OperationResult:
        return self._forward(Capability.PRINT, document)

    def scan(self, document: Document) -> OperationResult:
        return self._forward(Capability.SCAN, document)

    def fax(self, document: Document) -> OperationResult:
        if Capability.FAX in self.delegates:
            return self._forward(Capability.FAX, document)
        return self._succeed(Capability.FAX, document)
