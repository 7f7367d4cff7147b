"""Device base class and capability contracts.

Each narrow contract (:class:`Printable`, :class:`Scannable`,
:class:`Faxable`) carries exactly one abstract operation, so a class only
has the methods for the capabilities it inherits. :class:`Machine` is the
fat alternative that bundles all three into one interface; it is kept for
devices that are forced to stub operations they cannot honor.

A class's declared capability set is computed once, when the class is
created, from the ``provides`` tuples of the contracts in its MRO. A class
may narrow it explicitly with the ``declares=`` class keyword.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any, ClassVar

from officedev.domain.capabilities import Capability
from officedev.domain.document import Document
from officedev.domain.errors import DeviceErrorCode
from officedev.domain.result import OperationResult

logger = logging.getLogger(__name__)


def kind_name(cls: type) -> str:
    """``PhotoCopier`` -> ``photo_copier``."""
    return re.sub(r"(?<!^)(?=[A-Z])", "_", cls.__name__).lower()


class Device(ABC):
    """Anything that exposes a fixed subset of capabilities.

    Attributes:
        name: Instance name used in results, logs and the registry.
    """

    provides: ClassVar[tuple[Capability, ...]] = ()
    declared_capabilities: ClassVar[frozenset[Capability]] = frozenset()
    _explicit_declaration: ClassVar[bool] = False

    def __init_subclass__(cls, *, declares: Iterable[Capability] | None = None, **kwargs: Any):
        super().__init_subclass__(**kwargs)
        if declares is not None:
            cls.declared_capabilities = frozenset(declares)
            cls._explicit_declaration = True
            return
        if cls._explicit_declaration:
            # Narrowed by an ancestor; keep it.
            return
        found: set[Capability] = set()
        for base in cls.__mro__:
            found.update(base.__dict__.get("provides", ()))
        cls.declared_capabilities = frozenset(found)

    def __init__(self, name: str | None = None) -> None:
        self.name = name or kind_name(type(self))

    @property
    def capabilities(self) -> frozenset[Capability]:
        return self.declared_capabilities

    def supports(self, capability: Capability) -> bool:
        return capability in self.capabilities

    def __repr__(self) -> str:
        caps = ",".join(sorted(self.capabilities))
        return f"<{type(self).__name__} {self.name!r} [{caps}]>"

    # -- helpers for leaf implementations --------------------------------

    def _succeed(self, capability: Capability, document: Document) -> OperationResult:
        return OperationResult.success(capability, self.name, document.id)

    def _unsupported(self, capability: Capability, document: Document) -> OperationResult:
        logger.debug("%s does not support %s", self.name, capability)
        return OperationResult.failure(
            capability,
            self.name,
            document.id,
            DeviceErrorCode.UNSUPPORTED_OPERATION,
            f"Device '{self.name}' does not {capability}",
            declared=sorted(self.capabilities),
        )


# ---------------------------------------------------------------------------
# Narrow contracts
# ---------------------------------------------------------------------------


class Printable(Device):
    """Contract for devices that print."""

    provides = (Capability.PRINT,)

    @abstractmethod
    def print(self, document: Document) -> OperationResult:
        ...


class Scannable(Device):
    """Contract for devices that scan."""

    provides = (Capability.SCAN,)

    @abstractmethod
    def scan(self, document: Document) -> OperationResult:
        ...


class Faxable(Device):
    """Contract for devices that fax."""

    provides = (Capability.FAX,)

    @abstractmethod
    def fax(self, document: Document) -> OperationResult:
        ...


CONTRACTS: dict[Capability, type[Device]] = {
    Capability.PRINT: Printable,
    Capability.SCAN: Scannable,
    Capability.FAX: Faxable,
}


class MultiFunctionDevice(Printable, Scannable, Faxable):
    """Conjunction of all three narrow contracts."""


# ---------------------------------------------------------------------------
# Fat contract
# ---------------------------------------------------------------------------


class Machine(Device):
    """Single wide contract with every operation in one interface.

    Implementers must define all three methods even when they can only
    honor some of them. Prefer the narrow contracts above.
    """

    provides = (Capability.PRINT, Capability.SCAN, Capability.FAX)

    @abstractmethod
    def print(self, document: Document) -> OperationResult:
        ...

    @abstractmethod
    def scan(self, document: Document) -> OperationResult:
        ...

    @abstractmethod
    def fax(self, document: Document) -> OperationResult:
        ...


def conforms_to(device: object, capability: Capability) -> bool:
    """Whether *device* structurally exposes *capability* through a narrow contract."""
    return isinstance(device, CONTRACTS[capability])
