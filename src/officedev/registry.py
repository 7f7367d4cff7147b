"""Device-kind catalog and the device registry.

:data:`DEVICE_KINDS` maps a kind name (as written in ``officedev.toml``) to
a leaf device class. Plugins extend it through
:func:`register_device_kind`; built-in names are reserved.

:func:`build_registry` turns a :class:`FleetConfig` into a populated
:class:`DeviceRegistry`. Leaf devices are built first, then composites in
file order, so a composite may delegate to any leaf or to an earlier
composite. A delegate named by several composites is one shared instance.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Iterator
from typing import Any

from officedev.config.models import CompositeConfig, FleetConfig
from officedev.devices.composite import CompositeDevice, MultifunctionMachine, compose
from officedev.devices.contracts import Device
from officedev.devices.leaf import (
    FaxMachine,
    FlatbedScanner,
    MultiFunctionPrinter,
    OldFashionedPrinter,
    OrdinaryPrinter,
    PhotoCopier,
)
from officedev.domain.capabilities import Capability
from officedev.domain.errors import DeviceConstructionError

logger = logging.getLogger(__name__)

COMPOSITE_KINDS = frozenset({"composite", "multifunction_machine"})

DEVICE_KINDS: dict[str, type[Device]] = {}


class FleetConfigError(ValueError):
    """The fleet cannot be built as configured."""


def _builtin_kinds() -> dict[str, type[Device]]:
    return {
        "multi_function_printer": MultiFunctionPrinter,
        "old_fashioned_printer": OldFashionedPrinter,
        "ordinary_printer": OrdinaryPrinter,
        "flatbed_scanner": FlatbedScanner,
        "fax_machine": FaxMachine,
        "photo_copier": PhotoCopier,
    }


BUILTIN_KINDS = frozenset(_builtin_kinds())


def register_device_kind(name: str, device_cls: type[Device]) -> None:
    """Register a leaf device class under *name*.

    Raises:
        ValueError: Empty name, reserved name, name already taken by a
            different class, or a class that is not a concrete leaf device.
    """
    normalized = name.strip()
    if not normalized:
        msg = "Device kind name must not be empty"
        raise ValueError(msg)
    if normalized in COMPOSITE_KINDS:
        msg = f"Device kind {normalized!r} is reserved for composites"
        raise ValueError(msg)
    if not (inspect.isclass(device_cls) and issubclass(device_cls, Device)):
        msg = f"Device kind {normalized!r} must be a Device subclass"
        raise ValueError(msg)
    if issubclass(device_cls, CompositeDevice) or inspect.isabstract(device_cls):
        msg = f"Device kind {normalized!r} must be a concrete leaf device"
        raise ValueError(msg)

    existing = DEVICE_KINDS.get(normalized)
    if existing is not None and existing is not device_cls:
        if normalized in BUILTIN_KINDS:
            msg = f"Device kind {normalized!r} is built in and cannot be overridden"
        else:
            msg = f"Device kind {normalized!r} is already registered"
        raise ValueError(msg)
    DEVICE_KINDS[normalized] = device_cls


def get_device_kind(name: str) -> type[Device]:
    try:
        return DEVICE_KINDS[name]
    except KeyError:
        known = ", ".join(sorted(DEVICE_KINDS))
        msg = f"Unknown device kind {name!r} (known: {known})"
        raise KeyError(msg) from None


def device_kind(device: Device) -> str:
    """Kind name for a device instance, as it would appear in the fleet file."""
    if isinstance(device, MultifunctionMachine):
        return "multifunction_machine"
    if isinstance(device, CompositeDevice):
        return "composite"
    for name, cls in DEVICE_KINDS.items():
        if type(device) is cls:
            return name
    return type(device).__name__


def describe_device(device: Device) -> dict[str, Any]:
    """Plain-data summary of a device for service payloads."""
    data: dict[str, Any] = {
        "name": device.name,
        "kind": device_kind(device),
        "capabilities": sorted(device.capabilities),
        "composite": isinstance(device, CompositeDevice),
    }
    if isinstance(device, CompositeDevice):
        data["delegates"] = {str(cap): d.name for cap, d in sorted(device.delegates.items())}
    return data


class DeviceRegistry:
    """Named devices, populated once and read afterwards."""

    def __init__(self) -> None:
        self._devices: dict[str, Device] = {}

    def register(self, device: Device) -> None:
        if device.name in self._devices:
            msg = f"Duplicate device name {device.name!r}"
            raise FleetConfigError(msg)
        self._devices[device.name] = device
        logger.debug("Registered device %s", device)

    def get(self, name: str) -> Device:
        try:
            return self._devices[name]
        except KeyError:
            msg = f"No device named {name!r}"
            raise KeyError(msg) from None

    def find(self, name: str) -> Device | None:
        return self._devices.get(name)

    def names(self) -> list[str]:
        return list(self._devices)

    def with_capability(self, capability: Capability) -> list[Device]:
        """Devices that declare *capability*, in registration order."""
        return [d for d in self._devices.values() if d.supports(capability)]

    def __contains__(self, name: object) -> bool:
        return name in self._devices

    def __iter__(self) -> Iterator[Device]:
        return iter(self._devices.values())

    def __len__(self) -> int:
        return len(self._devices)


def _lookup(registry: DeviceRegistry, name: str | None) -> Device | None:
    return None if name is None else registry.get(name)


def _build_composite(registry: DeviceRegistry, entry: CompositeConfig) -> Device:
    unknown = [n for n in entry.delegate_names() if n not in registry]
    if unknown:
        names = ", ".join(repr(n) for n in unknown)
        msg = f"Composite {entry.name!r} refers to unknown devices: {names}"
        raise FleetConfigError(msg)
    printer = _lookup(registry, entry.printer)
    scanner = _lookup(registry, entry.scanner)
    faxer = _lookup(registry, entry.faxer)
    try:
        if entry.kind == "multifunction_machine":
            return MultifunctionMachine(printer, scanner, faxer, name=entry.name)
        return compose(
            *[registry.get(m) for m in entry.members],
            printer=printer,
            scanner=scanner,
            faxer=faxer,
            advertise=entry.advertise,
            name=entry.name,
        )
    except DeviceConstructionError as exc:
        msg = f"Composite {entry.name!r}: {exc}"
        raise FleetConfigError(msg) from exc


def build_registry(fleet: FleetConfig) -> DeviceRegistry:
    """Instantiate every device in *fleet*.

    Raises:
        FleetConfigError: Unknown kind, unknown delegate name, duplicate
            device name, or a composite that cannot be constructed.
    """
    registry = DeviceRegistry()
    for leaf in fleet.devices:
        try:
            cls = get_device_kind(leaf.kind)
        except KeyError as exc:
            msg = f"Device {leaf.name!r}: {exc.args[0]}"
            raise FleetConfigError(msg) from exc
        registry.register(cls(name=leaf.name))

    for entry in fleet.composites:
        registry.register(_build_composite(registry, entry))

    logger.debug("Built fleet with %d devices", len(registry))
    return registry


def _register_builtin_kinds() -> None:
    DEVICE_KINDS.update(_builtin_kinds())


_register_builtin_kinds()
