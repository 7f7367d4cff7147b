"""Pydantic models for the ``officedev.toml`` fleet file.

Sparse contract: an empty or missing file yields the demo fleet baked
into :func:`default_devices` and :func:`default_composites`.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, model_validator

from officedev.domain.capabilities import Capability


class DeviceConfig(BaseModel):
    """One ``[[devices]]`` entry: a leaf device of a registered kind."""

    model_config = {"frozen": True}

    name: str = Field(min_length=1)
    kind: str


class CompositeConfig(BaseModel):
    """One ``[[composites]]`` entry.

    Delegates are referenced by device name, so several composites can
    share the same delegate instance.
    """

    model_config = {"frozen": True}

    name: str = Field(min_length=1)
    kind: Literal["composite", "multifunction_machine"] = "composite"
    printer: str | None = None
    scanner: str | None = None
    faxer: str | None = None
    members: list[str] = Field(default_factory=list)
    advertise: list[Capability] = Field(default_factory=list)

    @model_validator(mode="after")
    def _advertise_only_for_composite(self) -> CompositeConfig:
        if self.kind == "multifunction_machine" and (self.advertise or self.members):
            msg = "advertise/members apply only to kind = 'composite'"
            raise ValueError(msg)
        return self

    def delegate_names(self) -> list[str]:
        """Every device name this entry refers to, in binding order."""
        named = [n for n in (self.printer, self.scanner, self.faxer) if n is not None]
        return [*named, *self.members]


def default_devices() -> list[DeviceConfig]:
    return [
        DeviceConfig(name="mfp", kind="multi_function_printer"),
        DeviceConfig(name="legacy", kind="old_fashioned_printer"),
        DeviceConfig(name="printer", kind="ordinary_printer"),
        DeviceConfig(name="scanner", kind="flatbed_scanner"),
        DeviceConfig(name="fax", kind="fax_machine"),
        DeviceConfig(name="copier", kind="photo_copier"),
    ]


def default_composites() -> list[CompositeConfig]:
    return [
        CompositeConfig(
            name="office",
            kind="multifunction_machine",
            printer="printer",
            scanner="scanner",
        ),
    ]


class FleetConfig(BaseModel):
    """Top-level fleet file."""

    model_config = {"frozen": True}

    devices: list[DeviceConfig] = Field(default_factory=default_devices)
    composites: list[CompositeConfig] = Field(default_factory=default_composites)

    @model_validator(mode="before")
    @classmethod
    def _no_demo_composites_for_custom_devices(cls, data: object) -> object:
        return drop_demo_composites(data)


def drop_demo_composites(data: object) -> object:
    """A file that lists its own devices gets no demo composites by default.

    The demo composites reference demo device names that a custom fleet
    need not have.
    """
    if isinstance(data, dict) and "devices" in data and "composites" not in data:
        return {**data, "composites": []}
    return data
