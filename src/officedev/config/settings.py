"""Unified settings: CLI flags, env vars and the TOML fleet file in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``OFFICEDEV_*`` prefix
  3. TOML file    — ``officedev.toml`` discovered via walk-up
  4. Code defaults — the demo fleet in :mod:`officedev.config.models`
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from officedev.config.discovery import find_config
from officedev.config.models import (
    CompositeConfig,
    DeviceConfig,
    FleetConfig,
    default_composites,
    default_devices,
    drop_demo_composites,
)


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from an ``officedev.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# TOML path handed to settings_customise_sources during construction.
_tls = threading.local()


class OfficeSettings(BaseSettings):
    """Settings for the officedev CLI, frozen after construction.

    Attributes:
        config_path: The fleet file actually loaded, or None.
        devices: Leaf device entries of the fleet.
        composites: Composite entries of the fleet.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "OFFICEDEV_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    devices: list[DeviceConfig] = Field(default_factory=default_devices)
    composites: list[CompositeConfig] = Field(default_factory=default_composites)

    @model_validator(mode="before")
    @classmethod
    def _fleet_defaults(cls, data: object) -> object:
        return drop_demo_composites(data)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert the TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @property
    def fleet(self) -> FleetConfig:
        return FleetConfig(devices=self.devices, composites=self.composites)

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        **cli_flags: Any,
    ) -> OfficeSettings:
        """Construct settings from a CLI invocation.

        Uses *config_path* when given, otherwise discovers ``officedev.toml``
        by walking up from *start* (default: cwd).
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(start)

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **cli_flags)
        finally:
            _tls.toml_path = None
