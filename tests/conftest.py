"""Shared pytest fixtures for officedev tests."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from officedev.config.models import FleetConfig
from officedev.domain.document import Document
from officedev.registry import DEVICE_KINDS, DeviceRegistry, build_registry

SAMPLE_TITLES = [
    "Quarterly report",
    "Invoice #4411",
    "résumé — final (v2)",
    "",
]


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def document() -> Document:
    return Document.from_title("Quarterly report")


@pytest.fixture(params=SAMPLE_TITLES, ids=lambda t: t or "<untitled>")
def any_document(request: pytest.FixtureRequest) -> Document:
    """A spread of documents for properties that must hold for every document."""
    return Document.from_title(request.param)


@pytest.fixture
def demo_registry() -> DeviceRegistry:
    """Registry built from the built-in demo fleet."""
    return build_registry(FleetConfig())


@pytest.fixture
def restore_device_kinds() -> Generator[None]:
    """Undo device-kind registrations made during a test."""
    saved = dict(DEVICE_KINDS)
    yield
    DEVICE_KINDS.clear()
    DEVICE_KINDS.update(saved)


@pytest.fixture
def _isolated_fleet(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run from an empty temp dir so no stray officedev.toml is discovered."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("OFFICEDEV_CONFIG", raising=False)
    return tmp_path
