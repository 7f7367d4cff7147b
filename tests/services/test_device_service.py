"""Tests for DeviceService."""

from unittest.mock import MagicMock

import pytest

from officedev.domain.capabilities import Capability
from officedev.domain.document import Document
from officedev.plugins import PluginManager, hookimpl
from officedev.registry import DeviceRegistry
from officedev.services.devices import DeviceService


class Recorder:
    def __init__(self) -> None:
        self.calls: list[tuple[str, str, str, bool]] = []

    @hookimpl
    def post_operation(self, device_name: str, capability: str, document_id: str, ok: bool):
        self.calls.append((device_name, capability, document_id, ok))


class Exploding:
    @hookimpl
    def post_operation(self, device_name: str, capability: str, document_id: str, ok: bool):
        raise RuntimeError("boom")


@pytest.fixture
def service(demo_registry: DeviceRegistry) -> DeviceService:
    return DeviceService(demo_registry)


class TestListDevices:
    def test_all(self, service: DeviceService) -> None:
        result = service.list_devices()
        assert result.ok
        assert result.op == "list_devices"
        assert result.data["count"] == 7
        assert result.data["capability"] is None

    def test_filtered(self, service: DeviceService) -> None:
        result = service.list_devices(Capability.SCAN)
        names = [item["name"] for item in result.data["items"]]
        assert names == ["mfp", "scanner", "copier", "office"]
        assert result.data["capability"] == "scan"


class TestDescribe:
    def test_found(self, service: DeviceService) -> None:
        result = service.describe("copier")
        assert result.ok
        assert result.data["capabilities"] == ["print", "scan"]

    def test_not_found(self, service: DeviceService) -> None:
        result = service.describe("ghost")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"


class TestOperate:
    def test_success(self, service: DeviceService, document: Document) -> None:
        result = service.operate("mfp", Capability.FAX, document)
        assert result.ok
        assert result.op == "fax"
        assert result.data == {
            "device": "mfp",
            "handled_by": "mfp",
            "capability": "fax",
            "document_id": document.id,
        }

    def test_composite_reports_delegate(self, service: DeviceService, document: Document) -> None:
        result = service.operate("office", Capability.SCAN, document)
        assert result.ok
        assert result.data["handled_by"] == "scanner"

    def test_unsupported_operation(self, service: DeviceService, document: Document) -> None:
        result = service.operate("legacy", Capability.FAX, document)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "UNSUPPORTED_OPERATION"
        assert result.data["device"] == "legacy"

    def test_capability_absent(self, service: DeviceService, document: Document) -> None:
        result = service.operate("printer", Capability.FAX, document)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "CAPABILITY_ABSENT"
        assert result.error.detail == {"declared": ["print"]}

    def test_unknown_device(self, service: DeviceService, document: Document) -> None:
        result = service.operate("ghost", Capability.PRINT, document)
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"
        assert result.op == "print"


class TestPostOperationHook:
    def test_hook_called(self, demo_registry: DeviceRegistry, document: Document) -> None:
        plugins = PluginManager()
        recorder = Recorder()
        plugins.register_plugin(recorder)
        service = DeviceService(demo_registry, plugins)

        service.operate("legacy", Capability.FAX, document)

        assert recorder.calls == [("legacy", "fax", document.id, False)]

    def test_hook_failure_is_warning(self, demo_registry: DeviceRegistry, document: Document) -> None:
        plugins = PluginManager()
        plugins.register_plugin(Exploding())
        service = DeviceService(demo_registry, plugins)

        result = service.operate("printer", Capability.PRINT, document)

        assert result.ok
        assert result.warnings == ["post_operation hook failed"]

    def test_hook_not_called_for_unknown_device(
        self, demo_registry: DeviceRegistry, document: Document
    ) -> None:
        plugins = MagicMock()
        DeviceService(demo_registry, plugins).operate("ghost", Capability.PRINT, document)
        plugins.hook.post_operation.assert_not_called()
