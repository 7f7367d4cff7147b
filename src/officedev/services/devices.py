"""List, describe and operate devices from a registry.

Operations are looked up by name on the device, so a device that never
conformed to a contract is reported as ``CAPABILITY_ABSENT`` while a device
that carries the method but cannot honor it reports the device's own
``UNSUPPORTED_OPERATION`` failure.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from officedev.domain.capabilities import Capability
from officedev.registry import describe_device
from officedev.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from officedev.domain.document import Document
    from officedev.domain.result import OperationResult
    from officedev.plugins.manager import PluginManager
    from officedev.registry import DeviceRegistry

logger = logging.getLogger(__name__)


def _not_found(op: str, name: str) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code="NOT_FOUND", message=f"No device named '{name}'"),
    )


class DeviceService:
    """Service facade over a :class:`DeviceRegistry`.

    Args:
        registry: The populated device registry.
        plugins: Optional plugin manager; ``post_operation`` is dispatched
            through it after every operation.
    """

    def __init__(self, registry: DeviceRegistry, plugins: PluginManager | None = None) -> None:
        self._registry = registry
        self._plugins = plugins

    def list_devices(self, capability: Capability | None = None) -> ServiceResult:
        if capability is None:
            devices = list(self._registry)
        else:
            devices = self._registry.with_capability(capability)
        items = [describe_device(d) for d in devices]
        return ServiceResult(
            ok=True,
            op="list_devices",
            data={
                "capability": str(capability) if capability else None,
                "count": len(items),
                "items": items,
            },
        )

    def describe(self, name: str) -> ServiceResult:
        device = self._registry.find(name)
        if device is None:
            return _not_found("describe", name)
        return ServiceResult(ok=True, op="describe", data=describe_device(device))

    def operate(self, name: str, capability: Capability, document: Document) -> ServiceResult:
        """Invoke *capability* on the device called *name*."""
        op = str(capability)
        device = self._registry.find(name)
        if device is None:
            return _not_found(op, name)

        operation = getattr(device, capability.value, None)
        if not callable(operation):
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="CAPABILITY_ABSENT",
                    message=f"Device '{name}' has no {capability} operation",
                    detail={"declared": sorted(device.capabilities)},
                ),
            )

        result: OperationResult = operation(document)
        logger.debug("%s on %s -> ok=%s", op, name, result.ok)

        warnings: list[str] = []
        self._dispatch_post_operation(name, result, warnings)

        data = {
            "device": name,
            "handled_by": result.device,
            "capability": op,
            "document_id": result.document_id,
        }
        if result.ok:
            return ServiceResult(ok=True, op=op, data=data, warnings=warnings)

        assert result.error is not None
        return ServiceResult(
            ok=False,
            op=op,
            data=data,
            warnings=warnings,
            error=ServiceError(
                code=result.error.code.upper(),
                message=result.error.message,
                detail=result.error.detail,
            ),
        )

    def _dispatch_post_operation(
        self, name: str, result: OperationResult, warnings: list[str]
    ) -> None:
        """Run the ``post_operation`` hook. Plugin failures become warnings."""
        if self._plugins is None:
            return
        try:
            self._plugins.hook.post_operation(
                device_name=name,
                capability=str(result.capability),
                document_id=result.document_id,
                ok=result.ok,
            )
        except Exception:
            logger.debug("post_operation hook failed for %s", name, exc_info=True)
            warnings.append("post_operation hook failed")
