"""OperationResult: the return type of every device operation.

INVARIANT: ``ok`` is True exactly when ``error`` is None.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, model_validator

from officedev.domain.capabilities import Capability
from officedev.domain.errors import DeviceError, DeviceErrorCode


class OperationResult(BaseModel):
    """Outcome of invoking one capability on one device.

    Attributes:
        ok: Whether the operation succeeded.
        capability: The operation that was invoked.
        device: Name of the device that actually handled the call. For a
            composite this is the delegate's name.
        document_id: ID of the document passed in.
        error: Typed failure when ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    capability: Capability
    device: str
    document_id: str
    error: DeviceError | None = None

    @model_validator(mode="after")
    def _ok_matches_error(self) -> OperationResult:
        if self.ok == (self.error is not None):
            msg = "ok must be True exactly when error is None"
            raise ValueError(msg)
        return self

    @classmethod
    def success(cls, capability: Capability, device: str, document_id: str) -> OperationResult:
        return cls(ok=True, capability=capability, device=device, document_id=document_id)

    @classmethod
    def failure(
        cls,
        capability: Capability,
        device: str,
        document_id: str,
        code: DeviceErrorCode,
        message: str,
        **detail: Any,
    ) -> OperationResult:
        return cls(
            ok=False,
            capability=capability,
            device=device,
            document_id=document_id,
            error=DeviceError(code=code, message=message, detail=detail),
        )
