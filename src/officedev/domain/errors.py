"""Device error taxonomy.

Operation failures travel as :class:`DeviceError` values inside an
``OperationResult``. Construction failures are raised as
:class:`DeviceConstructionError` subclasses carrying the same payload.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class DeviceErrorCode(StrEnum):
    UNSUPPORTED_OPERATION = "unsupported_operation"
    MISSING_DELEGATE = "missing_delegate"
    INVALID_DELEGATE = "invalid_delegate"


class DeviceError(BaseModel):
    """Structured error payload for device operations and construction."""

    model_config = {"frozen": True}

    code: DeviceErrorCode
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class DeviceConstructionError(Exception):
    """Raised when a device cannot be built with the arguments given."""

    code: DeviceErrorCode

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.error = DeviceError(code=self.code, message=message, detail=detail)


class MissingDelegateError(DeviceConstructionError):
    """A composite claims a capability but no delegate was supplied for it."""

    code = DeviceErrorCode.MISSING_DELEGATE


class InvalidDelegateError(DeviceConstructionError):
    """A delegate was bound to a capability it does not support."""

    code = DeviceErrorCode.INVALID_DELEGATE
