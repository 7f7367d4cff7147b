"""ServiceResult and ServiceError — the contract between services and the CLI.

INVARIANT: Every DeviceService method returns a ServiceResult. Device-level
failures arrive as ``OperationResult`` values and are translated here into
the same shape the CLI formats for humans or as JSON.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"print"``, ``"list_devices"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues, such as a failing plugin hook.
        error: Structured error if ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
