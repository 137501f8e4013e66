"""ServiceResult and ServiceError — what every haccpctl service returns.

A result is ``ok`` unless the caller asked for something that cannot be
answered (unknown step, empty review window). Collaborator trouble never
flips ``ok``; it is reported through ``warnings``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """User-facing failure: a stable ``code``, a message, and context."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one ``evaluate``, ``next_step``, ``dismiss`` or ``review`` call.

    Attributes:
        ok: False only when ``error`` is set.
        op: Operation name; selects the renderer.
        data: Operation payload, JSON-ready.
        warnings: One ``"<kind>: <context> (<error>)"`` entry per degraded
            collaborator read or write.
        error: Set when ``ok`` is False.
        meta: Free-form extras shown in verbose output.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(cls, op: str, code: str, message: str, **detail: Any) -> ServiceResult:
        return cls(
            ok=False,
            op=op,
            error=ServiceError(code=code, message=message, detail=detail),
        )
