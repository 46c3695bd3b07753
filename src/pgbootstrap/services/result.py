"""ServiceResult and ServiceError — the contract between services and the CLI.

INVARIANT: Every command renders a ServiceResult, success or failure.
Errors raised below the service layer are converted here, never printed
directly.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from pgbootstrap.domain.errors import PgBootstrapError


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: PgBootstrapError) -> ServiceError:
        detail = {"details": exc.details} if exc.details else {}
        return cls(code=exc.code, message=exc.message, detail=detail)


class ServiceResult(BaseModel):
    """Universal return type for service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"compile"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None

    @classmethod
    def failure(cls, op: str, exc: PgBootstrapError, *, warnings: list[str] | None = None) -> ServiceResult:
        return cls(
            ok=False,
            op=op,
            error=ServiceError.from_exception(exc),
            warnings=warnings or [],
        )
