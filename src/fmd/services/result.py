"""The value a service hands back to the command layer.

Expected failures, such as a filter that does not compile, come back as
``ok=False`` results rather than exceptions; :class:`AppContext` decides
how to print them and which exit code to use.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Why an operation failed: a stable ``code`` plus a readable message."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one service call, serialized as-is by ``--json``.

    Attributes:
        ok: False when the run was rejected before producing output.
        op: Operation name, ``"find"`` for searches.
        data: Payload; ``paths`` and ``count`` for searches.
        warnings: Problems that did not stop the run (missing roots).
        error: Set when ``ok`` is False.
        meta: Run statistics: candidates, skipped files, elapsed time.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(cls, op: str, code: str, exc: Exception) -> ServiceResult:
        """Wrap *exc* as a failed result, recording its class name in the detail."""
        return cls(
            ok=False,
            op=op,
            error=ServiceError(code=code, message=str(exc), detail={"type": type(exc).__name__}),
        )

    @property
    def paths(self) -> list[str]:
        return list(self.data.get("paths", []))
