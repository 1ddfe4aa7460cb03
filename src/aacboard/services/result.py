"""ServiceResult and ServiceError — the envelope every operation returns.

INVARIANT: No pipeline failure escapes as an exception.  Empty input,
uninterpretable phrases and failed validation all come back as a
ServiceResult with ``ok=False`` and a stable error ``code``.

Stable codes:

- ``EMPTY_PHRASE``: phrase is blank after trimming
- ``UNINTERPRETABLE``: no tier produced concepts
- ``VALIDATION_FAILED``: the last tier's concepts broke the safety rules
- ``UNKNOWN_CONTEXT``: no predefined board under that key
- ``NOT_TEMPORARY``: card is already part of the vocabulary
- ``INVALID_CARD``: card JSON does not validate
- ``NOT_FOUND``: no promotion pattern with that id
- ``INVALID_VOCABULARY``: vocabulary snapshot is unreadable or malformed
"""

from __future__ import annotations

from typing import Any, Self

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """What every aacboard operation hands back to the CLI.

    ``data`` holds the board (or catalog view) on success; ``error`` is
    set exactly when ``ok`` is False.  Telemetry spans land in
    ``meta["telemetry"]`` when verbose tracing is on.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(cls, op: str, code: str, message: str, **detail: Any) -> Self:
        """A failed result for *op* carrying a single :class:`ServiceError`."""
        return cls(ok=False, op=op, error=ServiceError(code=code, message=message, detail=detail))
