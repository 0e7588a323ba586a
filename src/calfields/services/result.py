"""Result types returned by FieldService operations.

Service methods report domain errors as a failed :class:`ServiceResult`
instead of raising.  The CLI decides how a result is shown (Rich, quiet
or JSON) and maps ``ok=False`` to exit code 1.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Why an operation failed.

    ``code`` is a stable identifier such as ``INVALID_VALUE``; ``detail``
    names the field, value or argument involved when there is one.
    """

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one operation (``rules``, ``show``, ``match`` ...).

    Attributes:
        ok: Whether the operation succeeded.
        op: Operation name, also used to pick a renderer.
        data: Payload on success.
        warnings: Things worth telling the user that did not stop the
            operation, e.g. a match with nothing to compare.
        error: Set when ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None

    @classmethod
    def success(
        cls, op: str, data: dict[str, Any], *, warnings: list[str] | None = None
    ) -> ServiceResult:
        return cls(ok=True, op=op, data=data, warnings=warnings or [])

    @classmethod
    def failure(
        cls, op: str, code: str, message: str, detail: dict[str, Any] | None = None
    ) -> ServiceResult:
        error = ServiceError(code=code, message=message, detail=detail or {})
        return cls(ok=False, op=op, error=error)
