"""BaseService — shared plumbing for calfields services.

Every service receives the frozen :class:`CalSettings` at construction
time.  Domain errors are converted into failed results here so that no
subclass has to repeat the mapping.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from calfields.domain.errors import (
    CalendarFieldError,
    CodecError,
    InvalidFieldValueError,
    NullArgumentError,
    UnknownRuleError,
    UnsupportedFieldError,
)
from calfields.domain.rules import rule_for_name
from calfields.services.result import ServiceResult

if TYPE_CHECKING:
    from calfields.config.settings import CalSettings
    from calfields.domain.rules import FieldRule

logger = logging.getLogger(__name__)


class AssignmentError(CalendarFieldError, ValueError):
    """A ``FIELD=VALUE`` argument could not be parsed."""

    def __init__(self, assignment: str, reason: str) -> None:
        super().__init__(f"Invalid field assignment {assignment!r}: {reason}")
        self.assignment = assignment


_ERROR_CODES: tuple[tuple[type[CalendarFieldError], str], ...] = (
    (NullArgumentError, "NULL_ARGUMENT"),
    (InvalidFieldValueError, "INVALID_VALUE"),
    (UnsupportedFieldError, "UNSUPPORTED_FIELD"),
    (UnknownRuleError, "UNKNOWN_RULE"),
    (CodecError, "INVALID_PAYLOAD"),
    (AssignmentError, "INVALID_ASSIGNMENT"),
)


class BaseService:
    """Abstract base for service-layer classes.

    Usage::

        class FieldService(BaseService):
            def describe(self, assignments: Sequence[str]) -> ServiceResult:
                try:
                    ...
                except CalendarFieldError as exc:
                    return self._failure("show", exc)
    """

    def __init__(self, settings: CalSettings) -> None:
        self._settings = settings

    def _resolve_rule(self, name: str) -> FieldRule:
        """Resolve a full (``ISO.Year``) or short (``Year``) rule name."""
        if "." not in name:
            name = f"{self._settings.rules.default_chronology}.{name}"
        return rule_for_name(name)

    def _failure(self, op: str, exc: CalendarFieldError) -> ServiceResult:
        """Convert a domain error into a failed ServiceResult."""
        code = "FIELD_ERROR"
        for exc_type, exc_code in _ERROR_CODES:
            if isinstance(exc, exc_type):
                code = exc_code
                break

        detail: dict[str, Any] = {}
        rule = getattr(exc, "rule", None)
        if rule is not None:
            detail["field"] = rule.name
        if isinstance(exc, InvalidFieldValueError):
            detail["value"] = exc.value
        if isinstance(exc, UnknownRuleError):
            detail["name"] = exc.name
        if isinstance(exc, AssignmentError):
            detail["assignment"] = exc.assignment

        logger.debug("%s failed: %s", op, exc)
        return ServiceResult.failure(op, code, str(exc), detail)
