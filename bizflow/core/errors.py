"""Error Hierarchy - typed, module-scoped exceptions for business-function failures.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - ComponentError is the only type the orchestrator aggregates; its kind tag
      (ErrorKind.VALIDATION / ErrorKind.SYSTEM) decides the branch
    - CompositeError preserves every child: same objects, same order, no dedup
    - to_response() produces the structured envelope; composites nest children in order
    - messages() flattens user-visible messages in declaration order

Design Decisions:
    - Single hierarchy with BizFlowError base: one except clause catches every library error
    - ErrorContext as dataclass: observability data without coupling to logging
    - SystemFaultError rather than SystemError: the builtin name stays untouched
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Iterator, Sequence

from bizflow.core.domain_types import ErrorKind, ModuleId


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    SYSTEM = "system"
    DATABASE = "database"
    CONFIGURATION = "configuration"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    module: str | None = None
    locale: str | None = None
    error_field: str | None = None
    params: tuple = ()
    debug_info: dict[str, Any] | None = None


class BizFlowError(Exception):
    """Base exception for all bizflow errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()

    def messages(self) -> list[str]:
        """User-visible messages, one per underlying failure."""
        return [self.message]

    def to_response(self) -> dict:
        """Convert to the standardized error envelope."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "module": self.context.module,
                "field": self.context.error_field,
            }
        }


# ─── Component Errors ───────────────────────────────────────────

class ComponentError(BizFlowError):
    """A classified business-function failure, scoped to a module."""

    kind: ErrorKind

    def __init__(
        self,
        module: ModuleId,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity,
        context: ErrorContext | None = None,
    ):
        ctx = replace(context, module=module) if context else ErrorContext(module=module)
        super().__init__(message, code, category, severity, ctx)
        self.module = module

    @property
    def field(self) -> str | None:
        return self.context.error_field


class ValidationError(ComponentError):
    """Business-rule violation: recoverable, user-facing."""

    kind = ErrorKind.VALIDATION

    def __init__(
        self,
        module: ModuleId,
        message: str,
        code: str = "VALIDATION_ERROR",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            module, message, code, ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context,
        )


class SystemFaultError(ComponentError):
    """Unexpected or technical failure."""

    kind = ErrorKind.SYSTEM

    def __init__(
        self,
        module: ModuleId,
        message: str,
        code: str = "SYSTEM_ERROR",
        context: ErrorContext | None = None,
        cause: BaseException | None = None,
        category: ErrorCategory = ErrorCategory.SYSTEM,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
    ):
        super().__init__(module, message, code, category, severity, context)
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause


# ─── Composite Errors ───────────────────────────────────────────

MULTIPLE_ERRORS_MESSAGE = "Multiple System/Application Errors"
MULTIPLE_VALIDATION_ERRORS_MESSAGE = "Multiple Application Errors"


class _ErrorCollection:
    """Shared container behaviour for composite errors."""

    errors: tuple[ComponentError, ...]

    def __iter__(self) -> Iterator[ComponentError]:
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)

    def messages(self) -> list[str]:
        return [msg for err in self.errors for msg in err.messages()]

    def to_response(self) -> dict:
        response = super().to_response()  # type: ignore[misc]
        response["error"]["errors"] = [
            err.to_response()["error"] for err in self.errors
        ]
        return response


class CompositeError(_ErrorCollection, SystemFaultError):
    """One system-kind error wrapping an ordered list of component errors."""

    def __init__(
        self,
        module: ModuleId,
        errors: Sequence[ComponentError],
        context: ErrorContext | None = None,
    ):
        super().__init__(module, MULTIPLE_ERRORS_MESSAGE, "MULTIPLE_ERRORS", context)
        self.errors = tuple(errors)


class CompositeValidationError(_ErrorCollection, ValidationError):
    """Validation-kind counterpart of CompositeError."""

    def __init__(
        self,
        module: ModuleId,
        errors: Sequence[ComponentError],
        context: ErrorContext | None = None,
    ):
        super().__init__(
            module, MULTIPLE_VALIDATION_ERRORS_MESSAGE,
            "MULTIPLE_VALIDATION_ERRORS", context,
        )
        self.errors = tuple(errors)


# ─── Infrastructure Errors ──────────────────────────────────────

class DatabaseError(SystemFaultError):
    """Transaction or connection failure in the SQLAlchemy-backed scope."""
    def __init__(
        self,
        module: ModuleId,
        message: str,
        operation: str,
        cause: BaseException | None = None,
    ):
        super().__init__(
            module, f"Database {operation} failed: {message}", "DATABASE_ERROR",
            cause=cause, category=ErrorCategory.DATABASE,
            severity=ErrorSeverity.CRITICAL,
        )
        self.operation = operation
