"""Error Hierarchy — typed, categorized exceptions for all works-council failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with WorksCouncilError base: FastAPI global handler catches all
    - Engine operations return results (core/results.py); these exceptions are what
      Result.unwrap() raises at the route boundary, plus what repositories raise for storage faults
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    CONFLICT = "conflict"
    TIMEOUT = "timeout"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    unit_id: str | None = None
    employee_id: str | None = None
    category: str | None = None
    debug_info: dict[str, Any] | None = None


class WorksCouncilError(Exception):
    """Base exception for all works-council errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "unit_id": self.context.unit_id,
                    "employee_id": self.context.employee_id,
                    "category": self.context.category,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class CategoryValidationError(WorksCouncilError):
    """Category text does not name one of the four constituencies."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = "category"


class OrderingValidationError(WorksCouncilError):
    """Reorder input is structurally invalid (e.g. repeated ids)."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = "ordered_ids"


class UnitMismatchError(WorksCouncilError):
    """Employee belongs to a different organizational unit than the one addressed."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "UNIT_MISMATCH", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )


class DuplicateMembershipError(WorksCouncilError):
    """Employee already holds a membership in the category."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "DUPLICATE_MEMBERSHIP", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 400,
        )


class ResourceNotFoundError(WorksCouncilError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class OperationCancelledError(WorksCouncilError):
    """Caller signalled cancellation before the operation finished."""
    def __init__(self, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Operation '{operation}' was cancelled",
            "OPERATION_CANCELLED", ErrorCategory.TIMEOUT,
            ErrorSeverity.WARNING, context, 408,
        )
        self.operation = operation


# ─── Infrastructure Errors (500-level) ──────────────────────────

class UniqueConstraintError(WorksCouncilError):
    """A storage uniqueness constraint rejected a write (concurrent writer won)."""
    def __init__(self, entity: str, key: str, context: ErrorContext | None = None):
        super().__init__(
            f"{entity} with key {key} already exists",
            "CONCURRENCY_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )
        self.entity = entity
        self.key = key


class DatabaseError(WorksCouncilError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
