"""Error Hierarchy — typed, categorized exceptions for all phonebook failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the {status, data} REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with PhonebookError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    PERSISTENCE = "persistence"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    entry_id: int | None = None
    reference_key: str | None = None
    debug_info: dict[str, Any] | None = None


class PhonebookError(Exception):
    """Base exception for all phonebook errors."""

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

    @property
    def public_data(self) -> Any:
        """Client-visible payload placed under the envelope's ``data`` key."""
        return self.message

    def to_response(self) -> dict:
        """Convert to standardized REST error envelope."""
        return {"status": "error", "data": self.public_data}


# ─── Domain Errors (400-level) ──────────────────────────────────

class EntryValidationError(PhonebookError):
    """One or more fields failed validation."""
    def __init__(self, errors: dict[str, str], context: ErrorContext | None = None):
        super().__init__(
            "Validation failed: " + ", ".join(sorted(errors)),
            "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.errors = errors

    @property
    def public_data(self) -> dict[str, str]:
        return self.errors


class ResourceNotFoundError(PhonebookError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )

    @property
    def public_data(self) -> dict[str, str]:
        return {"id": self.message}


class MissingIdentifierError(PhonebookError):
    """Route addressed a single resource without supplying its id."""
    def __init__(self, message: str = "The id is required", context: ErrorContext | None = None):
        super().__init__(
            message, "MISSING_IDENTIFIER", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )

    @property
    def public_data(self) -> dict[str, str]:
        return {"id": self.message}


class PersistenceError(PhonebookError):
    """Store rejected the write (e.g. unique constraint at commit time)."""
    def __init__(self, errors: dict[str, str], context: ErrorContext | None = None):
        super().__init__(
            "Store constraint violated: " + ", ".join(sorted(errors)),
            "PERSISTENCE_ERROR", ErrorCategory.PERSISTENCE,
            ErrorSeverity.ERROR, context, 400,
        )
        self.errors = errors

    @property
    def public_data(self) -> dict[str, str]:
        return self.errors


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(PhonebookError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation

    @property
    def public_data(self) -> str:
        return "Database unavailable"


class UpstreamFetchError(PhonebookError):
    """Reference data API call failed (non-200, timeout, transport, bad body)."""
    def __init__(self, path: str, reason: str, context: ErrorContext | None = None):
        super().__init__(
            f"Reference fetch {path} failed: {reason}",
            "UPSTREAM_FETCH_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.WARNING, context, 503,
        )
        self.path = path
        self.reason = reason

    @property
    def public_data(self) -> str:
        return "Reference data unavailable"
