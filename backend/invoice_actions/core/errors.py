"""Error Hierarchy — typed, categorized exceptions for invoice action failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Form validation problems are NOT exceptions: they travel as InvalidForm values
    - Infrastructure errors (500-level) never reach the caller with store details attached
    - to_state() renders {message, code}: the same shape as a failed form action
    - public_message is what leaves the API; DatabaseError never exposes store details

Design Decisions:
    - Single hierarchy with InvoiceActionsError base: FastAPI global handler catches all
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
    DATABASE = "database"
    CACHE = "cache"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    invoice_id: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class InvoiceActionsError(Exception):
    """Base exception for all invoice action errors."""

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
        self.public_message = message

    def to_state(self) -> dict:
        """Render in the invoice form-state shape every failed request shares."""
        return {"message": self.public_message, "code": self.code}


# ─── Domain Errors (400-level) ──────────────────────────────────

class ResourceNotFoundError(InvoiceActionsError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(InvoiceActionsError):
    """Record store operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
        self.public_message = "Database Error: Service unavailable."


class ViewInvalidationError(InvoiceActionsError):
    """The write succeeded but the list view could not be invalidated."""
    def __init__(self, path: str, context: ErrorContext | None = None):
        super().__init__(
            f"Saved, but the view at '{path}' could not be refreshed",
            "VIEW_INVALIDATION_FAILED", ErrorCategory.CACHE,
            ErrorSeverity.ERROR, context, 503,
        )
        self.path = path
