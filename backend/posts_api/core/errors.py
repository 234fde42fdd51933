"""Error Hierarchy: typed, categorized exceptions for every Posts API failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client-facing errors (400/404) are recoverable; storage errors (500) are critical
    - to_response() produces the single-key JSON body clients expect
      ({errorMessage}, {message} or {error}, depending on the error kind)
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with PostsApiError base: FastAPI global handler catches all
      (ADR: uniform error mapping)
    - DatabaseError is raised by the storage layer and converted to an
      endpoint-specific StorageError at the route boundary
"""

from dataclasses import dataclass
from enum import Enum

from posts_api.core import messages


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    post_id: str | None = None
    operation: str | None = None


class PostsApiError(Exception):
    """Base exception for all Posts API errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        response_key: str = "error",
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.response_key = response_key

    def to_response(self) -> dict:
        """Convert to the JSON body returned to the client."""
        return {self.response_key: self.message}


# ─── Client Errors (400-level) ──────────────────────────────────

class PayloadValidationError(PostsApiError):
    """Request body is missing a required field or has an empty one."""
    def __init__(
        self, message: str, fields: list[str], context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400, "errorMessage",
        )
        self.fields = fields


class PostNotFoundError(PostsApiError):
    """Referenced post does not exist."""
    def __init__(self, post_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.post_id = post_id
        super().__init__(
            messages.POST_NOT_FOUND, "POST_NOT_FOUND",
            ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, ctx, 404, "message",
        )


# ─── Storage Errors (500-level) ─────────────────────────────────

class StorageError(PostsApiError):
    """A storage call failed while serving an endpoint."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "STORAGE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500, "error",
        )


class DatabaseError(PostsApiError):
    """Database operation failed inside the storage layer."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 500, "error",
        )
        self.operation = operation

    def to_response(self) -> dict:
        # Raw driver detail stays in the logs.
        return {self.response_key: messages.UNEXPECTED_ERROR}
