"""Error Hierarchy: typed, categorized exceptions for every UserPosts failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) surface verbatim; infrastructure errors (500-level) are critical
    - to_response() produces the REST error envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with UserPostsError base: FastAPI global handler catches all (ADR: uniform error shape)
    - AlreadyExists maps to 400, not 409: existing clients expect 400 for duplicates
    - Unauthorized never says why a credential failed (expired, tampered and missing look the same)
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    DATABASE = "database"
    INTERNAL = "internal"


class ErrorMessages:
    """User-facing messages shared by repositories, services and routes."""
    USER_NOT_FOUND = "User not found"
    USER_ALREADY_EXISTS = "User already exists with this email"
    ADDRESS_NOT_FOUND = "Address not found"
    ADDRESS_ALREADY_EXISTS = "User already has an address"
    POST_NOT_FOUND = "Post not found"
    INVALID_INPUT = "Invalid input data"
    UNAUTHORIZED = "Unauthorized access"
    FORBIDDEN = "You are not allowed to modify this resource"
    INTERNAL_ERROR = "Internal server error"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    resource_type: str | None = None
    resource_id: str | None = None
    caller_id: str | None = None


class UserPostsError(Exception):
    """Base exception for all UserPosts errors."""

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
            "status": "error",
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
            },
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ValidationFailedError(UserPostsError):
    """Input rejected by validation rules. Carries every violation, not just the first."""
    def __init__(
        self,
        message: str,
        violations: list[dict] | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.violations = violations or []

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["details"] = self.violations
        return response


class ResourceNotFoundError(UserPostsError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, message: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_type = resource_type
        super().__init__(
            message, "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, ctx, 404,
        )


class AlreadyExistsError(UserPostsError):
    """Uniqueness rule violated (email taken, address already present)."""
    def __init__(
        self, resource_type: str, message: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_type = resource_type
        super().__init__(
            message, "ALREADY_EXISTS", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, ctx, 400,
        )


class UnauthorizedError(UserPostsError):
    """Credential missing, malformed, expired or not verifiable."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            ErrorMessages.UNAUTHORIZED, "UNAUTHORIZED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class ForbiddenError(UserPostsError):
    """Caller is authenticated but does not own the target resource."""
    def __init__(
        self, message: str = ErrorMessages.FORBIDDEN, context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "FORBIDDEN", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(UserPostsError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
