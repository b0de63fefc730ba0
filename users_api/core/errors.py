"""Error Hierarchy: typed, categorized exceptions for every failure the API reports.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) are raised before the store is mutated
    - to_response() produces the single REST error envelope used by all handlers
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with UsersApiError base: one global handler catches all
    - FieldError as dataclass: validators return lists of them, errors carry them
"""

from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    MALFORMED_INPUT = "malformed_input"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    INTERNAL = "internal"


@dataclass(frozen=True)
class FieldError:
    """A single failing field and the reason it failed."""
    field: str
    message: str

    def to_dict(self) -> dict:
        return asdict(self)


class UsersApiError(Exception):
    """Base exception for all Users API errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        http_status: int = 500,
        details: list[dict[str, Any]] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.http_status = http_status
        self.details = details
        self.timestamp = datetime.now(timezone.utc)

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        error: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.timestamp.isoformat(),
        }
        if self.details is not None:
            error["details"] = self.details
        return {"error": error}


# ─── Client Errors (400-level) ──────────────────────────────────

class RequestValidationFailedError(UsersApiError):
    """One or more request fields failed validation."""
    def __init__(self, errors: list[FieldError]):
        super().__init__(
            "Validation failed", "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, 400,
            details=[e.to_dict() for e in errors],
        )
        self.errors = errors


class InvalidUserIdError(UsersApiError):
    """User id path parameter is not a positive integer."""
    def __init__(self, raw_id: str):
        super().__init__(
            f"Invalid user ID '{raw_id}': must be a positive integer",
            "INVALID_ID", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, 400,
        )
        self.raw_id = raw_id


class MalformedJsonError(UsersApiError):
    """Request body could not be decoded as JSON."""
    def __init__(self):
        super().__init__(
            "Invalid JSON", "INVALID_JSON", ErrorCategory.MALFORMED_INPUT,
            ErrorSeverity.WARNING, 400,
        )


class UserNotFoundError(UsersApiError):
    """No user with the requested id exists."""
    def __init__(self, user_id: int):
        super().__init__(
            f"User with ID {user_id} not found",
            "USER_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, 404,
        )
        self.user_id = user_id


class RouteNotFoundError(UsersApiError):
    """No route matches the request method and path."""
    def __init__(self, method: str, path: str, available_endpoints: list[str]):
        super().__init__(
            f"Route {method} {path} not found",
            "ROUTE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, 404,
        )
        self.available_endpoints = available_endpoints

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["available_endpoints"] = self.available_endpoints
        return response


class DuplicateEmailError(UsersApiError):
    """Email is already registered to another user."""
    def __init__(self, email: str):
        super().__init__(
            f"A user with email '{email}' already exists",
            "DUPLICATE_EMAIL", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, 409,
        )
        self.email = email
