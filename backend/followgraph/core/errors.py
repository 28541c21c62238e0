"""Error Hierarchy — typed, categorized exceptions for all follow-graph failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Input errors (400-level) are raised before any store mutation
    - Edge update errors carry the reason the conditional write matched nothing
    - to_response() produces the uniform failure envelope (success=False)
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with FollowGraphError base: FastAPI global handler catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - *UpdateFailed kinds keep one code each; the reason only changes the HTTP status
      (ADR: callers match on code, operators read the reason)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone

from followgraph.core.domain_types import EdgeUpdateFailure


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    target_id: str | None = None
    operation: str | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None


class FollowGraphError(Exception):
    """Base exception for all follow-graph errors."""

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
        """Convert to the standardized failure envelope."""
        return {
            "status": self.http_status,
            "message": self.context.user_message or self.message,
            "success": False,
            "error": {
                "code": self.code,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "user_id": self.context.user_id,
                    "target_id": self.context.target_id,
                    "operation": self.context.operation,
                },
            },
        }


# ─── Input Errors (400-level) ────────────────────────────────────

class InvalidUsernameError(FollowGraphError):
    """Username shorter than the minimum length."""
    def __init__(self, min_length: int, context: ErrorContext | None = None):
        super().__init__(
            f"Username must be at least {min_length} characters long",
            "INVALID_USERNAME", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.min_length = min_length


class InvalidIdentifierError(FollowGraphError):
    """Identifier is not syntactically well-formed."""
    def __init__(self, field: str, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid user id for '{field}'",
            "INVALID_IDENTIFIER", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class IdentityConflictError(FollowGraphError):
    """Two identifiers that must differ are equal."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "User ids must refer to two different users",
            "IDENTITY_CONFLICT", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )


class UnsupportedParameterError(FollowGraphError):
    """Request carried query parameters the endpoint does not accept."""
    def __init__(self, names: list[str], context: ErrorContext | None = None):
        super().__init__(
            f"Unsupported query parameter(s): {', '.join(names)}",
            "UNSUPPORTED_PARAMETER", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.names = names


# ─── Conflict Errors (409-level) ─────────────────────────────────

class DuplicateUsernameError(FollowGraphError):
    """A user with this username already exists."""
    def __init__(self, username: str, context: ErrorContext | None = None):
        super().__init__(
            f"Username '{username}' is already taken",
            "DUPLICATE_USERNAME", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )
        self.username = username


class EdgeUpdateError(FollowGraphError):
    """A conditional adjacency-list write matched no record.

    half_edge is True when Step 2 failed after Step 1 committed and the pair
    is left with exactly one side present.
    """

    CODE = "EDGE_UPDATE_FAILED"
    DESCRIPTION = "Edge update failed"

    def __init__(
        self,
        reason: EdgeUpdateFailure,
        half_edge: bool = False,
        context: ErrorContext | None = None,
    ):
        not_found = reason == EdgeUpdateFailure.USER_NOT_FOUND
        super().__init__(
            f"{self.DESCRIPTION}: {reason.value.replace('_', ' ')}",
            self.CODE,
            ErrorCategory.RESOURCE_NOT_FOUND if not_found else ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context,
            404 if not_found else 409,
        )
        self.reason = reason
        self.half_edge = half_edge


class FollowingUpdateError(EdgeUpdateError):
    """Step 1 of follow: could not add to the follower's followings."""
    CODE = "FOLLOWING_UPDATE_FAILED"
    DESCRIPTION = "Failed to update followings"


class FollowersUpdateError(EdgeUpdateError):
    """Step 2 of follow: could not add to the followee's followers."""
    CODE = "FOLLOWERS_UPDATE_FAILED"
    DESCRIPTION = "Failed to update followers"


class UnfollowingUpdateError(EdgeUpdateError):
    """Step 1 of unfollow: could not remove from the follower's followings."""
    CODE = "UNFOLLOWING_UPDATE_FAILED"
    DESCRIPTION = "Failed to remove from followings"


class UnfollowersUpdateError(EdgeUpdateError):
    """Step 2 of unfollow: could not remove from the followee's followers."""
    CODE = "UNFOLLOWERS_UPDATE_FAILED"
    DESCRIPTION = "Failed to remove from followers"


class ResourceNotFoundError(FollowGraphError):
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

class DatabaseError(FollowGraphError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
