"""Error Hierarchy: typed, categorized exceptions for all StudyMatch failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors are recoverable and raised before any state is mutated
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with StudyMatchError base: one FastAPI handler catches all
    - ErrorContext as dataclass: observability fields without coupling to logging
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
    LOOKUP = "lookup"
    AUTHORIZATION = "authorization"
    AUTHENTICATION = "authentication"
    STATE = "state"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: int | None = None
    request_id: int | None = None
    debug_info: dict[str, Any] | None = None


class StudyMatchError(Exception):
    """Base exception for all StudyMatch errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.WARNING,
        context: ErrorContext | None = None,
        http_status: int = 400,
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
            }
        }


# ─── Validation Errors ──────────────────────────────────────────

class DuplicateUserError(StudyMatchError):
    """Username already registered."""
    def __init__(self, username: str, context: ErrorContext | None = None):
        super().__init__(
            "User already exists.",
            "DUPLICATE_USER", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 409,
        )
        self.username = username


class InvalidEmailDomainError(StudyMatchError):
    """Username is not an institutional email address."""
    def __init__(self, domain: str, context: ErrorContext | None = None):
        super().__init__(
            f"Only {domain} emails are allowed.",
            "INVALID_EMAIL_DOMAIN", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.domain = domain


class PasswordTooShortError(StudyMatchError):
    """Password below the configured minimum length."""
    def __init__(self, min_length: int, context: ErrorContext | None = None):
        super().__init__(
            f"Password must be at least {min_length} characters long.",
            "PASSWORD_TOO_SHORT", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.min_length = min_length


class PasswordMismatchError(StudyMatchError):
    """Password and confirmation differ."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Passwords do not match.",
            "PASSWORD_MISMATCH", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )


class MissingRequiredFieldError(StudyMatchError):
    """One or more required fields were blank or absent."""
    def __init__(self, fields: list[str], context: ErrorContext | None = None):
        super().__init__(
            f"Missing required field(s): {', '.join(fields)}.",
            "MISSING_REQUIRED_FIELD", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.fields = fields


# ─── Lookup Errors ──────────────────────────────────────────────

class UserNotFoundError(StudyMatchError):
    """User id does not resolve."""
    def __init__(self, user_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.user_id = user_id
        super().__init__(
            f"User '{user_id}' not found",
            "USER_NOT_FOUND", ErrorCategory.LOOKUP,
            ErrorSeverity.WARNING, ctx, 404,
        )


class RecipientNotFoundError(StudyMatchError):
    """Session request addressed to a user that does not exist."""
    def __init__(self, user_id: int, context: ErrorContext | None = None):
        super().__init__(
            f"Recipient '{user_id}' not found",
            "RECIPIENT_NOT_FOUND", ErrorCategory.LOOKUP,
            ErrorSeverity.WARNING, context, 404,
        )
        self.recipient_id = user_id


class RequestNotFoundError(StudyMatchError):
    """Session request id does not resolve."""
    def __init__(self, request_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.request_id = request_id
        super().__init__(
            f"Session request '{request_id}' not found",
            "REQUEST_NOT_FOUND", ErrorCategory.LOOKUP,
            ErrorSeverity.WARNING, ctx, 404,
        )


# ─── Authorization / Authentication Errors ──────────────────────

class NotAuthorizedError(StudyMatchError):
    """Acting user may not perform this action on the request."""
    def __init__(self, action: str, context: ErrorContext | None = None):
        super().__init__(
            f"You are not allowed to {action} this request.",
            "NOT_AUTHORIZED", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )
        self.action = action


class InvalidCredentialsError(StudyMatchError):
    """Unknown username or wrong password (deliberately indistinguishable)."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid credentials.",
            "INVALID_CREDENTIALS", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class AuthenticationRequiredError(StudyMatchError):
    """Missing, invalid or expired access token."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Authentication required.",
            "AUTHENTICATION_REQUIRED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


# ─── State Errors ───────────────────────────────────────────────

class SelfRequestError(StudyMatchError):
    """Sender and recipient are the same user."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "You cannot send a study request to yourself.",
            "SELF_REQUEST", ErrorCategory.STATE,
            ErrorSeverity.WARNING, context, 400,
        )


class CourseNotSharedError(StudyMatchError):
    """Course missing from the sender's or recipient's course set."""
    def __init__(self, course: str, context: ErrorContext | None = None):
        super().__init__(
            f"Course '{course}' is not shared by both students.",
            "COURSE_NOT_SHARED", ErrorCategory.STATE,
            ErrorSeverity.WARNING, context, 400,
        )
        self.course = course


class SlotNotMutuallyAvailableError(StudyMatchError):
    """Time slot missing from either student's availability."""
    def __init__(self, time_slot: str, context: ErrorContext | None = None):
        super().__init__(
            f"Time slot '{time_slot}' is not available for both students.",
            "SLOT_NOT_MUTUALLY_AVAILABLE", ErrorCategory.STATE,
            ErrorSeverity.WARNING, context, 400,
        )
        self.time_slot = time_slot


class InvalidStateError(StudyMatchError):
    """Transition not allowed from the request's current status."""
    def __init__(
        self, current: str, attempted: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Cannot {attempted} a request that is {current}.",
            "INVALID_STATE", ErrorCategory.STATE,
            ErrorSeverity.WARNING, context, 409,
        )
        self.current = current
        self.attempted = attempted
