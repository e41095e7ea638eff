"""Typed error hierarchy for the StormForge API.

All application errors inherit from AppError and provide:
- code: Machine-readable error code (returned as ``error`` in responses)
- message: Human-readable description
- details: Additional context as dict
- retryable: Whether the operation can be retried
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


@dataclass
class AppError(Exception):
    """Base application error with full context."""

    code: str
    message: str = ""
    details: dict[str, Any] = field(default_factory=dict)
    retryable: bool = False
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def __post_init__(self) -> None:
        super().__init__(str(self))

    def to_dict(self) -> dict[str, Any]:
        """Serialize error for logging."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
            "retryable": self.retryable,
            "timestamp": self.timestamp.isoformat(),
        }


# --- Not Found Errors ---


@dataclass
class NotFoundError(AppError):
    """Resource not found."""

    code: str = "NOT_FOUND"
    retryable: bool = False


@dataclass
class UserNotFoundError(NotFoundError):
    """User not found."""

    user_id: str = ""


# --- Validation Errors ---


@dataclass
class ValidationError(AppError):
    """Input validation failed."""

    code: str = "VALIDATION_ERROR"
    retryable: bool = False


# --- Conflict Errors ---


@dataclass
class ConflictError(AppError):
    """Resource collides with an existing one."""

    code: str = "CONFLICT"
    retryable: bool = False


@dataclass
class DuplicateEmailError(ConflictError):
    """A user with this email already exists."""

    email: str = ""


# --- Rate Limiting ---


@dataclass
class RateLimitError(AppError):
    """Client exceeded its request budget."""

    code: str = "TOO_MANY_REQUESTS"
    retryable: bool = True
    retry_after_seconds: int = 60


# --- Database Errors ---


@dataclass
class DatabaseError(AppError):
    """Database operation failed."""

    code: str = "INTERNAL_SERVER_ERROR"
    operation: str = ""
