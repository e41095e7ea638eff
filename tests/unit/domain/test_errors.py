"""Tests for domain errors."""

from stormforge.domain.errors import (
    AppError,
    ConflictError,
    DatabaseError,
    DuplicateEmailError,
    NotFoundError,
    RateLimitError,
    UserNotFoundError,
    ValidationError,
)


class TestAppError:
    """Test base AppError."""

    def test_error_creation(self):
        """Test creating an error."""
        error = AppError(
            code="TEST_ERROR",
            message="Test error message",
            details={"key": "value"},
            retryable=True,
        )

        assert error.code == "TEST_ERROR"
        assert error.message == "Test error message"
        assert error.details == {"key": "value"}
        assert error.retryable is True
        assert error.timestamp is not None

    def test_error_str(self):
        """Test error string representation."""
        error = AppError(code="TEST", message="Test message")
        assert str(error) == "[TEST] Test message"

    def test_error_to_dict(self):
        """Test error serialization."""
        error = AppError(code="TEST_ERROR", message="Test message")

        d = error.to_dict()

        assert d["code"] == "TEST_ERROR"
        assert d["message"] == "Test message"
        assert d["details"] == {}
        assert d["retryable"] is False
        assert "timestamp" in d


class TestNotFoundErrors:
    """Test NotFound error variants."""

    def test_user_not_found_uses_generic_code(self):
        """Clients see NOT_FOUND regardless of the resource type."""
        error = UserNotFoundError(message="User with id abc not found", user_id="abc")

        assert isinstance(error, NotFoundError)
        assert error.code == "NOT_FOUND"
        assert error.user_id == "abc"
        assert error.retryable is False


class TestConflictErrors:
    """Test conflict error variants."""

    def test_duplicate_email(self):
        """Test DuplicateEmailError carries the email."""
        error = DuplicateEmailError(
            message="User with email a@example.com already exists",
            email="a@example.com",
        )

        assert isinstance(error, ConflictError)
        assert error.code == "CONFLICT"
        assert error.email == "a@example.com"


class TestOtherErrors:
    """Test remaining error variants."""

    def test_validation_error_code(self):
        assert ValidationError(message="bad").code == "VALIDATION_ERROR"

    def test_rate_limit_is_retryable(self):
        """Test rate limit error has retry info."""
        error = RateLimitError(message="slow down", retry_after_seconds=12)

        assert error.code == "TOO_MANY_REQUESTS"
        assert error.retryable is True
        assert error.retry_after_seconds == 12

    def test_database_error_is_internal(self):
        error = DatabaseError(message="boom", operation="create")

        assert error.code == "INTERNAL_SERVER_ERROR"
        assert error.operation == "create"
