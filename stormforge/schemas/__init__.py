"""Request/response schemas shared by the HTTP layer and the OpenAPI document."""

from stormforge.schemas.user import (
    CreateUserRequest,
    ErrorResponse,
    UpdateUserRequest,
    UserResponse,
    UsersResponse,
    ValidationErrorResponse,
)

__all__ = [
    "CreateUserRequest",
    "UpdateUserRequest",
    "UserResponse",
    "UsersResponse",
    "ErrorResponse",
    "ValidationErrorResponse",
]
