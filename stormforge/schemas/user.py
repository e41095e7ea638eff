"""User API schemas (request/response models)."""

from uuid import UUID

from pydantic import (
    AnyUrl,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    TypeAdapter,
    ValidatorFunctionWrapHandler,
    field_validator,
)
from pydantic import ValidationError as PydanticValidationError

from stormforge.domain.entities.user import User

NAME_MIN_LENGTH = 1
NAME_MAX_LENGTH = 100

_uri_adapter = TypeAdapter(AnyUrl)


def _validate_uri(value: str | None) -> str | None:
    """Check that value parses as an absolute URI, keeping it verbatim."""
    if value is None:
        return value
    try:
        _uri_adapter.validate_python(value)
    except PydanticValidationError:
        raise ValueError("must be a valid URI") from None
    return value


class UserResponse(BaseModel):
    """Public projection of a user."""

    id: UUID
    email: str
    name: str | None = None
    avatar: str | None = None
    active: bool

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            email=user.email,
            name=user.name,
            avatar=user.avatar,
            active=user.active,
        )


class CreateUserRequest(BaseModel):
    """Request to create a user."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "email": "jane@example.com",
                    "name": "Jane Doe",
                    "avatar": "https://example.com/jane.png",
                }
            ]
        }
    )

    email: EmailStr
    name: str | None = Field(None, min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)
    avatar: str | None = Field(None, json_schema_extra={"format": "uri"})

    @field_validator("email", mode="wrap")
    @classmethod
    def keep_email_as_sent(cls, v: object, handler: ValidatorFunctionWrapHandler) -> object:
        # EmailStr normalises the domain; store what the client sent
        handler(v)
        return v

    @field_validator("avatar")
    @classmethod
    def validate_avatar(cls, v: str | None) -> str | None:
        return _validate_uri(v)


class UpdateUserRequest(BaseModel):
    """Request to update a user.

    Omitted fields are left unchanged. An explicit null is rejected rather
    than treated as omitted; use ``model_dump(exclude_unset=True)`` to get
    the fields the client actually sent.
    """

    name: str | None = Field(None, min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)
    avatar: str | None = Field(None, json_schema_extra={"format": "uri"})
    active: bool | None = None

    @field_validator("name", "avatar", "active", mode="before")
    @classmethod
    def reject_null(cls, v: object) -> object:
        if v is None:
            raise ValueError("must not be null")
        return v

    @field_validator("avatar")
    @classmethod
    def validate_avatar(cls, v: str | None) -> str | None:
        return _validate_uri(v)


class UsersResponse(BaseModel):
    """List of users."""

    users: list[UserResponse]


class ErrorResponse(BaseModel):
    """Error body returned by every failing endpoint."""

    error: str = Field(..., examples=["NOT_FOUND"])
    message: str


class ValidationErrorResponse(ErrorResponse):
    """Error body for schema validation failures."""

    details: list[dict] = Field(default_factory=list)
