"""Users CRUD endpoints."""

from uuid import UUID, uuid4

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from stormforge.domain.entities.user import User
from stormforge.domain.errors import DatabaseError, DuplicateEmailError, UserNotFoundError
from stormforge.domain.protocols import UserRepository
from stormforge.infrastructure.database.connection import get_db
from stormforge.infrastructure.repositories.user_repository import UserRepositoryImpl
from stormforge.infrastructure.telemetry import get_logger, record_user_operation
from stormforge.schemas.user import (
    CreateUserRequest,
    ErrorResponse,
    UpdateUserRequest,
    UserResponse,
    UsersResponse,
    ValidationErrorResponse,
)

logger = get_logger(__name__)
router = APIRouter()

_NOT_FOUND = {404: {"model": ErrorResponse, "description": "User not found"}}
_INVALID = {400: {"model": ValidationErrorResponse, "description": "Invalid request"}}


def get_user_repository(db: AsyncSession = Depends(get_db)) -> UserRepository:
    """FastAPI dependency providing a request-scoped user repository."""
    return UserRepositoryImpl(db)


async def _get_existing_user(repo: UserRepository, user_id: str, operation: str) -> User:
    """Load a user or raise UserNotFoundError.

    Identifiers that are not UUIDs cannot exist, so they are reported as
    missing rather than malformed.
    """
    try:
        parsed = UUID(user_id)
    except ValueError:
        parsed = None

    user = await repo.get_by_id(parsed) if parsed is not None else None
    if user is None:
        record_user_operation(operation, "not_found")
        raise UserNotFoundError(
            message=f"User with id {user_id} not found",
            user_id=user_id,
        )
    return user


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        **_INVALID,
        409: {"model": ErrorResponse, "description": "Email already registered"},
        500: {"model": ErrorResponse, "description": "Database failure"},
    },
)
async def create_user(
    request: CreateUserRequest,
    repo: UserRepository = Depends(get_user_repository),
) -> UserResponse:
    """Create a new user."""
    email = str(request.email)

    if await repo.get_by_email(email) is not None:
        record_user_operation("create", "conflict")
        raise DuplicateEmailError(
            message=f"User with email {email} already exists",
            email=email,
        )

    user = User(id=uuid4(), email=email, name=request.name, avatar=request.avatar)

    try:
        created = await repo.create(user)
    except IntegrityError as e:
        # Another request inserted the same email after our lookup
        record_user_operation("create", "conflict")
        raise DuplicateEmailError(
            message=f"User with email {email} already exists",
            email=email,
        ) from e
    except SQLAlchemyError as e:
        record_user_operation("create", "error")
        logger.exception("Failed to create user", extra={"error_type": type(e).__name__})
        raise DatabaseError(message="Failed to create user", operation="create") from e

    record_user_operation("create", "success")
    logger.info("User created", extra={"user_id": str(created.id)})

    return UserResponse.from_entity(created)


@router.get("", response_model=UsersResponse)
async def list_users(
    repo: UserRepository = Depends(get_user_repository),
) -> UsersResponse:
    """List every user."""
    users = await repo.list_all()
    record_user_operation("list", "success")
    return UsersResponse(users=[UserResponse.from_entity(u) for u in users])


@router.get("/{user_id}", response_model=UserResponse, responses=_NOT_FOUND)
async def get_user(
    user_id: str,
    repo: UserRepository = Depends(get_user_repository),
) -> UserResponse:
    """Get a user by ID."""
    user = await _get_existing_user(repo, user_id, "get")
    record_user_operation("get", "success")
    return UserResponse.from_entity(user)


@router.patch(
    "/{user_id}",
    response_model=UserResponse,
    responses={**_INVALID, **_NOT_FOUND},
)
async def update_user(
    user_id: str,
    request: UpdateUserRequest,
    repo: UserRepository = Depends(get_user_repository),
) -> UserResponse:
    """Update a user. Only the supplied fields change."""
    user = await _get_existing_user(repo, user_id, "update")

    changes = request.model_dump(exclude_unset=True)
    user.apply_changes(**changes)
    updated = await repo.update(user)

    record_user_operation("update", "success")
    logger.info(
        "User updated",
        extra={
            "user_id": user_id,
            "fields": sorted(changes),
        },
    )

    return UserResponse.from_entity(updated)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_NOT_FOUND,
)
async def delete_user(
    user_id: str,
    repo: UserRepository = Depends(get_user_repository),
) -> Response:
    """Delete a user permanently."""
    user = await _get_existing_user(repo, user_id, "delete")
    await repo.delete(user.id)

    record_user_operation("delete", "success")
    logger.info("User deleted", extra={"user_id": user_id})

    return Response(status_code=status.HTTP_204_NO_CONTENT)
