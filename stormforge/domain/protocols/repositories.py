"""Repository protocols - abstract interfaces for data access."""

from typing import Protocol
from uuid import UUID

from stormforge.domain.entities import User


class UserRepository(Protocol):
    """Abstract interface for user data access."""

    async def get_by_id(self, user_id: UUID) -> User | None:
        """Get user by ID."""
        ...

    async def get_by_email(self, email: str) -> User | None:
        """Get user by email address."""
        ...

    async def list_all(self) -> list[User]:
        """Get every user."""
        ...

    async def create(self, user: User) -> User:
        """Create a new user."""
        ...

    async def update(self, user: User) -> User:
        """Update an existing user."""
        ...

    async def delete(self, user_id: UUID) -> bool:
        """Delete a user, returning False if it did not exist."""
        ...
