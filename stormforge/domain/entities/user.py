"""User entity."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID


@dataclass
class User:
    """A user record managed through the CRUD API."""

    id: UUID
    email: str
    name: str | None = None
    avatar: str | None = None
    active: bool = True
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        if not self.email:
            raise ValueError("User email is required")

    def apply_changes(
        self,
        name: str | None = None,
        avatar: str | None = None,
        active: bool | None = None,
    ) -> None:
        """Apply a partial update; arguments left as None are not touched."""
        if name is not None:
            self.name = name
        if avatar is not None:
            self.avatar = avatar
        if active is not None:
            self.active = active
        self.updated_at = datetime.now(UTC)
