"""SQLAlchemy database models."""

from stormforge.infrastructure.database.models.base import Base, TimestampMixin
from stormforge.infrastructure.database.models.user import UserModel

__all__ = [
    "Base",
    "TimestampMixin",
    "UserModel",
]
