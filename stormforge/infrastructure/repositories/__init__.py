"""Repository implementations."""

from stormforge.infrastructure.repositories.base import BaseRepository
from stormforge.infrastructure.repositories.user_repository import UserRepositoryImpl

__all__ = [
    "BaseRepository",
    "UserRepositoryImpl",
]
