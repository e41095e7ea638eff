"""User repository implementation."""

from sqlalchemy import select

from stormforge.domain.entities.user import User
from stormforge.infrastructure.database.models.user import UserModel
from stormforge.infrastructure.repositories.base import BaseRepository


class UserRepositoryImpl(BaseRepository[UserModel, User]):
    """SQLAlchemy implementation of UserRepository."""

    model_class = UserModel

    async def get_by_email(self, email: str) -> User | None:
        """Get user by email address."""
        stmt = select(UserModel).where(UserModel.email == email)
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            return None
        return model.to_entity()

    async def list_all(self) -> list[User]:
        """Get all users in insertion order."""
        stmt = select(UserModel).order_by(UserModel.created_at, UserModel.email)
        result = await self.session.execute(stmt)
        return [model.to_entity() for model in result.scalars().all()]

    async def create(self, user: User) -> User:
        """Create a new user.

        Raises:
            sqlalchemy.exc.IntegrityError: if the email is already taken
        """
        return await super().create(user)
