"""Integration tests for the SQLAlchemy user repository."""

from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from stormforge.domain.entities.user import User
from stormforge.infrastructure.repositories import UserRepositoryImpl


def _user(email: str = "john@example.com", **kwargs) -> User:
    return User(id=uuid4(), email=email, **kwargs)


class TestUserRepository:
    """Test UserRepositoryImpl against SQLite."""

    @pytest.mark.asyncio
    async def test_create_and_get_by_id(self, db_session: AsyncSession):
        repo = UserRepositoryImpl(db_session)
        user = _user(name="John Doe")

        created = await repo.create(user)
        fetched = await repo.get_by_id(user.id)

        assert created.id == user.id
        assert fetched is not None
        assert fetched.email == "john@example.com"
        assert fetched.name == "John Doe"
        assert fetched.active is True

    @pytest.mark.asyncio
    async def test_get_by_id_missing(self, db_session: AsyncSession):
        repo = UserRepositoryImpl(db_session)

        assert await repo.get_by_id(uuid4()) is None

    @pytest.mark.asyncio
    async def test_get_by_email(self, db_session: AsyncSession):
        repo = UserRepositoryImpl(db_session)
        await repo.create(_user("jane@example.com"))

        found = await repo.get_by_email("jane@example.com")

        assert found is not None
        assert found.email == "jane@example.com"
        assert await repo.get_by_email("nobody@example.com") is None

    @pytest.mark.asyncio
    async def test_list_all(self, db_session: AsyncSession):
        repo = UserRepositoryImpl(db_session)
        assert await repo.list_all() == []

        await repo.create(_user("a@example.com"))
        await repo.create(_user("b@example.com"))

        emails = sorted(u.email for u in await repo.list_all())
        assert emails == ["a@example.com", "b@example.com"]

    @pytest.mark.asyncio
    async def test_update_changes_only_given_fields(self, db_session: AsyncSession):
        repo = UserRepositoryImpl(db_session)
        user = await repo.create(_user(name="Old", avatar="https://example.com/a.png"))

        user.apply_changes(name="New")
        updated = await repo.update(user)

        assert updated.name == "New"
        assert updated.avatar == "https://example.com/a.png"
        assert updated.email == "john@example.com"

    @pytest.mark.asyncio
    async def test_delete(self, db_session: AsyncSession):
        repo = UserRepositoryImpl(db_session)
        user = await repo.create(_user())

        assert await repo.delete(user.id) is True
        assert await repo.get_by_id(user.id) is None
        assert await repo.delete(user.id) is False

    @pytest.mark.asyncio
    async def test_duplicate_email_violates_unique_constraint(
        self, db_session: AsyncSession
    ):
        repo = UserRepositoryImpl(db_session)
        await repo.create(_user("dup@example.com"))

        with pytest.raises(IntegrityError):
            await repo.create(_user("dup@example.com"))
