"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator, Generator
from pathlib import Path
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from stormforge.config import Settings
from stormforge.infrastructure.database.models import Base
from stormforge.main import create_app


def _sqlite_url(tmp_path: Path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'stormforge_test.db'}"


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Test settings backed by a throwaway SQLite file."""
    return Settings(
        environment="test",
        database_url=_sqlite_url(tmp_path),
        db_create_all=True,
        log_level="DEBUG",
        log_format="text",
        cors_origins="*",
    )


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    """Application instance wired with test settings."""
    return create_app(settings)


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """Test client; entering it runs startup (engine + tables) and shutdown."""
    with TestClient(app) as test_client:
        yield test_client


@pytest_asyncio.fixture
async def db_session(tmp_path: Path) -> AsyncGenerator[AsyncSession, None]:
    """Session on a fresh SQLite database with the schema created."""
    engine = create_async_engine(_sqlite_url(tmp_path))
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(bind=engine, expire_on_commit=False, autoflush=False)
    async with factory() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def mock_user_repository() -> AsyncMock:
    """Repository double for exercising route error paths."""
    repo = AsyncMock()
    repo.get_by_email = AsyncMock(return_value=None)
    repo.get_by_id = AsyncMock(return_value=None)
    repo.list_all = AsyncMock(return_value=[])
    return repo
