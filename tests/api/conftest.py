"""Shared fixtures for API tests."""

import asyncio
from collections.abc import AsyncGenerator, Generator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from commerce_generate.infrastructure.config import settings
from commerce_generate.infrastructure.database import create_tables, get_session
from commerce_generate.main import app


@pytest.fixture
def db_engine(tmp_path: Path) -> Generator[AsyncEngine, None, None]:
    """File-backed database; NullPool keeps connections on the client's loop."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'generate.db'}",
        poolclass=NullPool,
    )
    asyncio.run(create_tables(engine))
    yield engine
    asyncio.run(engine.dispose())


@pytest.fixture(autouse=True)
def override_session(db_engine: AsyncEngine) -> Generator[None, None, None]:
    """Route request sessions to the test database."""
    factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)

    async def test_session() -> AsyncGenerator[AsyncSession, None]:
        async with factory() as session:
            yield session
            await session.commit()

    app.dependency_overrides[get_session] = test_session
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client() -> TestClient:
    """Create test client without authentication."""
    return TestClient(app)


@pytest.fixture
def auth_client() -> TestClient:
    """Create test client with valid API key authentication."""
    return TestClient(
        app,
        headers={"Authorization": f"Bearer {settings.generate_api_key}"},
    )
