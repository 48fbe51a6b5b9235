"""Shared fixtures: in-memory database and generator collaborators."""

import random
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from commerce_generate.catalog.fields import FieldDefinitionProvider
from commerce_generate.catalog.generator import CommerceGenerator
from commerce_generate.catalog.languages import LanguageManager
from commerce_generate.catalog.repository import ProductRepository, VariationRepository
from commerce_generate.catalog.samples import SampleValueGenerator
from commerce_generate.infrastructure.database import create_tables


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create an in-memory database with the catalog tables."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Open a session on the in-memory database."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest.fixture
def languages() -> LanguageManager:
    """Language manager with English as default."""
    return LanguageManager({"en": "English", "fr": "French", "de": "German"}, "en")


@pytest.fixture
def field_provider() -> FieldDefinitionProvider:
    """Field provider with the default schema and seeded samples."""
    return FieldDefinitionProvider(samples=SampleValueGenerator(seed=7))


@pytest.fixture
def generator(
    session: AsyncSession,
    field_provider: FieldDefinitionProvider,
    languages: LanguageManager,
) -> CommerceGenerator:
    """Generator backed by the in-memory database."""
    return CommerceGenerator(
        ProductRepository(session),
        VariationRepository(session),
        field_provider,
        languages,
        rng=random.Random(1234),
    )
