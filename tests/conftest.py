"""Pytest configuration and fixtures."""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from cryptography.fernet import Fernet
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from doi_registry.core.security import SecretCipher
from doi_registry.db.base import Base
from doi_registry.db import models_registry  # noqa: F401 - Import to register models
from doi_registry.models.group import Group
from doi_registry.schemas.doi_server import DoiServerDTO
from doi_registry.services.doi_server_service import DoiServerService

# Test database URL (in-memory SQLite)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        future=True,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async_session_maker = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )

    async with async_session_maker() as session:
        yield session


@pytest.fixture
def cipher() -> SecretCipher:
    """Cipher with a throwaway key."""
    return SecretCipher(Fernet.generate_key())


@pytest.fixture
def server_service(db_session: AsyncSession, cipher: SecretCipher) -> DoiServerService:
    """DOI server service backed by the test session."""
    return DoiServerService(db_session, cipher=cipher)


@pytest.fixture
def server_data() -> dict:
    """Valid DOI server payload."""
    return {
        "name": "datacite-test",
        "description": "DataCite test MDS",
        "apiUrl": "https://mds.test.datacite.org",
        "username": "DEMO.CATALOG",
        "password": "s3cret-pass",
        "landingPageTemplate": "https://catalog.example.org/records/{{uuid}}",
        "publicUrl": "https://doi.org/",
        "pattern": "{{uuid}}",
        "prefix": "10.5072",
    }


@pytest_asyncio.fixture(scope="function")
async def sample_groups(db_session: AsyncSession) -> list[Group]:
    """Create sample groups."""
    groups = [
        Group(name="editors"),
        Group(name="reviewers"),
    ]

    for group in groups:
        db_session.add(group)
    await db_session.commit()

    return groups


@pytest_asyncio.fixture(scope="function")
async def sample_server(
    server_service: DoiServerService,
    server_data: dict,
    sample_groups: list[Group],
) -> DoiServerDTO:
    """Create a DOI server that the editors group publishes through."""
    data = dict(server_data, publicationGroups=[sample_groups[0].id])
    return await server_service.create_server(data)
