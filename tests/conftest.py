"""
Test fixtures and configuration.

Database-backed tests run against a throwaway SQLite file through the
same Database class the service uses.

Usage:
    pytest
    pytest tests/unit
    pytest tests/integration
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from greffier.config.settings import Settings, override_settings, reset_settings
from greffier.di.container import DIContainer, set_container
from greffier.infrastructure.persistence.database import Database
from greffier.infrastructure.persistence.models import Base
from tests.helpers import InMemoryUserRepository
from tests.helpers.tokens import TEST_JWT_KEY


@pytest.fixture(autouse=True)
def settings(tmp_path) -> Settings:
    """Install test settings as the global singleton."""
    test_settings = Settings(
        ENV="test",
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path}/greffier.db",
        AUTH_JWT_KEY=TEST_JWT_KEY,
        AUTH_JWT_ALGORITHM="HS256",
        LOG_LEVEL="WARNING",
        METRICS_ENABLED=True,
    )
    override_settings(test_settings)
    yield test_settings
    reset_settings()


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    """Provide an empty in-memory user repository."""
    return InMemoryUserRepository()


# ================================================================
# Database fixtures
# ================================================================


@pytest_asyncio.fixture
async def test_db(settings: Settings) -> AsyncGenerator[Database, None]:
    """
    Create test database and tables.

    Each test gets a fresh SQLite file.
    """
    db = Database(database_url=settings.DATABASE_URL)
    await db.connect()
    await db.create_schema(Base.metadata)

    yield db

    await db.disconnect()


@pytest_asyncio.fixture
async def db_session(test_db: Database) -> AsyncGenerator[AsyncSession, None]:
    """Provide database session for tests."""
    async with test_db.session() as session:
        yield session


# ================================================================
# API fixtures
# ================================================================


@pytest_asyncio.fixture
async def client(
    settings: Settings, test_db: Database
) -> AsyncGenerator[AsyncClient, None]:
    """
    Provide HTTP client for API testing.

    The global container is pointed at the test database, so requests go
    through the real session dependency.
    """
    from greffier.main import create_app

    app = create_app(settings)
    set_container(DIContainer(database=test_db))

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    set_container(None)
