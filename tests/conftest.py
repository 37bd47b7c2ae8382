"""Shared test fixtures."""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine

from tcgweekly.config import Settings
from tcgweekly.db.engine import create_engine, create_tables, get_session
from tcgweekly.db.repository import Repository
from tcgweekly.main import create_app

TEST_PASSWORD = "test-submission-password"


@pytest.fixture
def settings() -> Settings:
    """Test settings with defaults."""
    return Settings(
        tcgweekly_env="development",
        database_url="sqlite+aiosqlite:///:memory:",
        submission_password=TEST_PASSWORD,
    )


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create an in-memory SQLite engine with all tables."""
    eng = create_engine("sqlite+aiosqlite:///:memory:")
    await create_tables(eng)
    yield eng
    await eng.dispose()


@pytest.fixture
async def repo(engine: AsyncEngine) -> AsyncGenerator[Repository, None]:
    """Yield a repository with a session bound to the in-memory database."""
    async with get_session(engine) as session:
        yield Repository(session)


@pytest.fixture
async def client(
    settings: Settings, engine: AsyncEngine
) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client for an app wired to the shared in-memory engine."""
    app = create_app(settings)
    # Lifespan does not run under ASGITransport; install the engine by hand.
    app.state.engine = engine
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
