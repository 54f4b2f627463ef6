import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool

from coding_gurus.core.config import Settings
from coding_gurus.core.db import Database
from coding_gurus.main import create_app

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def db():
    database = Database(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await database.connect()
    try:
        yield database
    finally:
        await database.dispose()


@pytest.fixture
async def session(db):
    async with db.sessionmaker() as session:
        yield session


@pytest.fixture
def test_settings():
    return Settings(DATABASE_URL=TEST_DATABASE_URL, DEBUG=False, LOG_LEVEL="WARNING")


@pytest.fixture
def test_app(test_settings, db):
    return create_app(test_settings, database=db)


@pytest.fixture
async def test_client(test_app):
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        yield client
