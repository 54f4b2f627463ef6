"""
Database handle
Owns the async engine and session factory for one application instance
"""
import logging
from typing import AsyncIterator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


class Database:
    """Engine + session factory with an explicit open/close lifecycle"""

    def __init__(self, url: str, echo: bool = False, **engine_kwargs):
        self.url = url
        self.engine: AsyncEngine = create_async_engine(url, echo=echo, future=True, **engine_kwargs)
        self.sessionmaker = async_sessionmaker(self.engine, expire_on_commit=False)

    async def connect(self) -> None:
        """Create tables if they don't exist"""
        # Import models so they're registered
        import coding_gurus.core.models.thread  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database ready (%s)", self.engine.url.render_as_string(hide_password=True))

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("Database connections closed")


async def get_session(request: Request) -> AsyncIterator[AsyncSession]:
    """
    Dependency for FastAPI routes
    Provides a session bound to the application's database
    """
    database: Database = request.app.state.db
    async with database.sessionmaker() as session:
        yield session
