"""Wipe threads and replies and insert sample threads.

    python -m coding_gurus.seed
"""
import asyncio
import logging

from sqlalchemy import delete

from coding_gurus.core.config import settings
from coding_gurus.core.db import Database
from coding_gurus.core.logging_config import init_logging
from coding_gurus.core.models.thread import Reply, Thread, ThreadReply, utcnow

logger = logging.getLogger(__name__)

SAMPLE_TITLE = "Thread title blha abdf"
SAMPLE_CONTENT = (
    "Lorem ipsum dolor sit amet, consectetur adipiscing elit, sed do eiusmod tempor "
    "incididunt ut labore et dolore magna aliqua. Ut enim ad minim veniam, quis nostrud "
    "exercitation ullamco laboris nisi ut aliquip ex ea commodo consequat. Duis aute irure "
    "dolor in reprehenderit in voluptate velit esse cillum dolore eu fugiat nulla pariatur. "
    "Excepteur sint occaecat cupidatat non proident, sunt in culpa qui officia deserunt "
    "mollit anim id est laborum."
)


async def seed(database: Database, count: int) -> None:
    async with database.sessionmaker() as session:
        await session.execute(delete(ThreadReply))
        await session.execute(delete(Reply))
        await session.execute(delete(Thread))
        for _ in range(count):
            now = utcnow()
            session.add(Thread(
                title=SAMPLE_TITLE,
                content=SAMPLE_CONTENT,
                created_at=now,
                last_edited_at=now,
                last_activity_at=now,
            ))
        await session.commit()
    logger.info("Seeded %d threads", count)


async def _run() -> None:
    database = Database(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
    try:
        await database.connect()
        await seed(database, settings.SEED_THREAD_COUNT)
    finally:
        await database.dispose()


def main() -> None:
    init_logging(f"{settings.APP_NAME} seed", level=settings.LOG_LEVEL)
    asyncio.run(_run())


if __name__ == "__main__":
    main()
