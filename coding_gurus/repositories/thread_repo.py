"""
Thread Repository
Database operations for Thread model
"""
import logging
from typing import List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from coding_gurus.core.errors import NotFoundError
from coding_gurus.core.models.thread import Thread, ThreadReply, utcnow

logger = logging.getLogger(__name__)


class ThreadRepository:
    """Handles Thread database operations"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_recent(self) -> List[Tuple[Thread, int]]:
        """All threads with their reply counts, most recently active first"""
        stmt = (
            select(Thread, func.count(ThreadReply.reply_id).label("replies_count"))
            .join(ThreadReply, ThreadReply.thread_id == Thread.id, isouter=True)
            .group_by(Thread.id)
            .order_by(Thread.last_activity_at.desc(), Thread.id)
        )
        result = await self.session.execute(stmt)
        return [(row.Thread, int(row.replies_count or 0)) for row in result.all()]

    async def get(self, thread_id: str) -> Optional[Thread]:
        """Get thread by ID with its replies resolved"""
        stmt = (
            select(Thread)
            .options(selectinload(Thread.reply_links).selectinload(ThreadReply.reply))
            .where(Thread.id == thread_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_or_404(self, thread_id: str) -> Thread:
        thread = await self.get(thread_id)
        if thread is None:
            raise NotFoundError("Thread not found")
        return thread

    async def create(self, title: str, content: str) -> Thread:
        """Create a new thread; all three timestamps start out equal"""
        now = utcnow()
        thread = Thread(
            title=title,
            content=content,
            created_at=now,
            last_edited_at=now,
            last_activity_at=now,
            reply_links=[],
        )
        self.session.add(thread)
        await self.session.commit()
        logger.info("Created thread %s", thread.id)
        return thread

    async def update(self, thread_id: str, title: str, content: str) -> Thread:
        thread = await self.get_or_404(thread_id)
        thread.title = title
        thread.content = content
        thread.last_edited_at = utcnow()
        await self.session.commit()
        logger.info("Updated thread %s", thread.id)
        return thread

    async def delete(self, thread_id: str) -> List[str]:
        """
        Delete thread and every reply it references in one transaction.
        Returns the IDs of the deleted replies.
        """
        thread = await self.get_or_404(thread_id)
        replies = list(thread.replies)
        reply_ids = [reply.id for reply in replies]
        for reply in replies:
            await self.session.delete(reply)
        await self.session.delete(thread)
        await self.session.commit()
        logger.info("Deleted thread %s and %d replies", thread_id, len(reply_ids))
        return reply_ids
