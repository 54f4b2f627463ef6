"""
Reply Repository
Database operations for Reply model. Replies are always reached through
the thread whose reply list references them.
"""
import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from coding_gurus.core.errors import NotFoundError
from coding_gurus.core.models.thread import Reply, Thread, ThreadReply, utcnow
from coding_gurus.repositories.thread_repo import ThreadRepository

logger = logging.getLogger(__name__)


class ReplyRepository:
    """Handles Reply database operations"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.threads = ThreadRepository(session)

    async def get(self, reply_id: str) -> Optional[Reply]:
        """Get reply by ID"""
        return await self.session.get(Reply, reply_id)

    async def get_in_thread_or_404(self, thread_id: str, reply_id: str) -> tuple[Thread, Reply]:
        thread = await self.threads.get_or_404(thread_id)
        link = self._find_link(thread, reply_id)
        return thread, link.reply

    async def create(self, thread_id: str, content: str) -> Reply:
        """Attach a new reply to the end of the thread and bump its activity"""
        thread = await self.threads.get_or_404(thread_id)
        now = utcnow()
        reply = Reply(content=content, created_at=now, last_edited_at=now)
        self.session.add(reply)
        thread.replies.append(reply)
        thread.last_activity_at = now
        await self.session.commit()
        logger.info("Added reply %s to thread %s", reply.id, thread.id)
        return reply

    async def update(self, thread_id: str, reply_id: str, content: str) -> Reply:
        """Edit reply content in place; its position in the thread is kept"""
        _, reply = await self.get_in_thread_or_404(thread_id, reply_id)
        reply.content = content
        reply.last_edited_at = utcnow()
        await self.session.commit()
        logger.info("Updated reply %s in thread %s", reply.id, thread_id)
        return reply

    async def delete(self, thread_id: str, reply_id: str) -> None:
        """Unlink reply from its thread and delete the record"""
        thread = await self.threads.get_or_404(thread_id)
        link = self._find_link(thread, reply_id)
        reply = link.reply
        thread.reply_links.remove(link)
        await self.session.delete(reply)
        await self.session.commit()
        logger.info("Deleted reply %s from thread %s", reply_id, thread_id)

    @staticmethod
    def _find_link(thread: Thread, reply_id: str) -> ThreadReply:
        for link in thread.reply_links:
            if link.reply_id == reply_id:
                return link
        raise NotFoundError("Reply not found")
