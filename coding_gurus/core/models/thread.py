from __future__ import annotations

from datetime import datetime, timezone
from typing import List
from uuid import uuid4

from sqlalchemy import String, Text, DateTime, Integer, ForeignKey
from sqlalchemy.ext.associationproxy import AssociationProxy, association_proxy
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import Mapped, mapped_column, relationship

from coding_gurus.core.db import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return uuid4().hex


class Reply(Base):
    __tablename__ = "replies"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    content: Mapped[str] = mapped_column(Text())
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    last_edited_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    def __repr__(self):
        return f"<Reply(id={self.id})>"


class ThreadReply(Base):
    """Entry in a thread's ordered list of reply references"""

    __tablename__ = "thread_replies"

    thread_id: Mapped[str] = mapped_column(ForeignKey("threads.id", ondelete="CASCADE"), primary_key=True)
    reply_id: Mapped[str] = mapped_column(ForeignKey("replies.id", ondelete="CASCADE"), primary_key=True, index=True)
    position: Mapped[int] = mapped_column(Integer, default=0)

    # relationships
    thread: Mapped["Thread"] = relationship(back_populates="reply_links")
    reply: Mapped["Reply"] = relationship()


class Thread(Base):
    __tablename__ = "threads"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    title: Mapped[str] = mapped_column(String(200), index=True)
    content: Mapped[str] = mapped_column(Text())
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    last_edited_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    # bumped whenever a reply is added; equals created_at until then
    last_activity_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, index=True)

    # relationships
    reply_links: Mapped[List["ThreadReply"]] = relationship(
        back_populates="thread",
        order_by="ThreadReply.position",
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan",
    )
    replies: AssociationProxy[List["Reply"]] = association_proxy(
        "reply_links", "reply", creator=lambda reply: ThreadReply(reply=reply)
    )

    def __repr__(self):
        return f"<Thread(id={self.id}, title={self.title!r})>"
