from datetime import datetime, timezone
from html import unescape

from httpx import AsyncClient, Response
from sqlalchemy import func, select

from coding_gurus.core.db import Database
from coding_gurus.core.models.thread import Reply, Thread
from coding_gurus.repositories.thread_repo import ThreadRepository


def as_utc(value: datetime) -> datetime:
    """SQLite hands timestamps back naive; they are stored as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def page_text(response: Response) -> str:
    return unescape(response.text)


def id_from_location(response: Response) -> str:
    location = response.headers["location"].split("#", 1)[0]
    return location.rstrip("/").rsplit("/", 1)[-1]


async def post_thread(client: AsyncClient, title: str = "Hello", content: str = "World") -> str:
    response = await client.post("/threads", data={"thread[title]": title, "thread[content]": content})
    assert response.status_code == 303
    return id_from_location(response)


async def post_reply(client: AsyncClient, thread_id: str, content: str = "Hi") -> str:
    response = await client.post(f"/threads/{thread_id}/replies", data={"reply[replyContent]": content})
    assert response.status_code == 303
    return response.headers["location"].split("#reply-", 1)[1]


async def load_thread(db: Database, thread_id: str):
    async with db.sessionmaker() as session:
        return await ThreadRepository(session).get(thread_id)


async def load_reply(db: Database, reply_id: str):
    async with db.sessionmaker() as session:
        return await session.get(Reply, reply_id)


async def count_threads(db: Database) -> int:
    async with db.sessionmaker() as session:
        return (await session.execute(select(func.count()).select_from(Thread))).scalar_one()
