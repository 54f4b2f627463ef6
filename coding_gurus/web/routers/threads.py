from fastapi import APIRouter, Request, Depends, status
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from coding_gurus.core.db import get_session
from coding_gurus.core.models.thread import Thread
from coding_gurus.core.validation import ThreadPayload, thread_form
from coding_gurus.repositories.thread_repo import ThreadRepository
from coding_gurus.web.templating import templates, render_markdown, excerpt

router = APIRouter()


def _redirect(url: str) -> RedirectResponse:
    # 303 so the browser follows up with a GET after PUT/DELETE/POST
    return RedirectResponse(url=url, status_code=status.HTTP_303_SEE_OTHER)


def _thread_context(thread: Thread) -> dict:
    return {
        "title": thread.title,
        "thread": thread,
        "thread_html": render_markdown(thread.content),
        "replies": [
            {
                "id": r.id,
                "content": r.content,
                "created_at": r.created_at,
                "last_edited_at": r.last_edited_at,
                "body_html": render_markdown(r.content),
            }
            for r in thread.replies
        ],
    }


@router.get("/threads", response_class=HTMLResponse)
async def thread_index(request: Request, session: AsyncSession = Depends(get_session)):
    rows = await ThreadRepository(session).list_recent()
    threads = [
        {
            "id": t.id,
            "title": t.title,
            "excerpt": excerpt(t.content),
            "created_at": t.created_at,
            "last_activity_at": t.last_activity_at,
            "replies_count": replies_count,
        }
        for t, replies_count in rows
    ]
    return templates.TemplateResponse(request, "threads/index.html", {"title": "All Threads", "threads": threads})


@router.get("/threads/new", response_class=HTMLResponse)
async def thread_new(request: Request):
    return templates.TemplateResponse(request, "threads/new.html", {"title": "New Thread"})


@router.post("/threads")
async def thread_create(payload: ThreadPayload = Depends(thread_form), session: AsyncSession = Depends(get_session)):
    thread = await ThreadRepository(session).create(payload.title, payload.content)
    return _redirect(f"/threads/{thread.id}")


@router.get("/threads/{thread_id}", response_class=HTMLResponse)
async def thread_show(request: Request, thread_id: str, session: AsyncSession = Depends(get_session)):
    thread = await ThreadRepository(session).get_or_404(thread_id)
    return templates.TemplateResponse(request, "threads/show.html", _thread_context(thread))


@router.get("/threads/{thread_id}/edit", response_class=HTMLResponse)
async def thread_edit(request: Request, thread_id: str, session: AsyncSession = Depends(get_session)):
    thread = await ThreadRepository(session).get_or_404(thread_id)
    return templates.TemplateResponse(request, "threads/edit.html", {"title": f"Edit: {thread.title}", "thread": thread})


@router.put("/threads/{thread_id}")
async def thread_update(
    thread_id: str,
    payload: ThreadPayload = Depends(thread_form),
    session: AsyncSession = Depends(get_session),
):
    thread = await ThreadRepository(session).update(thread_id, payload.title, payload.content)
    return _redirect(f"/threads/{thread.id}")


@router.delete("/threads/{thread_id}")
async def thread_delete(thread_id: str, session: AsyncSession = Depends(get_session)):
    await ThreadRepository(session).delete(thread_id)
    return _redirect("/threads")
