from fastapi import APIRouter, Request, Depends, status
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from coding_gurus.core.db import get_session
from coding_gurus.core.validation import ReplyPayload, reply_form
from coding_gurus.repositories.reply_repo import ReplyRepository
from coding_gurus.web.templating import templates

router = APIRouter(prefix="/threads/{thread_id}/replies")


def _back_to_thread(thread_id: str, reply_id: str | None = None) -> RedirectResponse:
    url = f"/threads/{thread_id}"
    if reply_id:
        url += f"#reply-{reply_id}"
    return RedirectResponse(url=url, status_code=status.HTTP_303_SEE_OTHER)


@router.post("")
async def reply_create(
    thread_id: str,
    payload: ReplyPayload = Depends(reply_form),
    session: AsyncSession = Depends(get_session),
):
    reply = await ReplyRepository(session).create(thread_id, payload.reply_content)
    return _back_to_thread(thread_id, reply.id)


@router.get("/{reply_id}/edit", response_class=HTMLResponse)
async def reply_edit(request: Request, thread_id: str, reply_id: str, session: AsyncSession = Depends(get_session)):
    thread, reply = await ReplyRepository(session).get_in_thread_or_404(thread_id, reply_id)
    return templates.TemplateResponse(
        request,
        "threads/edit_reply.html",
        {"title": "Edit reply", "thread": thread, "reply": reply},
    )


@router.put("/{reply_id}")
async def reply_update(
    thread_id: str,
    reply_id: str,
    payload: ReplyPayload = Depends(reply_form),
    session: AsyncSession = Depends(get_session),
):
    reply = await ReplyRepository(session).update(thread_id, reply_id, payload.reply_content)
    return _back_to_thread(thread_id, reply.id)


@router.delete("/{reply_id}")
async def reply_delete(thread_id: str, reply_id: str, session: AsyncSession = Depends(get_session)):
    await ReplyRepository(session).delete(thread_id, reply_id)
    return _back_to_thread(thread_id)
