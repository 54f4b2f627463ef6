from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from coding_gurus.web.templating import templates

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def landing(request: Request):
    return templates.TemplateResponse(request, "home.html", {"title": "Coding Gurus"})
