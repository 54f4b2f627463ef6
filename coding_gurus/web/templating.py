from datetime import datetime
from pathlib import Path

from fastapi.templating import Jinja2Templates
from markdown_it import MarkdownIt
import bleach

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

# Markdown rendering and sanitization
_md = MarkdownIt()
_ALLOWED_TAGS = [
    "p", "br", "hr", "pre", "code", "blockquote",
    "ul", "ol", "li",
    "h1", "h2", "h3", "h4", "h5", "h6",
    "em", "strong", "del", "a"
]
_ALLOWED_ATTRS = {"a": ["href", "title", "target", "rel"]}

EXCERPT_LENGTH = 160


def render_markdown(text: str) -> str:
    html = _md.render(text or "")
    return bleach.clean(html, tags=_ALLOWED_TAGS, attributes=_ALLOWED_ATTRS, strip=True)


def excerpt(text: str) -> str:
    text = text or ""
    return text[:EXCERPT_LENGTH] + ("…" if len(text) > EXCERPT_LENGTH else "")


def format_timestamp(value: datetime) -> str:
    if not value:
        return ""
    return value.strftime("%b %d, %Y %H:%M")


templates.env.filters["timestamp"] = format_timestamp
