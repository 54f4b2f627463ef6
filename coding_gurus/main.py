import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from coding_gurus.core.config import Settings, settings as default_settings
from coding_gurus.core.db import Database
from coding_gurus.core.errors import AppError, DEFAULT_MESSAGE, UnexpectedError
from coding_gurus.core.logging_config import init_logging
from coding_gurus.middleware.method_override import MethodOverrideMiddleware
from coding_gurus.web.routers.home import router as home_router
from coding_gurus.web.routers.threads import router as threads_router
from coding_gurus.web.routers.replies import router as replies_router
from coding_gurus.web.templating import templates

BASE_DIR = Path(__file__).resolve().parent

logger = logging.getLogger(__name__)

DEFAULT_MESSAGES = {
    400: "Bad Request",
    404: "Page not found!",
    405: "Method Not Allowed",
    413: "Payload Too Large",
    415: "Unsupported Media Type",
}


def _render_error(request: Request, code: int, message: str, debug: bool = False):
    ctx = {
        "title": f"{code} Error",
        "code": code,
        "message": message,
        "debug": debug,
    }
    return templates.TemplateResponse(request, "error.html", ctx, status_code=code)


def register_exception_handlers(app: FastAPI, *, debug: bool = False) -> None:
    """Funnel every error raised while handling a request into error.html."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        else:
            logger.warning("%s %s -> %d: %s", request.method, request.url.path, exc.status_code, exc.message)
        return _render_error(request, exc.status_code, exc.message, debug=debug)

    @app.exception_handler(StarletteHTTPException)
    async def starlette_http_exception_handler(request: Request, exc: StarletteHTTPException):
        # Starlette-level errors, including 404 for unmatched routes
        code = exc.status_code
        if code == 404:
            message = DEFAULT_MESSAGES[404]
        else:
            message = getattr(exc, "detail", None) or DEFAULT_MESSAGES.get(code) or DEFAULT_MESSAGE
        logger.warning("%s %s -> %d", request.method, request.url.path, code)
        return _render_error(request, code, message, debug=debug)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        message = ", ".join(
            f'"{".".join(str(part) for part in err["loc"])}" {err["msg"]}' for err in exc.errors()
        ) or DEFAULT_MESSAGES[400]
        logger.warning("%s %s -> 400: %s", request.method, request.url.path, message)
        return _render_error(request, 400, message, debug=debug)

    # Only install a global 500 handler when NOT in debug mode.
    if not debug:
        @app.exception_handler(Exception)
        async def unhandled_exception_handler(request: Request, exc: Exception):
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            error = UnexpectedError()
            return _render_error(request, error.status_code, error.message)


def create_app(settings: Settings = default_settings, database: Optional[Database] = None) -> FastAPI:
    init_logging(settings.APP_NAME, level=settings.LOG_LEVEL)

    db = database or Database(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await db.connect()
        try:
            yield
        finally:
            await db.dispose()

    app = FastAPI(title=settings.APP_NAME, debug=settings.DEBUG, lifespan=lifespan)
    app.state.db = db

    # Forms submit PUT/DELETE as POST ?_method=...
    app.add_middleware(MethodOverrideMiddleware)

    # Static files
    static_dir = BASE_DIR / "web" / "static"
    app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")

    # Routers
    app.include_router(home_router)
    app.include_router(threads_router)
    app.include_router(replies_router)

    @app.get("/healthz")
    async def healthz():
        return {"status": "ok"}

    register_exception_handlers(app, debug=settings.DEBUG)
    return app


app = create_app()


def run():
    import uvicorn

    uvicorn.run("coding_gurus.main:app", host=default_settings.HOST, port=default_settings.PORT)
