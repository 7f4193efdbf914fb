"""FastAPI app factory for the admin console."""

import time
import uuid
from collections.abc import Callable
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware

from botadmin import __version__
from botadmin.admin.resources import build_resources, record_ref
from botadmin.admin.routes import render, router as admin_router
from botadmin.admin.session import SessionGate
from botadmin.config import (
    DATA_DIR,
    PRODUCTS_DIR,
    SESSION_COOKIE,
    SESSION_HTTPS_ONLY,
    SESSION_MAX_AGE_SECONDS,
    TEMPLATES_DIR,
    check_config,
)
from botadmin.errors import LoginRequired
from botadmin.store import FlatFileStore
from botadmin.utils.logger import bind_context, clear_context, get_logger

logger = get_logger("botadmin.admin.server")


@asynccontextmanager
async def _lifespan(app: FastAPI):
    store: FlatFileStore = app.state.store
    logger.info(
        "server.startup",
        data_dir=str(store.data_dir),
        products_dir=str(store.products_dir),
        products=len(store.list_names()),
    )
    yield
    logger.info("server.shutdown")


def create_app(
    data_dir: str | Path | None = None,
    products_dir: str | Path | None = None,
    admin_pass: str | None = None,
    session_secret: str | None = None,
    app_env: str | None = None,
    session_max_age: int = SESSION_MAX_AGE_SECONDS,
    clock: Callable[[], float] = time.time,
) -> FastAPI:
    """
    Create the admin console app. Arguments left as None come from botadmin.config.
    Raises ConfigError in production when ADMIN_PASS or SESSION_SECRET is unset.
    The data directories are created here; failure to create them is fatal.
    """
    password, secret = check_config(admin_pass=admin_pass, session_secret=session_secret, app_env=app_env)

    if data_dir is not None and products_dir is None:
        products_dir = Path(data_dir) / "produk"
    store = FlatFileStore(
        data_dir=data_dir if data_dir is not None else DATA_DIR,
        products_dir=products_dir if products_dir is not None else PRODUCTS_DIR,
    )
    store.ensure_dirs()

    app = FastAPI(
        title="Bot Admin Console",
        version=__version__,
        lifespan=_lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.store = store
    app.state.resources = build_resources(store)
    app.state.gate = SessionGate(admin_pass=password, max_age_seconds=session_max_age, clock=clock)
    app.state.templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
    app.state.templates.env.globals["record_ref"] = record_ref

    app.add_middleware(
        SessionMiddleware,
        secret_key=secret,
        session_cookie=SESSION_COOKIE,
        max_age=session_max_age,
        same_site="lax",
        https_only=SESSION_HTTPS_ONLY,
    )

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        clear_context()
        bind_context(request_id=uuid.uuid4().hex[:12], path=request.url.path, method=request.method)
        try:
            return await call_next(request)
        finally:
            clear_context()

    @app.exception_handler(LoginRequired)
    async def login_required_handler(request: Request, exc: LoginRequired):
        logger.debug("auth.redirect_login", reason=exc.reason)
        return RedirectResponse("/login", status_code=302)

    @app.exception_handler(StarletteHTTPException)
    async def not_found_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return render(request, "404.html", status_code=404, path=request.url.path)
        return await http_exception_handler(request, exc)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(admin_router)

    return app
