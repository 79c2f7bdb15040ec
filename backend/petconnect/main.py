"""Module: main."""

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.middleware.sessions import SessionMiddleware
from starlette.status import HTTP_303_SEE_OTHER

from petconnect.api.deps import SignInRequired
from petconnect.api.v1.api import api_router
from petconnect.auth.session import AuthContext, AuthSessionProvider
from petconnect.core.config import Settings, settings
from petconnect.core.errors import PetConnectError
from petconnect.core.log import configure_logging
from petconnect.db.init_db import init_db
from petconnect.db.session import engine
from petconnect.services.identity import IdentityClient
from petconnect.services.storage import StorageClient
from petconnect.web.router import web_router
from petconnect.web.templating import render

logger = logging.getLogger(__name__)


def _log_auth_change(context: AuthContext) -> None:
    logger.info("Auth state -> %s", context.state.value)


def _wants_json(request: Request) -> bool:
    return request.url.path.startswith("/api/")


def create_app(
    app_settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    app_settings = app_settings or settings
    configure_logging(app_settings.log_level)

    # One client for the hosted backend, shared by identity and storage calls.
    http = httpx.AsyncClient(
        base_url=app_settings.supabase_url,
        headers={"apikey": app_settings.supabase_anon_key},
        timeout=app_settings.http_timeout,
        transport=transport,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app_settings.create_tables:
            init_db(engine)
        yield
        await http.aclose()

    app = FastAPI(title="PetConnect", version="0.1.0", lifespan=lifespan)

    app.state.settings = app_settings
    app.state.storage = StorageClient(http, app_settings.photo_bucket)
    app.state.auth = AuthSessionProvider(IdentityClient(http))
    app.state.auth.on_change(_log_auth_change)

    app.include_router(api_router, prefix="/api/v1")
    app.include_router(web_router)

    app.add_middleware(SessionMiddleware, secret_key=app_settings.session_secret, same_site="lax")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(SignInRequired)
    async def handle_sign_in_required(request: Request, exc: SignInRequired):
        if _wants_json(request):
            return JSONResponse({"detail": "Sign in required"}, status_code=401)
        return RedirectResponse("/auth", status_code=HTTP_303_SEE_OTHER)

    @app.exception_handler(PetConnectError)
    async def handle_petconnect_error(request: Request, exc: PetConnectError):
        if _wants_json(request):
            return JSONResponse({"detail": exc.message}, status_code=exc.status_code)
        return render(request, "error.html", status_code=exc.status_code, message=exc.message)

    logger.info("PetConnect app created (backend %s)", app_settings.supabase_url)
    return app


app = create_app()
