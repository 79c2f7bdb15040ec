"""Module: deps."""

from typing import Generator

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from petconnect.auth.session import AuthContext, AuthSession, AuthSessionProvider
from petconnect.core.config import Settings
from petconnect.db.session import SessionLocal
from petconnect.services.storage import StorageClient


class SignInRequired(Exception):
    """Raised by owner-only routes when no session is present."""


# Dependency provider: one DB session per request lifecycle.
def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_storage(request: Request) -> StorageClient:
    return request.app.state.storage


def get_auth_provider(request: Request) -> AuthSessionProvider:
    return request.app.state.auth


async def get_auth(
    request: Request,
    provider: AuthSessionProvider = Depends(get_auth_provider),
) -> AuthContext:
    return await provider.resolve(request)


def require_session(auth: AuthContext = Depends(get_auth)) -> AuthSession:
    if not auth.is_authenticated:
        raise SignInRequired()
    return auth.session


def get_base_url(request: Request, settings: Settings = Depends(get_settings)) -> str:
    # Origin embedded in QR codes; configure it when running behind a proxy.
    return (settings.public_base_url or str(request.base_url)).rstrip("/")
