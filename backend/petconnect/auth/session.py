"""Module: session.

Auth session provider.

``AuthSessionProvider`` is created once at application startup and shared by
every request. For each request it produces an ``AuthContext``: a small state
machine that starts in ``loading`` and settles on ``unauthenticated`` or
``authenticated`` once the identity service has answered. Views receive the
context explicitly (templates see it as ``auth``) instead of reading global
state. Listeners registered with ``on_change`` are told about every
transition.

The access token is kept in the signed session cookie. Concurrent sign-ins are
not coordinated; the last one to finish owns the cookie.
"""

from __future__ import annotations

import enum
import logging
import uuid
from dataclasses import dataclass
from typing import Callable, Iterable

from sqlalchemy.orm import Session
from starlette.requests import Request

from petconnect.core.errors import BackendError
from petconnect.forms.auth import SignInForm, SignUpForm
from petconnect.services import pets
from petconnect.services.identity import IdentityClient, IdentitySession, IdentityUser

logger = logging.getLogger(__name__)

SESSION_TOKEN_KEY = "access_token"


class AuthState(str, enum.Enum):
    LOADING = "loading"
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"


@dataclass(frozen=True)
class AuthSession:
    user_id: uuid.UUID
    email: str
    access_token: str
    full_name: str | None = None

    @property
    def display_name(self) -> str:
        return self.full_name or self.email


Listener = Callable[["AuthContext"], None]


class AuthContext:
    def __init__(self, listeners: Iterable[Listener] = ()):
        self.state = AuthState.LOADING
        self.session: AuthSession | None = None
        self._listeners: list[Listener] = list(listeners)

    def __repr__(self) -> str:
        return f"<AuthContext {self.state.value}>"

    @property
    def is_loading(self) -> bool:
        return self.state is AuthState.LOADING

    @property
    def is_authenticated(self) -> bool:
        return self.state is AuthState.AUTHENTICATED

    def on_change(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def set_authenticated(self, session: AuthSession) -> None:
        self._transition(AuthState.AUTHENTICATED, session)

    def set_unauthenticated(self) -> None:
        self._transition(AuthState.UNAUTHENTICATED, None)

    def _transition(self, state: AuthState, session: AuthSession | None) -> None:
        if state is self.state and session == self.session:
            return
        self.state = state
        self.session = session
        for listener in self._listeners:
            listener(self)


class AuthSessionProvider:
    def __init__(self, identity: IdentityClient):
        self.identity = identity
        self._listeners: list[Listener] = []

    def on_change(self, listener: Listener) -> None:
        """Register a listener attached to every context this provider creates."""
        self._listeners.append(listener)

    def new_context(self) -> AuthContext:
        return AuthContext(self._listeners)

    async def resolve(self, request: Request) -> AuthContext:
        context = self.new_context()
        token = request.session.get(SESSION_TOKEN_KEY)
        if not token:
            context.set_unauthenticated()
            return context

        try:
            user = await self.identity.get_user(token)
        except BackendError:
            # Identity service unreachable: signed out for this request only.
            logger.warning("Could not verify session; keeping token for the next request")
            context.set_unauthenticated()
            return context

        if user is None:
            request.session.pop(SESSION_TOKEN_KEY, None)
            context.set_unauthenticated()
            return context

        context.set_authenticated(_auth_session(user, token))
        return context

    async def sign_up(self, request: Request, db: Session, form: SignUpForm) -> AuthContext:
        user, identity_session = await self.identity.sign_up(
            form.email, form.password, form.full_name, form.phone
        )
        pets.upsert_profile(db, user.id, form.email, form.full_name, form.phone)
        logger.info("Owner %s signed up", user.id)

        context = self.new_context()
        if identity_session is None:
            # Email confirmation pending: account exists but there is no session yet.
            context.set_unauthenticated()
        else:
            self._start(request, context, identity_session)
        return context

    async def sign_in(self, request: Request, db: Session, form: SignInForm) -> AuthContext:
        identity_session = await self.identity.sign_in(form.email, form.password)
        user = identity_session.user
        if pets.get_profile(db, user.id) is None:
            pets.upsert_profile(db, user.id, user.email, user.full_name or user.email, user.phone)

        context = self.new_context()
        self._start(request, context, identity_session)
        return context

    async def sign_out(self, request: Request, context: AuthContext) -> None:
        token = request.session.pop(SESSION_TOKEN_KEY, None)
        if token:
            try:
                await self.identity.sign_out(token)
            except BackendError:
                logger.warning("Identity sign-out failed; local session cleared anyway")
        context.set_unauthenticated()

    def _start(self, request: Request, context: AuthContext, identity_session: IdentitySession) -> None:
        request.session[SESSION_TOKEN_KEY] = identity_session.access_token
        context.set_authenticated(_auth_session(identity_session.user, identity_session.access_token))


def _auth_session(user: IdentityUser, token: str) -> AuthSession:
    return AuthSession(user_id=user.id, email=user.email, access_token=token, full_name=user.full_name)
