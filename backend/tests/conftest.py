"""Shared fixtures: in-memory SQLite store and a fake hosted backend.

``FakeHostedBackend`` answers the identity (``/auth/v1``) and storage
(``/storage/v1``) endpoints through ``httpx.MockTransport`` and records every
request it sees.
"""

from __future__ import annotations

import os

# Settings() is instantiated at import time; give it something to load.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SUPABASE_URL", "https://backend.test")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("CREATE_TABLES", "false")

import json
import secrets
import uuid

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from petconnect.api.deps import get_db
from petconnect.core.config import Settings
from petconnect.db.init_db import init_db
from petconnect.db.models.profile import Profile
from petconnect.main import create_app

BACKEND_URL = "https://backend.test"
PUBLIC_BASE_URL = "https://petconnect.test"


class FakeHostedBackend:
    def __init__(self, auto_confirm: bool = True):
        self.auto_confirm = auto_confirm
        self.users: dict[str, dict] = {}
        self.tokens: dict[str, str] = {}
        self.objects: dict[str, bytes] = {}
        self.requests: list[httpx.Request] = []
        self.upload_error: str | None = None
        # Number of upcoming /auth/v1/user calls that fail at the transport level.
        self.user_outages = 0

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def user_id(self, email: str) -> uuid.UUID:
        return uuid.UUID(self.users[email]["id"])

    def _public_user(self, user: dict) -> dict:
        return {"id": user["id"], "email": user["email"], "user_metadata": user["user_metadata"]}

    def _session(self, user: dict) -> dict:
        token = secrets.token_urlsafe(16)
        self.tokens[token] = user["email"]
        return {
            "access_token": token,
            "token_type": "bearer",
            "refresh_token": secrets.token_urlsafe(8),
            "user": self._public_user(user),
        }

    def _bearer_user(self, request: httpx.Request) -> dict | None:
        header = request.headers.get("Authorization", "")
        email = self.tokens.get(header.removeprefix("Bearer "))
        return self.users.get(email) if email else None

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path == "/auth/v1/signup":
            body = json.loads(request.content)
            if body["email"] in self.users:
                return httpx.Response(422, json={"msg": "User already registered"})
            user = {
                "id": str(uuid.uuid4()),
                "email": body["email"],
                "password": body["password"],
                "user_metadata": body.get("data") or {},
            }
            self.users[user["email"]] = user
            if self.auto_confirm:
                return httpx.Response(200, json=self._session(user))
            return httpx.Response(200, json=self._public_user(user))

        if path == "/auth/v1/token":
            body = json.loads(request.content)
            user = self.users.get(body["email"])
            if user is None or user["password"] != body["password"]:
                return httpx.Response(
                    400,
                    json={"error": "invalid_grant", "error_description": "Invalid login credentials"},
                )
            return httpx.Response(200, json=self._session(user))

        if path == "/auth/v1/logout":
            self.tokens.pop(request.headers.get("Authorization", "").removeprefix("Bearer "), None)
            return httpx.Response(204)

        if path == "/auth/v1/user":
            if self.user_outages:
                self.user_outages -= 1
                raise httpx.ConnectError("connection refused", request=request)
            user = self._bearer_user(request)
            if user is None:
                return httpx.Response(401, json={"msg": "invalid JWT"})
            return httpx.Response(200, json=self._public_user(user))

        if path.startswith("/storage/v1/object/"):
            if self._bearer_user(request) is None:
                return httpx.Response(403, json={"message": "new row violates row-level security policy"})
            if self.upload_error:
                return httpx.Response(400, json={"message": self.upload_error})
            key = path.removeprefix("/storage/v1/object/")
            self.objects[key] = request.content
            return httpx.Response(200, json={"Key": key})

        return httpx.Response(404, json={"message": "not found"})


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def owner(db) -> Profile:
    profile = Profile(id=uuid.uuid4(), email="sam@example.com", full_name="Sam Owner", phone="0400000000")
    db.add(profile)
    db.commit()
    return profile


@pytest.fixture
def backend() -> FakeHostedBackend:
    return FakeHostedBackend()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        database_url="sqlite://",
        supabase_url=BACKEND_URL,
        supabase_anon_key="test-anon-key",
        session_secret="test-secret",
        public_base_url=PUBLIC_BASE_URL,
        create_tables=False,
    )


@pytest.fixture
def app(settings, backend, session_factory):
    app = create_app(settings, transport=backend.transport)

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client


def sign_up(client: TestClient, email: str = "alex@example.com", password: str = "secret123", **overrides):
    data = {
        "full_name": "Alex Owner",
        "email": email,
        "phone": "0412345678",
        "password": password,
        "confirm_password": password,
        **overrides,
    }
    return client.post("/auth/sign-up", data=data, follow_redirects=False)


@pytest.fixture
def signed_in(client, backend) -> uuid.UUID:
    """Sign up (and so sign in) a fresh owner; returns the owner id."""
    response = sign_up(client)
    assert response.status_code == 303
    return backend.user_id("alex@example.com")
