"""Module: identity.

Client for the hosted identity service (Supabase GoTrue-compatible REST API).
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Any

import httpx

from petconnect.core.errors import BackendError
from petconnect.services.http import bearer, send

logger = logging.getLogger(__name__)


@dataclass
class IdentityUser:
    id: uuid.UUID
    email: str
    full_name: str | None = None
    phone: str | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "IdentityUser":
        metadata = payload.get("user_metadata") or {}
        return cls(
            id=uuid.UUID(str(payload["id"])),
            email=payload.get("email") or "",
            full_name=metadata.get("full_name"),
            phone=metadata.get("phone"),
        )


@dataclass
class IdentitySession:
    access_token: str
    user: IdentityUser
    refresh_token: str | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "IdentitySession":
        return cls(
            access_token=payload["access_token"],
            refresh_token=payload.get("refresh_token"),
            user=IdentityUser.from_payload(payload["user"]),
        )


class IdentityClient:
    """Sign-up, sign-in, sign-out and session lookup against ``/auth/v1``."""

    def __init__(self, http: httpx.AsyncClient):
        self.http = http

    async def sign_up(
        self,
        email: str,
        password: str,
        full_name: str,
        phone: str | None,
    ) -> tuple[IdentityUser, IdentitySession | None]:
        response = await send(
            self.http,
            "POST",
            "/auth/v1/signup",
            json={
                "email": email,
                "password": password,
                "data": {"full_name": full_name, "phone": phone},
            },
        )
        payload = response.json()

        # Without auto-confirm the service returns the bare user and no session.
        if payload.get("access_token"):
            session = IdentitySession.from_payload(payload)
            return session.user, session
        return IdentityUser.from_payload(payload.get("user") or payload), None

    async def sign_in(self, email: str, password: str) -> IdentitySession:
        response = await send(
            self.http,
            "POST",
            "/auth/v1/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        return IdentitySession.from_payload(response.json())

    async def sign_out(self, access_token: str) -> None:
        await send(self.http, "POST", "/auth/v1/logout", headers=bearer(access_token))

    async def get_user(self, access_token: str) -> IdentityUser | None:
        """Return the token's user, or ``None`` when the token is no longer valid."""
        try:
            response = await self.http.get("/auth/v1/user", headers=bearer(access_token))
        except httpx.HTTPError as exc:
            logger.warning("Identity service unreachable: %s", exc)
            raise BackendError("Could not reach the server. Please try again.") from exc

        if response.status_code in (401, 403):
            return None
        if response.is_error:
            logger.warning("Identity lookup failed with status %s", response.status_code)
            raise BackendError("Could not load your session")
        return IdentityUser.from_payload(response.json())
