"""Module: router."""

from fastapi import APIRouter

from petconnect.web.routes.auth import router as auth_router
from petconnect.web.routes.home import fallback_router
from petconnect.web.routes.home import router as home_router
from petconnect.web.routes.pets import router as pets_router
from petconnect.web.routes.profile import router as profile_router

web_router = APIRouter()

# Public profile first: it must stay reachable without a session.
web_router.include_router(profile_router, tags=["profile"])
web_router.include_router(home_router, tags=["home"])
web_router.include_router(auth_router, tags=["auth"])
web_router.include_router(pets_router, tags=["pets"])
# Unmatched paths redirect home; keep this last.
web_router.include_router(fallback_router)
