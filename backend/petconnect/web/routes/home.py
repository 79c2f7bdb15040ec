"""Module: home."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, RedirectResponse
from sqlalchemy.orm import Session
from starlette.status import HTTP_303_SEE_OTHER, HTTP_404_NOT_FOUND

from petconnect.api.deps import get_auth, get_db
from petconnect.auth.session import AuthContext
from petconnect.core.errors import BackendError
from petconnect.services import pets
from petconnect.web.templating import render

router = APIRouter()


def render_dashboard(
    request: Request,
    auth: AuthContext,
    db: Session,
    error: str | None = None,
    status_code: int = 200,
):
    try:
        pet_list = pets.list_owner_pets(db, auth.session.user_id)
    except BackendError as exc:
        pet_list = []
        error = error or exc.message
        status_code = exc.status_code
    return render(request, "dashboard.html", auth, status_code=status_code, pets=pet_list, error=error)


# Landing page for visitors, pet dashboard for signed-in owners.
@router.get("/")
def home(
    request: Request,
    auth: AuthContext = Depends(get_auth),
    db: Session = Depends(get_db),
):
    if not auth.is_authenticated:
        return render(request, "landing.html", auth)
    return render_dashboard(request, auth, db)


@router.get("/dashboard")
def dashboard(auth: AuthContext = Depends(get_auth)):
    target = "/" if auth.is_authenticated else "/auth"
    return RedirectResponse(target, status_code=HTTP_303_SEE_OTHER)


# Registered last: every other path goes back home, except under /api/.
fallback_router = APIRouter()

FALLBACK_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE"]


@fallback_router.api_route("/{path:path}", methods=FALLBACK_METHODS, include_in_schema=False)
def fallback(path: str):
    if path == "api" or path.startswith("api/"):
        return JSONResponse({"detail": "Not Found"}, status_code=HTTP_404_NOT_FOUND)
    return RedirectResponse("/", status_code=HTTP_303_SEE_OTHER)
