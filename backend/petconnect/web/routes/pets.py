"""Module: pets."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse, Response
from sqlalchemy.orm import Session
from starlette.datastructures import UploadFile
from starlette.status import HTTP_303_SEE_OTHER

from petconnect.api.deps import get_auth, get_base_url, get_db, get_settings, get_storage, require_session
from petconnect.auth.session import AuthContext, AuthSession
from petconnect.core.codes import generate_qr_code, generate_qr_png
from petconnect.core.config import Settings
from petconnect.core.errors import PetConnectError, PetNotFoundError
from petconnect.core.links import attachment_header, pet_profile_url, qr_download_filename
from petconnect.db.models.pet import Pet
from petconnect.forms.common import parse_form
from petconnect.forms.pet import PetForm, pet_form_values, read_photo, submit_pet_form
from petconnect.services import pets
from petconnect.services.storage import StorageClient
from petconnect.web.routes.home import render_dashboard
from petconnect.web.templating import render

router = APIRouter(prefix="/pets")


# -------------------------
# Helpers
# -------------------------
def _parse_uuid(value: str) -> uuid.UUID:
    try:
        return uuid.UUID(value)
    except ValueError:
        raise PetNotFoundError("Pet not found")


def _render_form(
    request: Request,
    auth: AuthContext,
    base_url: str,
    values: dict,
    pet: Pet | None = None,
    error: str | None = None,
    status_code: int = 200,
):
    token = pet.qr_code if pet is not None else None
    return render(
        request,
        "pet_form.html",
        auth,
        status_code=status_code,
        pet=pet,
        values=values,
        photo_url=pet.photo_url if pet is not None else None,
        qr_preview=generate_qr_code(pet_profile_url(base_url, token)),
        error=error,
    )


async def _handle_submit(
    request: Request,
    auth: AuthContext,
    session: AuthSession,
    db: Session,
    storage: StorageClient,
    settings: Settings,
    base_url: str,
    pet: Pet | None = None,
):
    form = await request.form()
    values = {key: value for key, value in form.items() if not isinstance(value, UploadFile)}
    try:
        data = parse_form(PetForm, values)
        photo_field = form.get("photo")
        photo = await read_photo(
            photo_field if isinstance(photo_field, UploadFile) else None,
            settings.max_photo_bytes,
        )
        await submit_pet_form(db, storage, session, data, photo, base_url, pet=pet)
    except PetConnectError as exc:
        return _render_form(request, auth, base_url, values, pet=pet, error=exc.message, status_code=400)
    return RedirectResponse("/", status_code=HTTP_303_SEE_OTHER)


# -------------------------
# Endpoints
# -------------------------
@router.get("/new")
def new_pet(
    request: Request,
    auth: AuthContext = Depends(get_auth),
    session: AuthSession = Depends(require_session),
    base_url: str = Depends(get_base_url),
):
    return _render_form(request, auth, base_url, values={"age": 1})


@router.post("")
async def create_pet(
    request: Request,
    auth: AuthContext = Depends(get_auth),
    session: AuthSession = Depends(require_session),
    db: Session = Depends(get_db),
    storage: StorageClient = Depends(get_storage),
    settings: Settings = Depends(get_settings),
    base_url: str = Depends(get_base_url),
):
    return await _handle_submit(request, auth, session, db, storage, settings, base_url)


@router.get("/{pet_id}/edit")
def edit_pet(
    pet_id: str,
    request: Request,
    auth: AuthContext = Depends(get_auth),
    session: AuthSession = Depends(require_session),
    db: Session = Depends(get_db),
    base_url: str = Depends(get_base_url),
):
    pet = pets.get_owner_pet(db, session.user_id, _parse_uuid(pet_id))
    values = pet_form_values(pet)
    return _render_form(request, auth, base_url, values, pet=pet)


@router.post("/{pet_id}")
async def update_pet(
    pet_id: str,
    request: Request,
    auth: AuthContext = Depends(get_auth),
    session: AuthSession = Depends(require_session),
    db: Session = Depends(get_db),
    storage: StorageClient = Depends(get_storage),
    settings: Settings = Depends(get_settings),
    base_url: str = Depends(get_base_url),
):
    pet = pets.get_owner_pet(db, session.user_id, _parse_uuid(pet_id))
    return await _handle_submit(request, auth, session, db, storage, settings, base_url, pet=pet)


@router.post("/{pet_id}/toggle")
def toggle_pet(
    pet_id: str,
    request: Request,
    auth: AuthContext = Depends(get_auth),
    session: AuthSession = Depends(require_session),
    db: Session = Depends(get_db),
):
    try:
        pets.toggle_pet_active(db, session.user_id, _parse_uuid(pet_id))
    except PetConnectError as exc:
        return render_dashboard(request, auth, db, error=exc.message, status_code=exc.status_code)
    return RedirectResponse("/", status_code=HTTP_303_SEE_OTHER)


@router.get("/{pet_id}/qr-code.png")
def download_qr_code(
    pet_id: str,
    session: AuthSession = Depends(require_session),
    db: Session = Depends(get_db),
    base_url: str = Depends(get_base_url),
):
    pet = pets.get_owner_pet(db, session.user_id, _parse_uuid(pet_id))
    content = generate_qr_png(pet_profile_url(base_url, pet.qr_code))
    return Response(
        content=content,
        media_type="image/png",
        headers={"Content-Disposition": attachment_header(qr_download_filename(pet.name))},
    )


@router.get("/{pet_id}/reports")
def pet_reports(
    pet_id: str,
    request: Request,
    auth: AuthContext = Depends(get_auth),
    session: AuthSession = Depends(require_session),
    db: Session = Depends(get_db),
):
    pid = _parse_uuid(pet_id)
    pet = pets.get_owner_pet(db, session.user_id, pid)
    reports = pets.list_found_reports(db, session.user_id, pid)
    return render(request, "reports.html", auth, pet=pet, reports=reports)
