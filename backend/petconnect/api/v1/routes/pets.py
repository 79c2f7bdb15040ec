"""Module: pets."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from petconnect.api.deps import get_db, require_session
from petconnect.auth.session import AuthSession
from petconnect.core.errors import PetNotFoundError
from petconnect.services import pets

router = APIRouter()


# Validate and coerce UUID path values.
def _parse_uuid(value: str) -> uuid.UUID:
    try:
        return uuid.UUID(value)
    except ValueError:
        raise PetNotFoundError("Pet not found")


@router.get("/public/{token}", summary="Public pet profile by token")
def get_public_pet(token: str, db: Session = Depends(get_db)):
    public = pets.get_public_pet(db, token)
    pet, owner = public.pet, public.owner
    return {
        "id": str(pet.id),
        "name": pet.name,
        "species": pet.species,
        "breed": pet.breed,
        "age": pet.age,
        "color": pet.color,
        "description": pet.description,
        "photo_url": pet.photo_url,
        "qr_code": pet.qr_code,
        "owner": {
            "full_name": owner.full_name,
            "phone": owner.phone,
            "email": owner.email,
        },
    }


@router.get("/{pet_id}/found-reports", summary="Found reports for one of the caller's pets")
def list_found_reports(
    pet_id: str,
    session: AuthSession = Depends(require_session),
    db: Session = Depends(get_db),
):
    reports = pets.list_found_reports(db, session.user_id, _parse_uuid(pet_id))
    return [
        {
            "id": str(r.id),
            "pet_id": str(r.pet_id),
            "finder_name": r.finder_name,
            "finder_phone": r.finder_phone,
            "finder_email": r.finder_email,
            "location_found": r.location_found,
            "message": r.message,
            "created_at": r.created_at,
        }
        for r in reports
    ]
