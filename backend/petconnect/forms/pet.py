"""Module: pet.

Pet create/edit form: validation, photo intake and the submit workflow.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator
from sqlalchemy.orm import Session
from starlette.datastructures import UploadFile

from petconnect.auth.session import AuthSession
from petconnect.core.codes import generate_qr_code
from petconnect.core.errors import FormValidationError
from petconnect.core.links import pet_profile_url
from petconnect.db.models.pet import Pet
from petconnect.forms.common import OptionalText, RequiredText
from petconnect.services import pets
from petconnect.services.storage import PhotoUpload, StorageClient

SPECIES_CHOICES = ("Dog", "Cat", "Bird", "Rabbit", "Other")
MIN_AGE = 0
MAX_AGE = 30
ALLOWED_IMAGE_TYPES = {"image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp"}


class PetForm(BaseModel):
    name: RequiredText
    species: RequiredText
    breed: OptionalText = None
    age: int = Field(default=1, ge=MIN_AGE, le=MAX_AGE)
    color: RequiredText
    description: OptionalText = None

    @field_validator("species")
    @classmethod
    def known_species(cls, value: str) -> str:
        if value not in SPECIES_CHOICES:
            raise ValueError(f"Species must be one of: {', '.join(SPECIES_CHOICES)}")
        return value


def pet_form_values(pet: Pet) -> dict:
    # Stored rows are shown as-is; validation only runs on submit.
    return {field: getattr(pet, field) for field in pets.PET_FIELDS}


async def read_photo(photo: UploadFile | None, max_bytes: int) -> PhotoUpload | None:
    # An empty file input still arrives as a part with no filename.
    if photo is None or not photo.filename:
        return None

    content_type = (photo.content_type or "").lower()
    if content_type not in ALLOWED_IMAGE_TYPES:
        raise FormValidationError("Photo must be a JPEG, PNG, GIF or WEBP image")

    data = await photo.read()
    if len(data) > max_bytes:
        raise FormValidationError(f"Photo must be {max_bytes // (1024 * 1024)}MB or smaller")

    return PhotoUpload(filename=photo.filename, content=data, content_type=content_type)


async def submit_pet_form(
    db: Session,
    storage: StorageClient,
    session: AuthSession,
    form: PetForm,
    photo: PhotoUpload | None,
    base_url: str,
    pet: Pet | None = None,
) -> Pet:
    """Create a pet, or update ``pet``, from a validated form.

    The photo is uploaded first so the record can point at it; the token of an
    existing pet and its current photo are kept unless a new photo is given.
    Any failure aborts the rest of the submission. An upload that succeeds
    before a failed record write is not cleaned up.
    """
    photo_url = pet.photo_url if pet is not None else None
    if photo is not None:
        photo_url = await storage.upload_photo(session.user_id, photo, session.access_token)

    token = pet.qr_code if pet is not None else pets.mint_unique_token(db, session.user_id)
    # Fail the submission if the profile URL cannot be encoded.
    generate_qr_code(pet_profile_url(base_url, token))

    data = form.model_dump()
    if pet is not None:
        return pets.update_pet(db, session.user_id, pet.id, data, photo_url)
    return pets.create_pet(db, session.user_id, data, photo_url, token)
