"""Module: pets.

Data access for pets, owner profiles and found reports.

Every mutation of a pet is scoped to the acting owner: the pet's ``owner_id``
must match the caller's identity or ``NotAuthorizedError`` is raised before
anything is written.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from sqlalchemy import desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from petconnect.core.codes import generate_pet_token, now_millis
from petconnect.core.errors import BackendError, NotAuthorizedError, PetNotFoundError
from petconnect.db.base import utcnow
from petconnect.db.models.found_report import FoundReport
from petconnect.db.models.pet import Pet
from petconnect.db.models.profile import Profile

logger = logging.getLogger(__name__)

PET_FIELDS = ("name", "species", "breed", "age", "color", "description")
REPORT_FIELDS = ("finder_name", "finder_phone", "finder_email", "location_found", "message")


@dataclass
class PublicPet:
    pet: Pet
    owner: Profile


# -------------------------
# Helpers
# -------------------------
def _commit(db: Session, action: str) -> None:
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.warning("Database write failed (%s): %s", action, exc)
        raise BackendError(str(getattr(exc, "orig", None) or exc)) from exc


def _touch(pet: Pet) -> None:
    # updated_at must move forward on every write, even within one clock tick.
    now = utcnow()
    if pet.updated_at is not None and now <= pet.updated_at:
        now = pet.updated_at + timedelta(microseconds=1)
    pet.updated_at = now


def _owned_pet(db: Session, owner_id: uuid.UUID, pet_id: uuid.UUID) -> Pet:
    pet = db.get(Pet, pet_id)
    if pet is None:
        raise PetNotFoundError("Pet not found")
    if pet.owner_id != owner_id:
        raise NotAuthorizedError()
    return pet


# -------------------------
# Profiles
# -------------------------
def get_profile(db: Session, user_id: uuid.UUID) -> Profile | None:
    return db.get(Profile, user_id)


def upsert_profile(
    db: Session,
    user_id: uuid.UUID,
    email: str,
    full_name: str,
    phone: str | None,
) -> Profile:
    profile = db.get(Profile, user_id)
    if profile is None:
        profile = Profile(id=user_id, email=email, full_name=full_name, phone=phone)
        db.add(profile)
    else:
        profile.email = email
        profile.full_name = full_name
        profile.phone = phone
    _commit(db, "upsert profile")
    return profile


# -------------------------
# Pets
# -------------------------
def list_owner_pets(db: Session, owner_id: uuid.UUID) -> list[Pet]:
    stmt = select(Pet).where(Pet.owner_id == owner_id).order_by(desc(Pet.created_at))
    try:
        return list(db.execute(stmt).scalars().all())
    except SQLAlchemyError as exc:
        logger.warning("Could not list pets for owner %s: %s", owner_id, exc)
        raise BackendError("Could not load your pets") from exc


def get_owner_pet(db: Session, owner_id: uuid.UUID, pet_id: uuid.UUID) -> Pet:
    return _owned_pet(db, owner_id, pet_id)


def token_exists(db: Session, token: str) -> bool:
    return db.execute(select(Pet.id).where(Pet.qr_code == token)).first() is not None


def mint_unique_token(db: Session, owner_id: uuid.UUID, millis: int | None = None) -> str:
    """Build an ``{owner_id}-{millis}`` token no existing pet holds."""
    millis = now_millis() if millis is None else millis
    token = generate_pet_token(owner_id, millis)
    while token_exists(db, token):
        millis += 1
        token = generate_pet_token(owner_id, millis)
    return token


def create_pet(
    db: Session,
    owner_id: uuid.UUID,
    data: dict[str, Any],
    photo_url: str | None,
    token: str,
) -> Pet:
    pet = Pet(
        owner_id=owner_id,
        photo_url=photo_url,
        qr_code=token,
        is_active=True,
        **{field: data.get(field) for field in PET_FIELDS},
    )
    db.add(pet)
    _commit(db, "create pet")
    logger.info("Pet %s created for owner %s", pet.id, owner_id)
    return pet


def update_pet(
    db: Session,
    owner_id: uuid.UUID,
    pet_id: uuid.UUID,
    data: dict[str, Any],
    photo_url: str | None,
) -> Pet:
    pet = _owned_pet(db, owner_id, pet_id)

    for field in PET_FIELDS:
        setattr(pet, field, data.get(field))
    pet.photo_url = photo_url
    _touch(pet)

    _commit(db, "update pet")
    return pet


def toggle_pet_active(db: Session, owner_id: uuid.UUID, pet_id: uuid.UUID) -> Pet:
    pet = _owned_pet(db, owner_id, pet_id)
    pet.is_active = not pet.is_active
    _touch(pet)
    _commit(db, "toggle pet")
    logger.info("Pet %s is now %s", pet.id, "active" if pet.is_active else "inactive")
    return pet


def get_public_pet(db: Session, token: str) -> PublicPet:
    """Look up an active pet with its owner's contact fields."""
    row = db.execute(
        select(Pet, Profile)
        .join(Profile, Profile.id == Pet.owner_id)
        .where(Pet.qr_code == token, Pet.is_active.is_(True))
    ).first()
    if row is None:
        raise PetNotFoundError()
    return PublicPet(pet=row[0], owner=row[1])


def get_pet_by_token(db: Session, token: str) -> Pet:
    pet = db.execute(select(Pet).where(Pet.qr_code == token)).scalar_one_or_none()
    if pet is None:
        raise PetNotFoundError()
    return pet


# -------------------------
# Found reports
# -------------------------
def create_found_report(db: Session, pet_id: uuid.UUID, data: dict[str, Any]) -> FoundReport:
    # Active state is not re-checked; the pet only has to exist.
    if db.get(Pet, pet_id) is None:
        raise PetNotFoundError()

    report = FoundReport(pet_id=pet_id, **{field: data.get(field) for field in REPORT_FIELDS})
    db.add(report)
    _commit(db, "create found report")
    logger.info("Found report %s submitted for pet %s", report.id, pet_id)
    return report


def list_found_reports(db: Session, owner_id: uuid.UUID, pet_id: uuid.UUID) -> list[FoundReport]:
    _owned_pet(db, owner_id, pet_id)
    stmt = (
        select(FoundReport)
        .where(FoundReport.pet_id == pet_id)
        .order_by(desc(FoundReport.created_at))
    )
    return list(db.execute(stmt).scalars().all())
