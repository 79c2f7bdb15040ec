"""Module: seed_data.

Demo data for local development: owners, pets and a few found reports.
Owners seeded here have no identity-service account; their pets are only
useful for exercising the public profile page (``/pet/{token}``).
"""

from faker import Faker
import random
import string
import uuid
from datetime import timedelta
from sqlalchemy import delete

from petconnect.core.codes import now_millis
from petconnect.db.base import utcnow
from petconnect.db.init_db import init_db
from petconnect.db.models.found_report import FoundReport
from petconnect.db.models.pet import Pet
from petconnect.db.models.profile import Profile
from petconnect.services.pets import mint_unique_token

fake = Faker()

DOG_BREEDS = ["Labrador Retriever", "Border Collie", "Beagle", "Dachshund", "Golden Retriever", None]
CAT_BREEDS = ["Domestic Shorthair", "Maine Coon", "Ragdoll", "Siamese", None]
BIRD_BREEDS = ["Budgerigar", "Cockatiel", None]
RABBIT_BREEDS = ["Holland Lop", "Netherland Dwarf", None]

BREEDS_BY_SPECIES = {
    "Dog": DOG_BREEDS,
    "Cat": CAT_BREEDS,
    "Bird": BIRD_BREEDS,
    "Rabbit": RABBIT_BREEDS,
    "Other": [None],
}
COLORS = ["Black", "White", "Brown", "Golden", "Grey", "Tabby", "Black and white", "Ginger"]
PET_NAMES = ["Bella", "Max", "Luna", "Charlie", "Coco", "Milo", "Daisy", "Rocky", "Nala", "Ollie"]


# Shared helpers used by the seed builders.
def generate_au_mobile() -> str:
    # Australian mobile format: 04 + 8 digits
    return "04" + "".join(random.choice(string.digits) for _ in range(8))


def reset_db(session) -> None:
    # Children first so foreign keys never dangle.
    session.execute(delete(FoundReport))
    session.execute(delete(Pet))
    session.execute(delete(Profile))
    session.commit()


def seed_profiles(session, n: int = 10) -> list[Profile]:
    profiles = [
        Profile(
            id=uuid.uuid4(),
            email=fake.unique.email(),
            full_name=fake.name(),
            phone=generate_au_mobile(),
        )
        for _ in range(n)
    ]
    session.add_all(profiles)
    session.commit()
    return profiles


def seed_pets(session, profiles: list[Profile], max_per_owner: int = 3) -> list[Pet]:
    pets: list[Pet] = []
    millis = now_millis()
    for profile in profiles:
        for _ in range(random.randint(1, max_per_owner)):
            species = random.choice(list(BREEDS_BY_SPECIES))
            created_at = utcnow() - timedelta(days=random.randint(0, 365))
            millis += 1
            pet = Pet(
                owner_id=profile.id,
                name=random.choice(PET_NAMES),
                species=species,
                breed=random.choice(BREEDS_BY_SPECIES[species]),
                age=random.randint(0, 15),
                color=random.choice(COLORS),
                description=fake.sentence() if random.random() < 0.5 else None,
                qr_code=mint_unique_token(session, profile.id, millis),
                is_active=random.random() < 0.85,
                created_at=created_at,
                updated_at=created_at,
            )
            session.add(pet)
            session.flush()
            pets.append(pet)
    session.commit()
    return pets


def seed_found_reports(session, pets: list[Pet], share: float = 0.3) -> int:
    reports: list[FoundReport] = []
    for pet in pets:
        if random.random() >= share:
            continue
        reports.append(
            FoundReport(
                pet_id=pet.id,
                finder_name=fake.name(),
                finder_phone=generate_au_mobile(),
                finder_email=fake.email() if random.random() < 0.5 else None,
                location_found=f"{fake.street_address()}, {fake.city()}",
                message=fake.sentence() if random.random() < 0.5 else None,
            )
        )
    session.add_all(reports)
    session.commit()
    return len(reports)


if __name__ == "__main__":
    # python -m petconnect.scripts.seed_data
    from petconnect.db.session import SessionLocal, engine

    init_db(engine)
    session = SessionLocal()
    try:
        print("Resetting tables...")
        reset_db(session)

        print("Seeding owner profiles (10)...")
        profiles = seed_profiles(session, 10)

        print("Seeding pets...")
        pets = seed_pets(session, profiles)

        print("Seeding found reports...")
        report_n = seed_found_reports(session, pets)

        active = [p for p in pets if p.is_active]
        print(f"Done. profiles={len(profiles)}, pets={len(pets)}, found_reports={report_n}")
        for pet in active[:5]:
            print(f"  /pet/{pet.qr_code}  ({pet.name}, {pet.species})")
    finally:
        session.close()
