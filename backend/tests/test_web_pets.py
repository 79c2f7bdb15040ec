import io
import uuid

import pytest
from PIL import Image

from conftest import PUBLIC_BASE_URL
from petconnect.core.codes import generate_qr_code
from petconnect.core.links import pet_profile_url
from petconnect.db.models.found_report import FoundReport
from petconnect.db.models.pet import Pet
from petconnect.services import pets

PET_FORM = {
    "name": "Rex",
    "species": "Dog",
    "breed": "",
    "age": "4",
    "color": "Brown",
    "description": "Wears a red collar",
}
PHOTO = {"photo": ("rex.png", b"png-bytes", "image/png")}


def _pets(db) -> list[Pet]:
    db.expire_all()
    return db.query(Pet).all()


@pytest.fixture
def created_pet(client, db, signed_in) -> Pet:
    response = client.post("/pets", data=PET_FORM, files=PHOTO, follow_redirects=False)
    assert response.status_code == 303
    [pet] = _pets(db)
    return pet


def test_owner_pages_require_sign_in(client):
    response = client.get("/pets/new", follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"] == "/auth"


def test_new_pet_page_shows_preview_code(client, signed_in):
    response = client.get("/pets/new")

    assert response.status_code == 200
    assert "QR Code Preview" in response.text
    assert "data:image/png;base64," in response.text


def test_create_pet_uploads_photo_and_mints_token(client, db, backend, signed_in, created_pet):
    pet = created_pet

    assert pet.owner_id == signed_in
    assert pet.is_active is True
    assert pet.breed is None
    assert pet.qr_code.startswith(f"{signed_in}-")
    assert pet.photo_url.startswith(f"https://backend.test/storage/v1/object/public/pet-photos/{signed_in}/")
    assert list(backend.objects.values()) == [b"png-bytes"]

    home = client.get("/")
    assert "Rex" in home.text
    assert "Active" in home.text
    assert "Mixed" in home.text


def test_create_pet_without_photo(client, db, backend, signed_in):
    response = client.post("/pets", data=PET_FORM, follow_redirects=False)

    assert response.status_code == 303
    [pet] = _pets(db)
    assert pet.photo_url is None
    assert backend.objects == {}


def test_invalid_pet_form_writes_nothing(client, db, backend, signed_in):
    response = client.post("/pets", data={**PET_FORM, "age": "31"}, files=PHOTO, follow_redirects=False)

    assert response.status_code == 400
    assert "Age" in response.text
    assert 'value="Rex"' in response.text
    assert _pets(db) == []
    assert backend.objects == {}


def test_non_image_photo_is_rejected(client, db, signed_in):
    files = {"photo": ("notes.txt", b"hello", "text/plain")}

    response = client.post("/pets", data=PET_FORM, files=files, follow_redirects=False)

    assert response.status_code == 400
    assert "Photo must be a JPEG, PNG, GIF or WEBP image" in response.text
    assert _pets(db) == []


def test_failed_upload_aborts_submission(client, db, backend, signed_in):
    backend.upload_error = "Bucket not found"

    response = client.post("/pets", data=PET_FORM, files=PHOTO, follow_redirects=False)

    assert response.status_code == 400
    assert "Bucket not found" in response.text
    assert _pets(db) == []


def test_edit_keeps_token_and_photo(client, db, created_pet):
    token, photo_url = created_pet.qr_code, created_pet.photo_url

    page = client.get(f"/pets/{created_pet.id}/edit")
    assert page.status_code == 200
    assert "Edit Pet Profile" in page.text
    assert 'value="Rex"' in page.text

    response = client.post(
        f"/pets/{created_pet.id}",
        data={**PET_FORM, "name": "Rexie", "breed": "Kelpie"},
        follow_redirects=False,
    )

    assert response.status_code == 303
    [pet] = _pets(db)
    assert pet.name == "Rexie"
    assert pet.breed == "Kelpie"
    assert pet.qr_code == token
    assert pet.photo_url == photo_url


def test_toggle_hides_and_restores_public_profile(client, db, created_pet):
    token = created_pet.qr_code

    response = client.post(f"/pets/{created_pet.id}/toggle", follow_redirects=False)
    assert response.status_code == 303
    assert _pets(db)[0].is_active is False
    assert "Inactive" in client.get("/").text
    assert client.get(f"/pet/{token}").status_code == 404

    client.post(f"/pets/{created_pet.id}/toggle", follow_redirects=False)
    assert client.get(f"/pet/{token}").status_code == 200


def test_cannot_touch_another_owners_pet(client, db, owner, signed_in):
    token = pets.mint_unique_token(db, owner.id)
    other = pets.create_pet(db, owner.id, {**PET_FORM, "age": 2}, None, token)

    toggle = client.post(f"/pets/{other.id}/toggle", follow_redirects=False)
    assert toggle.status_code == 403
    assert "You do not have permission to change this pet" in toggle.text
    assert "My Pets" in toggle.text

    assert client.get(f"/pets/{other.id}/edit").status_code == 403
    assert client.post(f"/pets/{other.id}", data=PET_FORM).status_code == 403
    assert client.get(f"/pets/{other.id}/qr-code.png").status_code == 403
    assert _pets(db)[0].is_active is True


def test_unknown_pet_id_is_not_found(client, signed_in):
    assert client.get("/pets/not-a-uuid/edit").status_code == 404
    assert client.get(f"/pets/{uuid.uuid4()}/edit").status_code == 404


def test_qr_code_download(client, created_pet):
    response = client.get(f"/pets/{created_pet.id}/qr-code.png")

    assert response.status_code == 200
    assert response.headers["content-type"] == "image/png"
    assert response.headers["content-disposition"] == 'attachment; filename="Rex-qr-code.png"'
    image = Image.open(io.BytesIO(response.content))
    assert image.size == (300, 300)


def test_reports_page_lists_found_reports(client, db, created_pet):
    assert "Nobody has reported finding Rex." in client.get(f"/pets/{created_pet.id}/reports").text

    db.add(
        FoundReport(
            pet_id=created_pet.id,
            finder_name="Jo Finder",
            finder_phone="0499999999",
            location_found="Central Park",
        )
    )
    db.commit()

    page = client.get(f"/pets/{created_pet.id}/reports")
    assert "Jo Finder" in page.text
    assert "Central Park" in page.text


def test_preview_code_points_at_configured_origin(client, created_pet):
    page = client.get(f"/pets/{created_pet.id}/edit")

    expected = generate_qr_code(pet_profile_url(PUBLIC_BASE_URL, created_pet.qr_code))
    assert expected in page.text


def test_edit_page_shows_stored_values_outside_form_bounds(client, db, signed_in):
    token = pets.mint_unique_token(db, signed_in)
    pet = pets.create_pet(db, signed_in, {**PET_FORM, "species": "Lizard", "age": 32}, None, token)

    page = client.get(f"/pets/{pet.id}/edit")

    assert page.status_code == 200
    assert 'value="32"' in page.text

    response = client.post(f"/pets/{pet.id}", data={**PET_FORM, "age": "32"}, follow_redirects=False)
    assert response.status_code == 400
    assert _pets(db)[0].age == 32
