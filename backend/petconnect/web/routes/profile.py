"""Module: profile.

Public pet profile reached by scanning a pet's QR code. No sign-in required.
"""

from urllib.parse import quote

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session
from starlette.status import HTTP_303_SEE_OTHER

from petconnect.api.deps import get_db
from petconnect.core.errors import PetConnectError, PetNotFoundError
from petconnect.forms.common import parse_form
from petconnect.forms.found_report import FoundReportForm
from petconnect.services import pets
from petconnect.web.templating import render

router = APIRouter()


def _render_profile(request: Request, db: Session, token: str, status_code: int = 200, **context):
    try:
        public = pets.get_public_pet(db, token)
    except PetNotFoundError as exc:
        return render(request, "pet_not_found.html", status_code=404, message=exc.message)
    return render(
        request,
        "pet_profile.html",
        status_code=status_code,
        pet=public.pet,
        owner=public.owner,
        token=token,
        **context,
    )


@router.get("/pet/{token}")
def pet_profile(token: str, request: Request, reported: bool = False, db: Session = Depends(get_db)):
    return _render_profile(request, db, token, reported=reported, values={})


@router.post("/pet/{token}/report")
async def report_found(token: str, request: Request, db: Session = Depends(get_db)):
    form = await request.form()
    values = dict(form)
    try:
        data = parse_form(FoundReportForm, values)
        pet = pets.get_pet_by_token(db, token)
        pets.create_found_report(db, pet.id, data.model_dump())
    except PetNotFoundError as exc:
        return render(request, "pet_not_found.html", status_code=404, message=exc.message)
    except PetConnectError as exc:
        return _render_profile(request, db, token, status_code=400, values=values, error=exc.message)
    return RedirectResponse(f"/pet/{quote(token, safe='')}?reported=true", status_code=HTTP_303_SEE_OTHER)
