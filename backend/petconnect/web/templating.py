"""Module: templating."""

from pathlib import Path

from fastapi import Request
from fastapi.templating import Jinja2Templates

from petconnect.auth.session import AuthContext
from petconnect.core.links import mailto_link, tel_link
from petconnect.forms.pet import MAX_AGE, MIN_AGE, SPECIES_CHOICES

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.globals.update(
    species_choices=SPECIES_CHOICES,
    min_age=MIN_AGE,
    max_age=MAX_AGE,
    tel_link=tel_link,
    mailto_link=mailto_link,
)


def render(
    request: Request,
    name: str,
    auth: AuthContext | None = None,
    status_code: int = 200,
    **context,
):
    return templates.TemplateResponse(
        request,
        name,
        {"auth": auth, **context},
        status_code=status_code,
    )
