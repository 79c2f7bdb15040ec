"""Module: auth."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session
from starlette.status import HTTP_303_SEE_OTHER

from petconnect.api.deps import get_auth, get_auth_provider, get_db
from petconnect.auth.session import AuthContext, AuthSessionProvider
from petconnect.core.errors import PetConnectError
from petconnect.forms.auth import SignInForm, SignUpForm
from petconnect.forms.common import parse_form
from petconnect.web.templating import render

router = APIRouter()

SIGN_IN = "sign-in"
SIGN_UP = "sign-up"
CONFIRM_EMAIL_NOTICE = "Account created. Check your email to confirm your address, then sign in."


def _form_values(form) -> dict:
    # Passwords are never echoed back into the page.
    return {key: value for key, value in form.items() if "password" not in key}


@router.get("/auth")
def auth_page(
    request: Request,
    mode: str = SIGN_IN,
    auth: AuthContext = Depends(get_auth),
):
    if auth.is_authenticated:
        return RedirectResponse("/", status_code=HTTP_303_SEE_OTHER)
    mode = SIGN_UP if mode == SIGN_UP else SIGN_IN
    return render(request, "auth.html", auth, mode=mode, values={})


@router.post("/auth/sign-in")
async def sign_in(
    request: Request,
    auth: AuthContext = Depends(get_auth),
    provider: AuthSessionProvider = Depends(get_auth_provider),
    db: Session = Depends(get_db),
):
    form = await request.form()
    try:
        data = parse_form(SignInForm, dict(form))
        await provider.sign_in(request, db, data)
    except PetConnectError as exc:
        return render(
            request, "auth.html", auth, status_code=400,
            mode=SIGN_IN, values=_form_values(form), error=exc.message,
        )
    return RedirectResponse("/", status_code=HTTP_303_SEE_OTHER)


@router.post("/auth/sign-up")
async def sign_up(
    request: Request,
    auth: AuthContext = Depends(get_auth),
    provider: AuthSessionProvider = Depends(get_auth_provider),
    db: Session = Depends(get_db),
):
    form = await request.form()
    try:
        # Validation runs before any call to the identity service.
        data = parse_form(SignUpForm, dict(form))
        context = await provider.sign_up(request, db, data)
    except PetConnectError as exc:
        return render(
            request, "auth.html", auth, status_code=400,
            mode=SIGN_UP, values=_form_values(form), error=exc.message,
        )

    if not context.is_authenticated:
        return render(request, "auth.html", context, mode=SIGN_IN, values={}, notice=CONFIRM_EMAIL_NOTICE)
    return RedirectResponse("/", status_code=HTTP_303_SEE_OTHER)


@router.post("/auth/sign-out")
async def sign_out(
    request: Request,
    auth: AuthContext = Depends(get_auth),
    provider: AuthSessionProvider = Depends(get_auth_provider),
):
    await provider.sign_out(request, auth)
    return RedirectResponse("/", status_code=HTTP_303_SEE_OTHER)
