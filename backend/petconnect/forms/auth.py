"""Module: auth."""

from pydantic import BaseModel, EmailStr, model_validator

from petconnect.forms.common import RequiredText

MIN_PASSWORD_LENGTH = 6


class SignInForm(BaseModel):
    email: RequiredText
    password: str


class SignUpForm(BaseModel):
    full_name: RequiredText
    email: EmailStr
    phone: RequiredText
    password: str
    confirm_password: str

    @model_validator(mode="after")
    def check_password(self) -> "SignUpForm":
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        if len(self.password) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        return self
