"""Module: found_report."""

from pydantic import BaseModel, EmailStr, field_validator

from petconnect.forms.common import OptionalText, RequiredText, clean_optional


class FoundReportForm(BaseModel):
    finder_name: RequiredText
    finder_phone: RequiredText
    finder_email: EmailStr | None = None
    location_found: RequiredText
    message: OptionalText = None

    # Browsers submit an empty string for a blank optional email field.
    @field_validator("finder_email", mode="before")
    @classmethod
    def blank_email(cls, value):
        return clean_optional(value)
