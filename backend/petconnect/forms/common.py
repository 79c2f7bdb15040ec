"""Module: common."""

from typing import Annotated, Any, TypeVar

from pydantic import BaseModel, BeforeValidator, StringConstraints, ValidationError

from petconnect.core.errors import FormValidationError

FormT = TypeVar("FormT", bound=BaseModel)


def clean_optional(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, str):
        cleaned = value.strip()
        return cleaned if cleaned else None
    return value


RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
OptionalText = Annotated[str | None, BeforeValidator(clean_optional)]


def form_error_message(exc: ValidationError) -> str:
    """Turn the first validation error into a single display message."""
    error = exc.errors()[0]
    raised = error.get("ctx", {}).get("error")
    if error["type"] == "value_error" and raised is not None:
        return str(raised)

    label = " ".join(str(part) for part in error["loc"]).replace("_", " ").capitalize()
    if error["type"] == "missing" or (
        error["type"] == "string_too_short" and error.get("ctx", {}).get("min_length") == 1
    ):
        return f"{label} is required"
    return f"{label}: {error['msg']}" if label else error["msg"]


def parse_form(model: type[FormT], data: dict[str, Any]) -> FormT:
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise FormValidationError(form_error_message(exc)) from exc
