"""Module: links."""

from urllib.parse import quote

PREVIEW_TOKEN = "preview"


def pet_profile_url(base_url: str, token: str | None) -> str:
    return f"{base_url.rstrip('/')}/pet/{quote(token or PREVIEW_TOKEN, safe='')}"


def tel_link(phone: str) -> str:
    return f"tel:{quote(phone.strip(), safe='+')}"


def mailto_link(email: str, pet_name: str) -> str:
    subject = quote(f"Found {pet_name}")
    body = quote(f"Hello! I found {pet_name}. Please contact me to arrange pickup.")
    return f"mailto:{email.strip()}?subject={subject}&body={body}"


def qr_download_filename(pet_name: str) -> str:
    return f"{pet_name}-qr-code.png"


def attachment_header(filename: str) -> str:
    # Header values are latin-1; fall back to RFC 5987 for anything else.
    quoted = quote(filename)
    if quoted != filename:
        return f"attachment; filename*=utf-8''{quoted}"
    return f'attachment; filename="{filename}"'
