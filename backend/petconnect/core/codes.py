"""Module: codes.

Pet tokens and the QR images that point finders at a pet's public profile.
"""

import base64
import io
import time
import uuid

import qrcode
from PIL import Image
from qrcode.constants import ERROR_CORRECT_M
from qrcode.exceptions import DataOverflowError

from petconnect.core.errors import CodeGenerationError

# Fixed rendering parameters for every generated code.
QR_SIZE_PX = 300
QR_MARGIN = 2
QR_DARK = "#000000"
QR_LIGHT = "#FFFFFF"
QR_BOX_SIZE = 10


def now_millis() -> int:
    return int(time.time() * 1000)


def generate_pet_token(owner_id: uuid.UUID | str, millis: int | None = None) -> str:
    """Build the public token for a new pet: ``{owner_id}-{epoch_millis}``."""
    if millis is None:
        millis = now_millis()
    return f"{owner_id}-{millis}"


def _build_qr(text: str) -> qrcode.QRCode:
    qr = qrcode.QRCode(
        error_correction=ERROR_CORRECT_M,
        box_size=QR_BOX_SIZE,
        border=QR_MARGIN,
    )
    try:
        qr.add_data(text)
        qr.make(fit=True)
    except (DataOverflowError, ValueError) as exc:
        raise CodeGenerationError("Could not generate QR code") from exc
    return qr


def qr_matrix(text: str) -> list[list[bool]]:
    """Module matrix (quiet margin included) that ``generate_qr_png`` renders."""
    return _build_qr(text).get_matrix()


def generate_qr_png(text: str) -> bytes:
    qr = _build_qr(text)
    image = qr.make_image(fill_color=QR_DARK, back_color=QR_LIGHT).get_image()
    image = image.convert("RGB").resize((QR_SIZE_PX, QR_SIZE_PX), Image.NEAREST)

    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def generate_qr_code(text: str) -> str:
    """Render ``text`` as a QR code and return it as a PNG data URL."""
    encoded = base64.b64encode(generate_qr_png(text)).decode("ascii")
    return f"data:image/png;base64,{encoded}"
