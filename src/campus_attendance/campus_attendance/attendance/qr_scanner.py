from __future__ import annotations

from typing import BinaryIO, Optional

from PIL import Image, UnidentifiedImageError
from pyzbar.pyzbar import decode as pyzbar_decode

from ..core.exceptions import ValidationError


def decode_qr_payload(stream: BinaryIO) -> Optional[str]:
    """Return the text of the first QR code in an uploaded photo, or None."""
    try:
        img = Image.open(stream).convert("RGB")
    except (UnidentifiedImageError, OSError):
        raise ValidationError("Uploaded file is not a readable image") from None

    decoded = pyzbar_decode(img)
    if not decoded:
        return None
    # Foreign QR encodings still yield a payload; it just will not match.
    return decoded[0].data.decode("utf-8", errors="replace").strip()
