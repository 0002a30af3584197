from __future__ import annotations

from typing import BinaryIO

from PIL import Image, UnidentifiedImageError

from ..core.exceptions import QrDecodeError


def decode_qr_image(stream: BinaryIO) -> str:
    """Return the text of the first QR code found in an image stream."""
    # pyzbar loads the native zbar library on import; only the image path needs it
    from pyzbar.pyzbar import decode as pyzbar_decode

    try:
        img = Image.open(stream).convert("RGB")
    except (UnidentifiedImageError, OSError):
        raise QrDecodeError("Uploaded file is not a readable image")

    decoded = pyzbar_decode(img)
    if not decoded:
        raise QrDecodeError("No QR code detected in image")

    try:
        return decoded[0].data.decode("utf-8").strip()
    except UnicodeDecodeError:
        raise QrDecodeError("QR code content is not UTF-8 text")
