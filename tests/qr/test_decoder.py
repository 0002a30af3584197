from __future__ import annotations

import io
import json

import pytest
from PIL import Image

# the native zbar library is loaded on import; a plain ImportError means it is missing
pytest.importorskip("pyzbar.pyzbar", exc_type=ImportError)

from src.qr_attendance.qr_attendance.core.exceptions import QrDecodeError
from src.qr_attendance.qr_attendance.qr.decoder import decode_qr_image
from src.qr_attendance.qr_attendance.qr.generator import render_qr_png


def test_decodes_text_rendered_by_generator():
    data = {"employeeId": "emp-42", "firstName": "Ana"}

    text = decode_qr_image(render_qr_png(data))

    assert json.loads(text) == data


def test_blank_image_has_no_qr_code():
    buf = io.BytesIO()
    Image.new("RGB", (200, 200), "white").save(buf, format="PNG")
    buf.seek(0)

    with pytest.raises(QrDecodeError, match="No QR code"):
        decode_qr_image(buf)


def test_non_image_upload_is_rejected():
    with pytest.raises(QrDecodeError):
        decode_qr_image(io.BytesIO(b"not an image"))
