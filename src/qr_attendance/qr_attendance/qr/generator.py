from __future__ import annotations

import io
import json
from typing import Optional

import qrcode

from .payload import QrPayload
from .signature import SignatureVerifier


def build_signed_payload(
    verifier: SignatureVerifier,
    *,
    employee_id: str,
    first_name: str,
    last_name: str,
    role: str,
    check_in_time: str,
    department: Optional[str] = None,
) -> dict:
    """Produce the same JSON object the mobile app encodes into its QR code."""

    unsigned = QrPayload(
        employee_id=employee_id,
        first_name=first_name,
        last_name=last_name,
        role=role,
        department=department,
        check_in_time=check_in_time,
        signature="",
    )
    return {
        "employeeId": employee_id,
        "firstName": first_name,
        "lastName": last_name,
        "role": role,
        "department": department,
        "checkInTime": check_in_time,
        "signature": verifier.sign(unsigned),
    }


def render_qr_png(data: dict | str) -> io.BytesIO:
    text = data if isinstance(data, str) else json.dumps(data, separators=(",", ":"))

    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=10,
        border=4,
    )
    qr.add_data(text)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")

    buf = io.BytesIO()
    img.save(buf, format="PNG")
    buf.seek(0)
    return buf
