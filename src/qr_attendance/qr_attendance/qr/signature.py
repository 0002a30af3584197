from __future__ import annotations

import hashlib
import hmac
from datetime import datetime
from typing import Optional, Union

from ..common.datetime_utils import now_utc, parse_iso_datetime
from ..core.constants import QR_FRESHNESS_SECONDS
from ..core.exceptions import ConfigurationError, SignatureMismatchError, StalePayloadError
from .payload import QrPayload


def canonical_string(payload: QrPayload) -> str:
    """Pipe-joined signing input, in the field order the mobile app uses."""
    return "|".join(
        [
            payload.employee_id,
            payload.first_name,
            payload.last_name,
            payload.role,
            payload.department or "",
            payload.check_in_time,
        ]
    )


class SignatureVerifier:
    """HMAC-SHA256 signature and freshness checks for QR payloads."""

    def __init__(self, secret_key: Optional[str], *, freshness_seconds: int = QR_FRESHNESS_SECONDS):
        self._secret = secret_key or None
        self._freshness_seconds = int(freshness_seconds)

    @property
    def is_configured(self) -> bool:
        return self._secret is not None

    def sign(self, payload: QrPayload) -> str:
        if self._secret is None:
            raise ConfigurationError("QR secret key not configured")
        return hmac.new(
            self._secret.encode("utf-8"),
            canonical_string(payload).encode("utf-8"),
            hashlib.sha256,
        ).hexdigest()

    def verify(self, payload: QrPayload) -> bool:
        expected = self.sign(payload)
        supplied = payload.signature
        # compare_digest only accepts ASCII str
        if not isinstance(supplied, str) or not supplied.isascii():
            return False
        return hmac.compare_digest(expected, supplied)

    def is_fresh(self, check_in_time: Union[str, datetime], *, now: Optional[datetime] = None) -> bool:
        """True iff 0 <= now - check_in_time <= freshness window. Clock skew is not clamped."""
        try:
            stamp = parse_iso_datetime(check_in_time) if isinstance(check_in_time, str) else check_in_time
        except ValueError:
            return False
        if stamp.tzinfo is None:
            stamp = stamp.astimezone()

        now = now or now_utc()
        if now.tzinfo is None:
            now = now.astimezone()

        age = (now - stamp).total_seconds()
        return 0 <= age <= self._freshness_seconds

    def check(self, payload: QrPayload, *, now: Optional[datetime] = None) -> None:
        """Raise unless the payload is both authentic and fresh."""
        if not self.verify(payload):
            raise SignatureMismatchError("Invalid QR code signature. Code may be tampered with.")
        if not self.is_fresh(payload.check_in_time, now=now):
            raise StalePayloadError("QR code expired. Please generate a new one.")
