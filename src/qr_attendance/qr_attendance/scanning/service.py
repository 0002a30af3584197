from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import BinaryIO, Optional

from ..attendance.model import AttendanceRecord
from ..attendance.service import AttendanceService
from ..common.datetime_utils import now_local
from ..core.exceptions import ConfigurationError, ScanRejectedError
from ..qr.decoder import decode_qr_image
from ..qr.payload import QrPayload, parse_payload
from ..qr.signature import SignatureVerifier

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScanResult:
    record: AttendanceRecord
    payload: QrPayload

    @property
    def message(self) -> str:
        return f"{self.record.scan_type.label.capitalize()} recorded for {self.payload.full_name}"

    def to_dict(self) -> dict:
        return {
            "employee_name": self.payload.full_name,
            "department": self.payload.department or "N/A",
            "role": self.payload.role,
            "record": self.record.to_dict(),
        }


class ScanService:
    """Scanner pipeline: parse -> verify signature -> check freshness -> write.

    Every gate must pass before anything is written.
    """

    def __init__(self, verifier: SignatureVerifier, attendance: AttendanceService):
        self._verifier = verifier
        self._attendance = attendance

    def process_text(self, text: str, *, now: Optional[datetime] = None) -> ScanResult:
        """now is naive local time; freshness compares it against the payload timestamp."""
        now = now or now_local()
        try:
            payload = parse_payload(text)
            if not self._verifier.is_configured:
                raise ConfigurationError("Scanner is not configured: QR secret key missing")
            self._verifier.check(payload, now=now)
            record = self._attendance.mark_attendance(payload, now=now)
        except ScanRejectedError as e:
            logger.warning("scan rejected: %s", e)
            raise

        return ScanResult(record=record, payload=payload)

    def process_image(self, stream: BinaryIO, *, now: Optional[datetime] = None) -> ScanResult:
        text = decode_qr_image(stream)
        return self.process_text(text, now=now)
