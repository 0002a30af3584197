from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Optional

from ..core.exceptions import MalformedPayloadError

REQUIRED_FIELDS = ("employeeId", "firstName", "lastName", "role", "checkInTime", "signature")


@dataclass(frozen=True)
class QrPayload:
    """Decoded QR payload emitted by the mobile app. Never persisted as-is."""

    employee_id: str
    first_name: str
    last_name: str
    role: str
    department: Optional[str]
    check_in_time: str
    signature: str
    raw: dict = field(default_factory=dict, compare=False, repr=False)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @classmethod
    def from_dict(cls, data: Any) -> "QrPayload":
        if not validate_structure(data):
            raise MalformedPayloadError("QR code missing required fields")
        return cls(
            employee_id=_text(data["employeeId"]),
            first_name=_text(data["firstName"]),
            last_name=_text(data["lastName"]),
            role=_text(data["role"]),
            department=_text(data["department"]) if data.get("department") else None,
            check_in_time=_text(data["checkInTime"]),
            signature=_text(data["signature"]),
            raw=dict(data),
        )

    def to_dict(self) -> dict:
        if self.raw:
            return dict(self.raw)
        return {
            "employeeId": self.employee_id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "role": self.role,
            "department": self.department,
            "checkInTime": self.check_in_time,
            "signature": self.signature,
        }


def _text(value: Any) -> str:
    return value if isinstance(value, str) else str(value)


def validate_structure(data: Any) -> bool:
    """Every required field present and non-empty; department is optional."""
    if not isinstance(data, dict):
        return False
    return all(data.get(name) not in (None, "", 0, False) for name in REQUIRED_FIELDS)


def parse_payload(text: str) -> QrPayload:
    try:
        data = json.loads(text)
    except (TypeError, ValueError):
        raise MalformedPayloadError("Invalid QR code format")
    return QrPayload.from_dict(data)
