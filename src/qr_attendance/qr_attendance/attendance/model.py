from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import ScanType


@dataclass(frozen=True)
class AttendanceRecord:
    """One scan event. Immutable once written."""

    record_id: int
    employee_id: str
    employee_name: str
    employee_role: str
    department: Optional[str]
    check_in_time: datetime
    scanned_at: datetime
    scanned_date: date
    scan_type: ScanType
    is_late: bool = False
    is_early_departure: bool = False
    is_half_day: bool = False
    signature_verified: bool = False
    qr_data: Optional[dict] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.record_id,
            "employee_id": self.employee_id,
            "employee_name": self.employee_name,
            "employee_role": self.employee_role,
            "department": self.department,
            "check_in_time": self.check_in_time.isoformat(),
            "scanned_at": self.scanned_at.isoformat(),
            "scanned_date": self.scanned_date.isoformat(),
            "scan_type": self.scan_type.value,
            "is_late": self.is_late,
            "is_early_departure": self.is_early_departure,
            "is_half_day": self.is_half_day,
            "signature_verified": self.signature_verified,
        }
