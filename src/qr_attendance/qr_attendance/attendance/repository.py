from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import ScanType
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def list_for_employee_and_date(self, employee_id: str, scanned_date: date) -> Sequence[AttendanceRecord]:
        """Records of one employee for one day, oldest scan first."""

        raise NotImplementedError

    def create(
        self,
        *,
        employee_id: str,
        employee_name: str,
        employee_role: str,
        department: Optional[str],
        check_in_time: datetime,
        scanned_at: datetime,
        scan_type: ScanType,
        is_late: bool,
        is_early_departure: bool,
        is_half_day: bool,
        signature_verified: bool,
        qr_data: Optional[dict],
    ) -> int:
        """Insert-if-absent on (employee_id, scanned_date, scan_type).

        Raises DuplicateScanError when the key already exists; no row is written.
        """

        raise NotImplementedError

    def list_recent(self, *, limit: int, since: Optional[datetime] = None) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: str, *, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_date(self, scanned_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
