from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Optional, Sequence

from ..common.datetime_utils import now_local, parse_iso_datetime
from ..core.constants import DEFAULT_EMPLOYEE_HISTORY_LIMIT, DEFAULT_RECORDS_LIMIT
from ..core.enums import RecordsFilter, ScanType
from ..core.exceptions import DuplicateScanError, MalformedPayloadError, OnLeaveError
from ..leaves.repository import LeaveRepository
from ..qr.payload import QrPayload
from .classifier import ScanClassifier
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        leaves: LeaveRepository,
        *,
        classifier: ScanClassifier | None = None,
    ):
        self._attendance = attendance
        self._leaves = leaves
        self._classifier = classifier or ScanClassifier()

    def mark_attendance(self, payload: QrPayload, *, now: datetime | None = None) -> AttendanceRecord:
        """Write one scan for an already verified payload.

        Gates, in order: approved leave, classification, duplicate scan type.
        """
        now = now or now_local()
        today = now.date()

        leave = self._leaves.get_approved_for(payload.employee_id, today)
        if leave:
            raise OnLeaveError(f"Employee is on approved leave today ({leave.leave_type.label})")

        existing = self._attendance.list_for_employee_and_date(payload.employee_id, today)
        decision = self._classifier.classify((r.scan_type for r in existing), now)

        if any(r.scan_type == decision.scan_type for r in existing):
            raise DuplicateScanError(f"{decision.scan_type.label.capitalize()} already recorded for today")

        is_half_day = decision.scan_type == ScanType.CHECK_IN and now.hour < 12
        check_in_time = self._claimed_time(payload)

        record_id = self._attendance.create(
            employee_id=payload.employee_id,
            employee_name=payload.full_name,
            employee_role=payload.role,
            department=payload.department,
            check_in_time=check_in_time,
            scanned_at=now,
            scan_type=decision.scan_type,
            is_late=decision.is_late,
            is_early_departure=decision.is_early_departure,
            is_half_day=is_half_day,
            signature_verified=True,
            qr_data=payload.to_dict(),
        )
        logger.info(
            "recorded %s for employee %s (late=%s early=%s)",
            decision.scan_type.value,
            payload.employee_id,
            decision.is_late,
            decision.is_early_departure,
        )

        return AttendanceRecord(
            record_id=record_id,
            employee_id=payload.employee_id,
            employee_name=payload.full_name,
            employee_role=payload.role,
            department=payload.department,
            check_in_time=check_in_time,
            scanned_at=now,
            scanned_date=today,
            scan_type=decision.scan_type,
            is_late=decision.is_late,
            is_early_departure=decision.is_early_departure,
            is_half_day=is_half_day,
            signature_verified=True,
            qr_data=payload.to_dict(),
        )

    @staticmethod
    def _claimed_time(payload: QrPayload) -> datetime:
        # Stored as naive local time, like scanned_at.
        try:
            stamp = parse_iso_datetime(payload.check_in_time)
        except ValueError:
            raise MalformedPayloadError("QR code timestamp is not ISO-8601")
        return stamp.astimezone().replace(tzinfo=None)

    def list_records(
        self,
        *,
        records_filter: RecordsFilter = RecordsFilter.ALL,
        limit: int = DEFAULT_RECORDS_LIMIT,
        now: Optional[datetime] = None,
    ) -> Sequence[AttendanceRecord]:
        now = now or now_local()
        since = {
            RecordsFilter.ALL: None,
            RecordsFilter.TODAY: datetime.combine(now.date(), datetime.min.time()),
            RecordsFilter.WEEK: now - timedelta(days=7),
            RecordsFilter.MONTH: now - timedelta(days=30),
        }[records_filter]
        return self._attendance.list_recent(limit=int(limit), since=since)

    def list_for_employee(self, employee_id: str, *, limit: int = DEFAULT_EMPLOYEE_HISTORY_LIMIT) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_employee(employee_id, limit=int(limit))
