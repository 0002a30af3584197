from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus, LeaveType
from .model import LeaveRequest


class LeaveRepository(Protocol):
    def create(self, *, employee_id: str, leave_date: date, leave_type: LeaveType, reason: str) -> int:
        """Raises ValidationError when the employee already has a request for that date."""

        raise NotImplementedError

    def get(self, *, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def get_approved_for(self, employee_id: str, leave_date: date) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: str, *, start_date: date, end_date: date) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def list_by_status(self, status: LeaveStatus) -> Sequence[LeaveRequest]:
        """Ordered by leave date, earliest first."""

        raise NotImplementedError

    def decide(self, *, request_id: int, status: LeaveStatus, approved_by: str) -> bool:
        """Move a pending request to status. False when it is not pending."""

        raise NotImplementedError
