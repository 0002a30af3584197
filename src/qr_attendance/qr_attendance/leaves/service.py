from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..common.validators import require_choice, require_non_empty
from ..core.enums import LeaveStatus, LeaveType, Role
from ..core.exceptions import AuthorizationError, ValidationError
from .model import LeaveRequest
from .repository import LeaveRepository

logger = logging.getLogger(__name__)

APPROVER_ROLES = {Role.ADMIN, Role.MANAGER}


class LeaveService:
    def __init__(self, leaves: LeaveRepository):
        self._leaves = leaves

    def create_leave(
        self,
        *,
        current_role: Optional[Role],
        requester_id: str,
        employee_id: str,
        leave_date: date,
        leave_type: str,
        reason: str = "",
    ) -> int:
        """Approvers may file for anyone; everyone else only for themselves."""
        employee_id = require_non_empty(employee_id, "Employee id")
        if current_role not in APPROVER_ROLES and employee_id != str(requester_id):
            raise AuthorizationError("You can only request leave for yourself")
        kind = require_choice(leave_type, LeaveType, "Leave type")
        return self._leaves.create(
            employee_id=employee_id,
            leave_date=leave_date,
            leave_type=kind,
            reason=(reason or "").strip(),
        )

    def list_for_employee(self, employee_id: str, *, start_date: date, end_date: date) -> Sequence[LeaveRequest]:
        if end_date < start_date:
            raise ValidationError("End date must be on or after start date")
        return self._leaves.list_for_employee(employee_id, start_date=start_date, end_date=end_date)

    def list_pending(self) -> Sequence[LeaveRequest]:
        return self._leaves.list_by_status(LeaveStatus.PENDING)

    def approve_leave(self, *, current_role: Optional[Role], approver_id: str, request_id: int) -> None:
        self._decide(current_role=current_role, approver_id=approver_id, request_id=request_id, status=LeaveStatus.APPROVED)

    def reject_leave(self, *, current_role: Optional[Role], approver_id: str, request_id: int) -> None:
        self._decide(current_role=current_role, approver_id=approver_id, request_id=request_id, status=LeaveStatus.REJECTED)

    def _decide(self, *, current_role: Optional[Role], approver_id: str, request_id: int, status: LeaveStatus) -> None:
        if current_role not in APPROVER_ROLES:
            raise AuthorizationError("Only administrators can decide leave requests")

        req = self._leaves.get(request_id=int(request_id))
        if not req:
            raise ValidationError("Leave request not found")
        if req.status != LeaveStatus.PENDING:
            raise ValidationError("Leave request has already been decided")

        ok = self._leaves.decide(request_id=int(request_id), status=status, approved_by=approver_id)
        if not ok:
            raise ValidationError("Leave request has already been decided")
        logger.info("leave request %s %s by %s", request_id, status.value, approver_id)
