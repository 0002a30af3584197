from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles allowed to act on the admin side."""

    ADMIN = "admin"
    MANAGER = "manager"
    EMPLOYEE = "employee"


class ScanType(str, Enum):
    """The four ordered daily scan events."""

    CHECK_IN = "check_in"
    LUNCH_OUT = "lunch_out"
    LUNCH_IN = "lunch_in"
    CHECK_OUT = "check_out"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ")


class LeaveType(str, Enum):
    FULL_DAY = "full_day"
    HALF_DAY_MORNING = "half_day_morning"
    HALF_DAY_AFTERNOON = "half_day_afternoon"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ")


class LeaveStatus(str, Enum):
    """Approval workflow state of a leave request."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class RecordsFilter(str, Enum):
    ALL = "all"
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
