from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..attendance.model import AttendanceRecord
from ..leaves.model import LeaveRequest


def _time_or_none(record: Optional[AttendanceRecord]) -> Optional[str]:
    return record.scanned_at.isoformat() if record else None


@dataclass(frozen=True)
class DayFold:
    """Scans of one employee for one day, folded by scan type."""

    check_in: Optional[AttendanceRecord]
    lunch_out: Optional[AttendanceRecord]
    lunch_in: Optional[AttendanceRecord]
    check_out: Optional[AttendanceRecord]
    total_hours: Optional[float]
    lunch_duration: Optional[int]

    @property
    def is_complete(self) -> bool:
        return bool(self.check_in and self.check_out)

    @property
    def is_late(self) -> bool:
        return bool(self.check_in and self.check_in.is_late)

    @property
    def is_early_departure(self) -> bool:
        return bool(self.check_out and self.check_out.is_early_departure)

    @property
    def is_half_day(self) -> bool:
        return bool(self.check_in and self.check_in.is_half_day)

    def to_dict(self) -> dict:
        return {
            "check_in": _time_or_none(self.check_in),
            "lunch_out": _time_or_none(self.lunch_out),
            "lunch_in": _time_or_none(self.lunch_in),
            "check_out": _time_or_none(self.check_out),
            "total_hours": self.total_hours,
            "lunch_duration": self.lunch_duration,
            "is_complete": self.is_complete,
            "is_half_day": self.is_half_day,
            "is_late": self.is_late,
            "is_early_departure": self.is_early_departure,
        }


@dataclass(frozen=True)
class DailySummary:
    day: date
    fold: DayFold
    leave: Optional[LeaveRequest] = None

    @property
    def total_hours(self) -> Optional[float]:
        return self.fold.total_hours

    def to_dict(self) -> dict:
        out = {"date": self.day.isoformat()}
        out.update(self.fold.to_dict())
        out["leave"] = self.leave.to_dict() if self.leave else None
        return out


@dataclass(frozen=True)
class PeriodTotals:
    total_hours: float = 0.0
    working_days: int = 0
    leave_days: int = 0
    late_arrivals: int = 0
    early_departures: int = 0

    @property
    def average_hours(self) -> float:
        if self.working_days <= 0:
            return 0.0
        return round(self.total_hours / self.working_days, 2)

    def to_dict(self) -> dict:
        return {
            "total_hours": round(self.total_hours, 2),
            "working_days": self.working_days,
            "leave_days": self.leave_days,
            "late_arrivals": self.late_arrivals,
            "early_departures": self.early_departures,
            "average_hours": self.average_hours,
        }


@dataclass(frozen=True)
class WeeklySummary:
    week_start: date
    week_end: date
    totals: PeriodTotals
    daily: list[DailySummary] = field(default_factory=list)

    def to_dict(self) -> dict:
        out = {"week_start": self.week_start.isoformat(), "week_end": self.week_end.isoformat()}
        out.update(self.totals.to_dict())
        out["daily_summaries"] = [d.to_dict() for d in self.daily]
        return out


@dataclass(frozen=True)
class MonthlySummary:
    year: int
    month: int
    month_name: str
    days_in_month: int
    totals: PeriodTotals
    daily: list[DailySummary] = field(default_factory=list)

    @property
    def attendance_percentage(self) -> float:
        expected_days = self.days_in_month - self.totals.leave_days
        if expected_days <= 0:
            return 0.0
        return round(self.totals.working_days / expected_days * 100, 1)

    def to_dict(self) -> dict:
        out = {"year": self.year, "month": self.month, "month_name": self.month_name}
        out.update(self.totals.to_dict())
        out["attendance_percentage"] = self.attendance_percentage
        out["daily_summaries"] = [d.to_dict() for d in self.daily]
        return out


@dataclass(frozen=True)
class EmployeeDaySummary:
    """Admin day view row: one employee's scans for the selected date."""

    employee_id: str
    employee_name: str
    employee_role: str
    department: Optional[str]
    scans: list[AttendanceRecord]
    fold: DayFold

    def to_dict(self) -> dict:
        out = {
            "employee_id": self.employee_id,
            "employee_name": self.employee_name,
            "role": self.employee_role,
            "department": self.department,
            "scans": [s.to_dict() for s in self.scans],
        }
        out.update(self.fold.to_dict())
        return out

    def to_csv_row(self) -> dict:
        def hhmm(record: Optional[AttendanceRecord]) -> str:
            return record.scanned_at.strftime("%H:%M") if record else "-"

        return {
            "employee_id": self.employee_id,
            "employee_name": self.employee_name,
            "role": self.employee_role,
            "department": self.department or "-",
            "check_in": hhmm(self.fold.check_in),
            "lunch_out": hhmm(self.fold.lunch_out),
            "lunch_in": hhmm(self.fold.lunch_in),
            "check_out": hhmm(self.fold.check_out),
            "total_hours": "" if self.fold.total_hours is None else f"{self.fold.total_hours:.2f}",
            "is_complete": "yes" if self.fold.is_complete else "no",
            "is_late": "yes" if self.fold.is_late else "no",
            "is_early_departure": "yes" if self.fold.is_early_departure else "no",
        }
