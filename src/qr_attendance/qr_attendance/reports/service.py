from __future__ import annotations

import calendar
from datetime import date, timedelta
from typing import Iterable, Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import iter_dates, month_bounds
from ..core.enums import ScanType
from ..core.exceptions import ValidationError
from ..leaves.repository import LeaveRepository
from .calculator import StandardHoursCalculator, WorkedHoursCalculator
from .model import DailySummary, DayFold, EmployeeDaySummary, MonthlySummary, PeriodTotals, WeeklySummary


class AttendanceReportService:
    """Read-side folds over persisted scans. Every call re-reads the backend."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        leaves: LeaveRepository,
        *,
        calculator: Optional[WorkedHoursCalculator] = None,
    ):
        self._attendance = attendance
        self._leaves = leaves
        self._calculator = calculator or StandardHoursCalculator()

    def fold_day(self, scans: Iterable[AttendanceRecord]) -> DayFold:
        by_type: dict[ScanType, AttendanceRecord] = {}
        for s in sorted(scans, key=lambda r: r.scanned_at):
            by_type.setdefault(s.scan_type, s)

        check_in = by_type.get(ScanType.CHECK_IN)
        lunch_out = by_type.get(ScanType.LUNCH_OUT)
        lunch_in = by_type.get(ScanType.LUNCH_IN)
        check_out = by_type.get(ScanType.CHECK_OUT)

        worked = self._calculator.worked(
            check_in=check_in.scanned_at if check_in else None,
            lunch_out=lunch_out.scanned_at if lunch_out else None,
            lunch_in=lunch_in.scanned_at if lunch_in else None,
            check_out=check_out.scanned_at if check_out else None,
        )
        return DayFold(
            check_in=check_in,
            lunch_out=lunch_out,
            lunch_in=lunch_in,
            check_out=check_out,
            total_hours=worked.total_hours,
            lunch_duration=worked.lunch_minutes,
        )

    def daily_summary(self, employee_id: str, day: date) -> DailySummary:
        scans = self._attendance.list_for_employee_and_date(employee_id, day)
        leave = self._leaves.get_approved_for(employee_id, day)
        return DailySummary(day=day, fold=self.fold_day(scans), leave=leave)

    def weekly_summary(self, employee_id: str, week_start: date) -> WeeklySummary:
        week_end = week_start + timedelta(days=6)
        daily = self._daily_range(employee_id, week_start, week_end)
        return WeeklySummary(week_start=week_start, week_end=week_end, totals=self._accumulate(daily), daily=daily)

    def monthly_summary(self, employee_id: str, year: int, month: int) -> MonthlySummary:
        if not 1 <= int(month) <= 12:
            raise ValidationError("Month must be between 1 and 12")
        if not 1 <= int(year) <= 9999:
            raise ValidationError("Year must be between 1 and 9999")
        start, end = month_bounds(int(year), int(month))
        daily = self._daily_range(employee_id, start, end)
        return MonthlySummary(
            year=int(year),
            month=int(month),
            month_name=calendar.month_name[int(month)],
            days_in_month=end.day,
            totals=self._accumulate(daily),
            daily=daily,
        )

    def employees_for_date(self, day: date) -> Sequence[EmployeeDaySummary]:
        grouped: dict[str, list[AttendanceRecord]] = {}
        for r in self._attendance.list_for_date(day):
            grouped.setdefault(r.employee_id, []).append(r)

        out: list[EmployeeDaySummary] = []
        for employee_id, scans in grouped.items():
            first = scans[0]
            out.append(
                EmployeeDaySummary(
                    employee_id=employee_id,
                    employee_name=first.employee_name,
                    employee_role=first.employee_role,
                    department=first.department,
                    scans=scans,
                    fold=self.fold_day(scans),
                )
            )
        return out

    def _daily_range(self, employee_id: str, start: date, end: date) -> list[DailySummary]:
        return [self.daily_summary(employee_id, d) for d in iter_dates(start, end)]

    @staticmethod
    def _accumulate(daily: Iterable[DailySummary]) -> PeriodTotals:
        total_hours = 0.0
        working_days = leave_days = late = early = 0

        for d in daily:
            if d.total_hours:
                total_hours += d.total_hours
                working_days += 1
            if d.leave:
                leave_days += 1
            if d.fold.is_late:
                late += 1
            if d.fold.is_early_departure:
                early += 1

        return PeriodTotals(
            total_hours=round(total_hours, 2),
            working_days=working_days,
            leave_days=leave_days,
            late_arrivals=late,
            early_departures=early,
        )
