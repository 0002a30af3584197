from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time
from typing import Iterable

from ..common.datetime_utils import minutes_of_day, parse_hhmm
from ..core import constants
from ..core.enums import ScanType
from ..core.exceptions import ScanNotAllowedError


@dataclass(frozen=True)
class WorkdayPolicy:
    """Time-of-day thresholds. Built once at startup and injected."""

    work_start: time = time(9, 0)
    late_grace_minutes: int = constants.DEFAULT_LATE_GRACE_MINUTES
    lunch_start: time = time(12, 0)
    lunch_end: time = time(14, 0)
    work_end: time = time(18, 0)

    @classmethod
    def from_settings(cls, settings) -> "WorkdayPolicy":
        return cls(
            work_start=parse_hhmm(getattr(settings, "WORK_START", constants.DEFAULT_WORK_START)),
            late_grace_minutes=int(getattr(settings, "LATE_GRACE_MINUTES", constants.DEFAULT_LATE_GRACE_MINUTES)),
            lunch_start=parse_hhmm(getattr(settings, "LUNCH_START", constants.DEFAULT_LUNCH_START)),
            lunch_end=parse_hhmm(getattr(settings, "LUNCH_END", constants.DEFAULT_LUNCH_END)),
            work_end=parse_hhmm(getattr(settings, "WORK_END", constants.DEFAULT_WORK_END)),
        )

    @property
    def late_after_minutes(self) -> int:
        return minutes_of_day(self.work_start) + self.late_grace_minutes

    def as_dict(self) -> dict:
        return {
            "work_start": self.work_start.strftime("%H:%M"),
            "late_after": f"{self.late_after_minutes // 60:02d}:{self.late_after_minutes % 60:02d}",
            "lunch_start": self.lunch_start.strftime("%H:%M"),
            "lunch_end": self.lunch_end.strftime("%H:%M"),
            "work_end": self.work_end.strftime("%H:%M"),
        }


@dataclass(frozen=True)
class ScanDecision:
    scan_type: ScanType
    is_late: bool = False
    is_early_departure: bool = False


class ScanClassifier:
    """Decide which of the four daily events the next scan represents.

    Rules, checked in order against the scan types already recorded today:

    1. no check-in             -> check_in (late after work_start + grace)
    2. no lunch-out            -> lunch_out, once the lunch window has opened
    3. no lunch-in             -> lunch_in
    4. no check-out            -> check_out (early before work_end)
    5. all four recorded       -> check_out, which the writer rejects as a duplicate

    A second scan before the lunch window opens matches none of these and is
    refused rather than guessed.
    """

    def __init__(self, policy: WorkdayPolicy | None = None):
        self._policy = policy or WorkdayPolicy()

    @property
    def policy(self) -> WorkdayPolicy:
        return self._policy

    def classify(self, existing: Iterable[ScanType], now: datetime) -> ScanDecision:
        seen = set(existing)
        minutes = minutes_of_day(now)

        if ScanType.CHECK_IN not in seen:
            return ScanDecision(ScanType.CHECK_IN, is_late=minutes > self._policy.late_after_minutes)

        if ScanType.LUNCH_OUT not in seen:
            if minutes >= minutes_of_day(self._policy.lunch_start):
                return ScanDecision(ScanType.LUNCH_OUT)
            raise ScanNotAllowedError(
                f"Already checked in today. Lunch scans open at {self._policy.lunch_start.strftime('%H:%M')}"
            )

        if ScanType.LUNCH_IN not in seen:
            return ScanDecision(ScanType.LUNCH_IN)

        is_early = minutes < minutes_of_day(self._policy.work_end)
        return ScanDecision(ScanType.CHECK_OUT, is_early_departure=is_early)
