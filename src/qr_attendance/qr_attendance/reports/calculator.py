from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class WorkedTime:
    total_hours: Optional[float]
    lunch_minutes: Optional[int]


class WorkedHoursCalculator(ABC):
    """Calculator interface (Strategy Pattern for worked hours)."""

    @abstractmethod
    def worked(
        self,
        *,
        check_in: Optional[datetime],
        lunch_out: Optional[datetime],
        lunch_in: Optional[datetime],
        check_out: Optional[datetime],
    ) -> WorkedTime:
        raise NotImplementedError


class StandardHoursCalculator(WorkedHoursCalculator):
    """Standard rule: (out - in) - lunch, lunch counted only when both lunch scans exist."""

    def worked(
        self,
        *,
        check_in: Optional[datetime],
        lunch_out: Optional[datetime],
        lunch_in: Optional[datetime],
        check_out: Optional[datetime],
    ) -> WorkedTime:
        lunch_minutes: Optional[float] = None
        if lunch_out and lunch_in:
            lunch_minutes = (lunch_in - lunch_out).total_seconds() / 60

        total_hours: Optional[float] = None
        if check_in and check_out:
            minutes = (check_out - check_in).total_seconds() / 60
            minutes -= lunch_minutes or 0
            total_hours = round(minutes / 60, 2)

        return WorkedTime(
            total_hours=total_hours,
            lunch_minutes=math.floor(lunch_minutes + 0.5) if lunch_minutes is not None else None,
        )
