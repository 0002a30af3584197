from datetime import datetime, time

import pytest

from src.qr_attendance.qr_attendance.attendance.classifier import ScanClassifier, WorkdayPolicy
from src.qr_attendance.qr_attendance.core.enums import ScanType
from src.qr_attendance.qr_attendance.core.exceptions import ScanNotAllowedError

DAY = (2026, 2, 2)
ALL_FOUR = [ScanType.CHECK_IN, ScanType.LUNCH_OUT, ScanType.LUNCH_IN, ScanType.CHECK_OUT]


def at(hour: int, minute: int = 0) -> datetime:
    return datetime(*DAY, hour, minute)


@pytest.mark.parametrize("hour", [6, 9, 12, 17, 23])
def test_first_scan_of_day_is_always_check_in(hour):
    decision = ScanClassifier().classify([], at(hour))
    assert decision.scan_type == ScanType.CHECK_IN


def test_check_in_at_end_of_grace_is_not_late():
    assert ScanClassifier().classify([], at(9, 15)).is_late is False


def test_check_in_after_grace_is_late():
    assert ScanClassifier().classify([], at(9, 16)).is_late is True


def test_lunch_out_once_lunch_window_opens():
    decision = ScanClassifier().classify([ScanType.CHECK_IN], at(12, 0))
    assert decision.scan_type == ScanType.LUNCH_OUT
    assert not decision.is_late and not decision.is_early_departure


def test_second_scan_before_noon_is_refused():
    with pytest.raises(ScanNotAllowedError, match="12:00"):
        ScanClassifier().classify([ScanType.CHECK_IN], at(11, 59))


def test_lunch_in_follows_lunch_out():
    decision = ScanClassifier().classify([ScanType.CHECK_IN, ScanType.LUNCH_OUT], at(12, 40))
    assert decision.scan_type == ScanType.LUNCH_IN


def test_check_out_before_work_end_is_early():
    decision = ScanClassifier().classify(ALL_FOUR[:3], at(17, 59))
    assert decision.scan_type == ScanType.CHECK_OUT
    assert decision.is_early_departure is True


def test_check_out_after_work_end_is_not_early():
    decision = ScanClassifier().classify(ALL_FOUR[:3], at(18, 1))
    assert decision.scan_type == ScanType.CHECK_OUT
    assert decision.is_early_departure is False


def test_full_day_falls_through_to_check_out():
    assert ScanClassifier().classify(ALL_FOUR, at(19)).scan_type == ScanType.CHECK_OUT


def test_injected_policy_moves_thresholds():
    policy = WorkdayPolicy(work_start=time(8, 0), late_grace_minutes=5, lunch_start=time(11, 30), work_end=time(17, 0))
    classifier = ScanClassifier(policy)

    assert classifier.classify([], at(8, 6)).is_late is True
    assert classifier.classify([ScanType.CHECK_IN], at(11, 30)).scan_type == ScanType.LUNCH_OUT
    assert classifier.classify(ALL_FOUR[:3], at(17, 0)).is_early_departure is False


def test_policy_from_settings_reads_hhmm_strings():
    class Settings:
        WORK_START = "08:30"
        LATE_GRACE_MINUTES = 10
        LUNCH_START = "12:30"
        LUNCH_END = "13:30"
        WORK_END = "17:30"

    policy = WorkdayPolicy.from_settings(Settings)

    assert policy.late_after_minutes == 8 * 60 + 40
    assert policy.as_dict()["late_after"] == "08:40"
    assert policy.work_end == time(17, 30)
