from __future__ import annotations

from datetime import date

import pytest

from src.qr_attendance.qr_attendance.core.enums import LeaveStatus, LeaveType, Role
from src.qr_attendance.qr_attendance.core.exceptions import AuthorizationError, ValidationError
from src.qr_attendance.qr_attendance.leaves.service import LeaveService
from tests.fakes import InMemoryLeaves


def _service():
    repo = InMemoryLeaves()
    return LeaveService(repo), repo


def test_create_leave_starts_pending():
    svc, repo = _service()

    rid = svc.create_leave(current_role=Role.ADMIN, requester_id="boss-1", employee_id="emp-1", leave_date=date(2026, 2, 10), leave_type="full_day", reason=" dentist ")

    req = repo.get(request_id=rid)
    assert req.status == LeaveStatus.PENDING
    assert req.leave_type == LeaveType.FULL_DAY
    assert req.reason == "dentist"


def test_create_leave_rejects_unknown_type():
    svc, _ = _service()
    with pytest.raises(ValidationError, match="Leave type"):
        svc.create_leave(current_role=Role.ADMIN, requester_id="boss-1", employee_id="emp-1", leave_date=date(2026, 2, 10), leave_type="sabbatical")


def test_create_leave_requires_employee():
    svc, _ = _service()
    with pytest.raises(ValidationError, match="Employee id"):
        svc.create_leave(current_role=Role.ADMIN, requester_id="boss-1", employee_id="  ", leave_date=date(2026, 2, 10), leave_type="full_day")


def test_one_request_per_employee_and_date():
    svc, _ = _service()
    svc.create_leave(current_role=Role.ADMIN, requester_id="boss-1", employee_id="emp-1", leave_date=date(2026, 2, 10), leave_type="full_day")

    with pytest.raises(ValidationError):
        svc.create_leave(current_role=Role.ADMIN, requester_id="boss-1", employee_id="emp-1", leave_date=date(2026, 2, 10), leave_type="half_day_morning")


@pytest.mark.parametrize("role", [Role.ADMIN, Role.MANAGER])
def test_approver_can_approve(role):
    svc, repo = _service()
    rid = svc.create_leave(current_role=Role.ADMIN, requester_id="boss-1", employee_id="emp-1", leave_date=date(2026, 2, 10), leave_type="full_day")

    svc.approve_leave(current_role=role, approver_id="boss-1", request_id=rid)

    req = repo.get(request_id=rid)
    assert req.status == LeaveStatus.APPROVED
    assert req.approved_by == "boss-1"
    assert repo.get_approved_for("emp-1", date(2026, 2, 10)) is not None


@pytest.mark.parametrize("role", [Role.EMPLOYEE, None])
def test_non_approver_is_refused(role):
    svc, repo = _service()
    rid = svc.create_leave(current_role=Role.ADMIN, requester_id="boss-1", employee_id="emp-1", leave_date=date(2026, 2, 10), leave_type="full_day")

    with pytest.raises(AuthorizationError):
        svc.approve_leave(current_role=role, approver_id="emp-2", request_id=rid)
    assert repo.get(request_id=rid).status == LeaveStatus.PENDING


def test_decided_request_cannot_be_decided_again():
    svc, repo = _service()
    rid = svc.create_leave(current_role=Role.ADMIN, requester_id="boss-1", employee_id="emp-1", leave_date=date(2026, 2, 10), leave_type="full_day")
    svc.reject_leave(current_role=Role.ADMIN, approver_id="boss-1", request_id=rid)

    with pytest.raises(ValidationError, match="already been decided"):
        svc.approve_leave(current_role=Role.ADMIN, approver_id="boss-1", request_id=rid)
    assert repo.get(request_id=rid).status == LeaveStatus.REJECTED


def test_unknown_request():
    svc, _ = _service()
    with pytest.raises(ValidationError, match="not found"):
        svc.approve_leave(current_role=Role.ADMIN, approver_id="boss-1", request_id=999)


def test_list_pending_ordered_by_leave_date():
    svc, _ = _service()
    svc.create_leave(current_role=Role.ADMIN, requester_id="boss-1", employee_id="emp-1", leave_date=date(2026, 2, 20), leave_type="full_day")
    svc.create_leave(current_role=Role.ADMIN, requester_id="boss-1", employee_id="emp-2", leave_date=date(2026, 2, 5), leave_type="half_day_afternoon")
    decided = svc.create_leave(current_role=Role.ADMIN, requester_id="boss-1", employee_id="emp-3", leave_date=date(2026, 2, 1), leave_type="full_day")
    svc.approve_leave(current_role=Role.ADMIN, approver_id="boss-1", request_id=decided)

    pending = svc.list_pending()

    assert [r.employee_id for r in pending] == ["emp-2", "emp-1"]


def test_list_for_employee_range():
    svc, _ = _service()
    svc.create_leave(current_role=Role.ADMIN, requester_id="boss-1", employee_id="emp-1", leave_date=date(2026, 1, 15), leave_type="full_day")
    svc.create_leave(current_role=Role.ADMIN, requester_id="boss-1", employee_id="emp-1", leave_date=date(2026, 2, 15), leave_type="full_day")

    rows = svc.list_for_employee("emp-1", start_date=date(2026, 2, 1), end_date=date(2026, 2, 28))

    assert [r.leave_date for r in rows] == [date(2026, 2, 15)]


def test_list_for_employee_rejects_inverted_range():
    svc, _ = _service()
    with pytest.raises(ValidationError):
        svc.list_for_employee("emp-1", start_date=date(2026, 2, 28), end_date=date(2026, 2, 1))


def test_employee_files_leave_for_themselves():
    svc, repo = _service()

    rid = svc.create_leave(
        current_role=Role.EMPLOYEE, requester_id="emp-1", employee_id="emp-1", leave_date=date(2026, 2, 10), leave_type="full_day"
    )

    assert repo.get(request_id=rid).employee_id == "emp-1"


@pytest.mark.parametrize("role", [Role.EMPLOYEE, None])
def test_employee_cannot_file_leave_for_someone_else(role):
    svc, repo = _service()

    with pytest.raises(AuthorizationError):
        svc.create_leave(
            current_role=role, requester_id="emp-1", employee_id="emp-2", leave_date=date(2026, 2, 10), leave_type="full_day"
        )
    assert repo.rows == {}
