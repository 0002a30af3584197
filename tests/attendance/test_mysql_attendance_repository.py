from __future__ import annotations

from datetime import datetime

import mysql.connector
import pytest
from mysql.connector import errorcode

from src.qr_attendance.qr_attendance.attendance.mysql_attendance_repository import MySQLAttendanceRepository
from src.qr_attendance.qr_attendance.core.enums import ScanType
from src.qr_attendance.qr_attendance.core.exceptions import BackendError, DuplicateScanError


class StubCursor:
    def __init__(self, error=None):
        self._error = error
        self.lastrowid = 7
        self.closed = False
        self.statements = []

    def execute(self, sql, params=None):
        self.statements.append((sql, params))
        if self._error is not None:
            raise self._error

    def close(self):
        self.closed = True


class StubConnection:
    def __init__(self, cursor: StubCursor):
        self._cursor = cursor
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=False):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class StubFactory:
    def __init__(self, conn=None, connect_error=None):
        self._conn = conn
        self._connect_error = connect_error

    def connect(self):
        if self._connect_error is not None:
            raise self._connect_error
        return self._conn


def _insert(repo: MySQLAttendanceRepository, scan_type: ScanType = ScanType.CHECK_IN) -> int:
    at = datetime(2026, 2, 2, 9, 0)
    return repo.create(
        employee_id="emp-42",
        employee_name="Ana Silva",
        employee_role="engineer",
        department=None,
        check_in_time=at,
        scanned_at=at,
        scan_type=scan_type,
        is_late=False,
        is_early_departure=False,
        is_half_day=True,
        signature_verified=True,
        qr_data={"employeeId": "emp-42"},
    )


def test_insert_commits_and_returns_id():
    conn = StubConnection(StubCursor())

    assert _insert(MySQLAttendanceRepository(StubFactory(conn))) == 7
    assert conn.committed and conn.closed
    assert not conn.rolled_back


def test_unique_key_violation_becomes_duplicate_scan():
    dup = mysql.connector.IntegrityError(msg="Duplicate entry 'emp-42-2026-02-02-lunch_out'", errno=errorcode.ER_DUP_ENTRY)
    cursor = StubCursor(dup)
    conn = StubConnection(cursor)

    with pytest.raises(DuplicateScanError, match="Lunch out already recorded for today"):
        _insert(MySQLAttendanceRepository(StubFactory(conn)), ScanType.LUNCH_OUT)

    assert conn.rolled_back is True
    assert conn.committed is False
    assert conn.closed is True
    assert cursor.closed is True


def test_other_integrity_errors_keep_driver_message():
    err = mysql.connector.IntegrityError(msg="Column 'employee_name' cannot be null", errno=errorcode.ER_BAD_NULL_ERROR)
    conn = StubConnection(StubCursor(err))

    with pytest.raises(BackendError, match="cannot be null") as exc_info:
        _insert(MySQLAttendanceRepository(StubFactory(conn)))

    assert not isinstance(exc_info.value, DuplicateScanError)
    assert conn.rolled_back and conn.closed and not conn.committed


def test_unreachable_backend_surfaces_driver_message():
    down = mysql.connector.InterfaceError(msg="Can't connect to MySQL server on 'db:3306'", errno=2003)
    repo = MySQLAttendanceRepository(StubFactory(connect_error=down))

    with pytest.raises(BackendError, match="Can't connect to MySQL server"):
        repo.list_for_date(datetime(2026, 2, 2).date())
