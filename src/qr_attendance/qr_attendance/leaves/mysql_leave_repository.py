from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

import mysql.connector

from ..core.enums import LeaveStatus, LeaveType
from ..core.exceptions import ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_entry
from .model import LeaveRequest
from .repository import LeaveRepository

_COLUMNS = "id, employee_id, leave_date, leave_type, reason, status, approved_by, approved_at, created_at"


def _to_leave(r: dict) -> LeaveRequest:
    return LeaveRequest(
        request_id=int(r["id"]),
        employee_id=str(r["employee_id"]),
        leave_date=r["leave_date"],
        leave_type=LeaveType(r["leave_type"]),
        reason=r.get("reason") or "",
        status=LeaveStatus(r["status"]),
        approved_by=r.get("approved_by"),
        approved_at=r.get("approved_at"),
        created_at=r.get("created_at"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, employee_id: str, leave_date: date, leave_type: LeaveType, reason: str) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO leave_requests(employee_id, leave_date, leave_type, reason, status)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    (employee_id, leave_date, leave_type.value, reason, LeaveStatus.PENDING.value),
                )
                return int(cur.lastrowid)
        except mysql.connector.IntegrityError as exc:
            if is_duplicate_entry(exc):
                raise ValidationError(f"A leave request already exists for {leave_date.isoformat()}") from exc
            raise

    def get(self, *, request_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leave_requests WHERE id=%s", (int(request_id),))
            r = fetchone(cur)
            return _to_leave(r) if r else None

    def get_approved_for(self, employee_id: str, leave_date: date) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_requests
                WHERE employee_id=%s AND leave_date=%s AND status=%s
                """,
                (employee_id, leave_date, LeaveStatus.APPROVED.value),
            )
            r = fetchone(cur)
            return _to_leave(r) if r else None

    def list_for_employee(self, employee_id: str, *, start_date: date, end_date: date) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_requests
                WHERE employee_id=%s AND leave_date BETWEEN %s AND %s
                ORDER BY leave_date DESC
                """,
                (employee_id, start_date, end_date),
            )
            return [_to_leave(r) for r in fetchall(cur)]

    def list_by_status(self, status: LeaveStatus) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_requests
                WHERE status=%s
                ORDER BY leave_date ASC
                """,
                (status.value,),
            )
            return [_to_leave(r) for r in fetchall(cur)]

    def decide(self, *, request_id: int, status: LeaveStatus, approved_by: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, approved_by=%s, approved_at=NOW()
                WHERE id=%s AND status=%s
                """,
                (status.value, approved_by, int(request_id), LeaveStatus.PENDING.value),
            )
            return cur.rowcount > 0
