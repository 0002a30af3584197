from __future__ import annotations

import json
from datetime import date, datetime
from typing import Optional, Sequence

import mysql.connector

from ..core.enums import ScanType
from ..core.exceptions import DuplicateScanError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, is_duplicate_entry, load_json_column
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = """
    id, employee_id, employee_name, employee_role, department,
    check_in_time, scanned_at, scanned_date, scan_type,
    is_late, is_early_departure, is_half_day, signature_verified,
    qr_data, created_at, updated_at
"""


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=int(r["id"]),
        employee_id=str(r["employee_id"]),
        employee_name=r["employee_name"],
        employee_role=r["employee_role"],
        department=r.get("department"),
        check_in_time=r["check_in_time"],
        scanned_at=r["scanned_at"],
        scanned_date=r["scanned_date"],
        scan_type=ScanType(r["scan_type"]),
        is_late=bool(r["is_late"]),
        is_early_departure=bool(r["is_early_departure"]),
        is_half_day=bool(r["is_half_day"]),
        signature_verified=bool(r["signature_verified"]),
        qr_data=load_json_column(r.get("qr_data")),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_employee_and_date(self, employee_id: str, scanned_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE employee_id=%s AND scanned_date=%s
                ORDER BY scanned_at ASC
                """,
                (employee_id, scanned_date),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        employee_id: str,
        employee_name: str,
        employee_role: str,
        department: Optional[str],
        check_in_time: datetime,
        scanned_at: datetime,
        scan_type: ScanType,
        is_late: bool,
        is_early_departure: bool,
        is_half_day: bool,
        signature_verified: bool,
        qr_data: Optional[dict],
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(
                        employee_id, employee_name, employee_role, department,
                        check_in_time, scanned_at, scanned_date, scan_type,
                        is_late, is_early_departure, is_half_day, signature_verified, qr_data
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        employee_id,
                        employee_name,
                        employee_role,
                        department,
                        check_in_time,
                        scanned_at,
                        scanned_at.date(),
                        scan_type.value,
                        int(is_late),
                        int(is_early_departure),
                        int(is_half_day),
                        int(signature_verified),
                        json.dumps(qr_data) if qr_data is not None else None,
                    ),
                )
                return int(cur.lastrowid)
        except mysql.connector.IntegrityError as exc:
            if is_duplicate_entry(exc):
                raise DuplicateScanError(f"{scan_type.label.capitalize()} already recorded for today") from exc
            raise

    def list_recent(self, *, limit: int, since: Optional[datetime] = None) -> Sequence[AttendanceRecord]:
        clauses = ["1=1"]
        params: list[object] = []
        if since is not None:
            clauses.append("scanned_at >= %s")
            params.append(since)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE {where}
                ORDER BY scanned_at DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_employee(self, employee_id: str, *, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE employee_id=%s
                ORDER BY scanned_at DESC
                LIMIT %s
                """,
                (employee_id, int(limit)),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_date(self, scanned_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE scanned_date=%s
                ORDER BY scanned_at ASC
                """,
                (scanned_date,),
            )
            return [_to_record(r) for r in fetchall(cur)]
