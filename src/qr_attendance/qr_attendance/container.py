from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.classifier import ScanClassifier, WorkdayPolicy
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .auth.service import AuthService
from .database.connection import DBConfig, DatabaseConnection
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.service import LeaveService
from .qr.signature import SignatureVerifier
from .reports.service import AttendanceReportService
from .scanning.service import ScanService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection
    verifier: SignatureVerifier
    policy: WorkdayPolicy

    auth_service: AuthService
    attendance_service: AttendanceService
    leave_service: LeaveService
    report_service: AttendanceReportService
    scan_service: ScanService


def build_container(
    *,
    db_config: Optional[DBConfig],
    qr_secret_key: Optional[str],
    policy: Optional[WorkdayPolicy] = None,
    auth_service: Optional[AuthService] = None,
) -> Container:
    """Wire the object graph. db_config=None yields a container whose backend calls fail cleanly."""

    policy = policy or WorkdayPolicy()
    conn = DatabaseConnection(db_config)

    attendance_repo = MySQLAttendanceRepository(conn)
    leaves_repo = MySQLLeaveRepository(conn)

    verifier = SignatureVerifier(qr_secret_key)
    attendance_service = AttendanceService(attendance_repo, leaves_repo, classifier=ScanClassifier(policy))
    leave_service = LeaveService(leaves_repo)
    report_service = AttendanceReportService(attendance_repo, leaves_repo)
    scan_service = ScanService(verifier, attendance_service)

    return Container(
        conn=conn,
        verifier=verifier,
        policy=policy,
        auth_service=auth_service or AuthService(),
        attendance_service=attendance_service,
        leave_service=leave_service,
        report_service=report_service,
        scan_service=scan_service,
    )
