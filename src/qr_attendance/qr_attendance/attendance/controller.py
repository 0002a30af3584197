from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.responses import error_response, failure
from ..core.constants import DEFAULT_EMPLOYEE_HISTORY_LIMIT, DEFAULT_RECORDS_LIMIT
from ..core.enums import RecordsFilter
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_records")
    def attendance_records():
        try:
            records_filter = RecordsFilter(request.args.get("filter", RecordsFilter.ALL.value))
        except ValueError:
            return failure("filter must be one of: all, today, week, month")
        limit = request.args.get("limit", DEFAULT_RECORDS_LIMIT, type=int)

        try:
            rows = container.attendance_service.list_records(records_filter=records_filter, limit=limit)
        except DomainError as e:
            return error_response(e)

        return jsonify({"success": True, "data": [r.to_dict() for r in rows], "total": len(rows)})

    @app.route("/api/employees/<employee_id>/attendance", methods=["GET"], endpoint="employee_attendance")
    def employee_attendance(employee_id: str):
        limit = request.args.get("limit", DEFAULT_EMPLOYEE_HISTORY_LIMIT, type=int)
        try:
            rows = container.attendance_service.list_for_employee(employee_id, limit=limit)
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "data": [r.to_dict() for r in rows]})
