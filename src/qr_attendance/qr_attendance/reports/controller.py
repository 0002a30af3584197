from __future__ import annotations

import csv
import io
from datetime import date

from flask import Flask, jsonify, request

from ..auth.controller import admin_required
from ..common.datetime_utils import week_start_for
from ..common.responses import error_response, failure, parse_date_arg
from ..core.exceptions import DomainError
from ..container import Container

CSV_FIELDS = [
    "employee_id",
    "employee_name",
    "role",
    "department",
    "check_in",
    "lunch_out",
    "lunch_in",
    "check_out",
    "total_hours",
    "is_complete",
    "is_late",
    "is_early_departure",
]


def register(app: Flask, container: Container) -> None:
    def _write_day_csv(*, rows, filename: str):
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=CSV_FIELDS)
        writer.writeheader()
        for row in rows:
            writer.writerow(row.to_csv_row())

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/employees/<employee_id>/summary/daily", methods=["GET"], endpoint="daily_summary")
    def daily_summary(employee_id: str):
        try:
            day = parse_date_arg(request.args.get("date"), date.today())
        except ValueError:
            return failure("Invalid date (YYYY-MM-DD)")

        try:
            summary = container.report_service.daily_summary(employee_id, day)
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "data": summary.to_dict()})

    @app.route("/api/employees/<employee_id>/summary/weekly", methods=["GET"], endpoint="weekly_summary")
    def weekly_summary(employee_id: str):
        try:
            week_start = parse_date_arg(request.args.get("week_start"), week_start_for(date.today()))
        except ValueError:
            return failure("Invalid week_start (YYYY-MM-DD)")

        try:
            summary = container.report_service.weekly_summary(employee_id, week_start)
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "data": summary.to_dict()})

    @app.route("/api/employees/<employee_id>/summary/monthly", methods=["GET"], endpoint="monthly_summary")
    def monthly_summary(employee_id: str):
        today = date.today()
        year = request.args.get("year", today.year, type=int)
        month = request.args.get("month", today.month, type=int)

        try:
            summary = container.report_service.monthly_summary(employee_id, year, month)
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "data": summary.to_dict()})

    @app.route("/admin/attendance", methods=["GET"], endpoint="admin_attendance")
    @admin_required
    def admin_attendance():
        try:
            day = parse_date_arg(request.args.get("date"), date.today())
        except ValueError:
            return failure("Invalid date (YYYY-MM-DD)")

        try:
            rows = container.report_service.employees_for_date(day)
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "date": day.isoformat(), "data": [r.to_dict() for r in rows]})

    @app.route("/admin/attendance.csv", methods=["GET"], endpoint="admin_attendance_csv")
    @admin_required
    def admin_attendance_csv():
        try:
            day = parse_date_arg(request.args.get("date"), date.today())
        except ValueError:
            return failure("Invalid date (YYYY-MM-DD)")

        try:
            rows = container.report_service.employees_for_date(day)
        except DomainError as e:
            return error_response(e)
        return _write_day_csv(rows=rows, filename=f"attendance_{day.strftime('%Y%m%d')}.csv")
