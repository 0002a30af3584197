from __future__ import annotations

from datetime import date, timedelta
from typing import Optional

from flask import Flask, jsonify, request, session

from ..auth.controller import admin_required, login_required
from ..common.responses import error_response, failure, parse_date_arg
from ..core.enums import Role
from ..core.exceptions import DomainError
from ..container import Container


def _session_role() -> Optional[Role]:
    try:
        return Role(session.get("role"))
    except ValueError:
        return None


def register(app: Flask, container: Container) -> None:
    @app.route("/api/leaves", methods=["POST"], endpoint="create_leave")
    @login_required
    def create_leave():
        data = request.get_json(silent=True) or {}
        if not isinstance(data, dict):
            return failure("Invalid request body")
        try:
            leave_date = parse_date_arg(data.get("leave_date"), None)
        except ValueError:
            return failure("Invalid leave_date (YYYY-MM-DD)")
        if leave_date is None:
            return failure("leave_date is required")

        try:
            request_id = container.leave_service.create_leave(
                current_role=_session_role(),
                requester_id=str(session["user_id"]),
                employee_id=data.get("employee_id", ""),
                leave_date=leave_date,
                leave_type=data.get("leave_type", ""),
                reason=data.get("reason", ""),
            )
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "id": request_id, "message": "Leave request submitted"}), 201

    @app.route("/api/employees/<employee_id>/leaves", methods=["GET"], endpoint="employee_leaves")
    def employee_leaves(employee_id: str):
        today = date.today()
        try:
            start = parse_date_arg(request.args.get("start"), today - timedelta(days=30))
            end = parse_date_arg(request.args.get("end"), today + timedelta(days=30))
        except ValueError:
            return failure("Invalid date (YYYY-MM-DD)")

        try:
            rows = container.leave_service.list_for_employee(employee_id, start_date=start, end_date=end)
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "data": [r.to_dict() for r in rows]})

    @app.route("/admin/leaves/pending", methods=["GET"], endpoint="admin_pending_leaves")
    @admin_required
    def admin_pending_leaves():
        try:
            rows = container.leave_service.list_pending()
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "data": [r.to_dict() for r in rows]})

    @app.route("/admin/leaves/<int:request_id>/approve", methods=["POST"], endpoint="admin_approve_leave")
    @admin_required
    def admin_approve_leave(request_id: int):
        try:
            container.leave_service.approve_leave(
                current_role=Role(session.get("role")),
                approver_id=str(session["user_id"]),
                request_id=request_id,
            )
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "message": "Leave request approved"})

    @app.route("/admin/leaves/<int:request_id>/reject", methods=["POST"], endpoint="admin_reject_leave")
    @admin_required
    def admin_reject_leave(request_id: int):
        try:
            container.leave_service.reject_leave(
                current_role=Role(session.get("role")),
                approver_id=str(session["user_id"]),
                request_id=request_id,
            )
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "message": "Leave request rejected"})
