from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, request, session

from ..common.responses import error_response, failure
from ..core.enums import Role
from ..core.exceptions import AuthenticationError
from ..container import Container

logger = logging.getLogger(__name__)


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return failure("Please log in to continue", 401)
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return failure("Please log in to continue", 401)
        if session.get("role") not in {Role.ADMIN.value, Role.MANAGER.value}:
            return failure("You do not have permission", 403)
        return view(*args, **kwargs)

    return wrapper


def register(app: Flask, container: Container) -> None:
    @app.route("/login", methods=["POST"], endpoint="login")
    def login():
        data = request.get_json(silent=True) or {}
        if not isinstance(data, dict):
            return failure("Invalid request body")
        try:
            account = container.auth_service.login(data.get("username", ""), data.get("password", ""))
        except AuthenticationError as e:
            logger.warning("failed login for %r", data.get("username"))
            return error_response(e)

        session.clear()
        session["user_id"] = account.employee_id
        session["name"] = account.username
        session["role"] = account.role.value
        return jsonify({"success": True, "user": {"employee_id": account.employee_id, "role": account.role.value}})

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True})
