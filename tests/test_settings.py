from __future__ import annotations

import pytest
from werkzeug.security import generate_password_hash

from config.config import _int_env
from src.qr_attendance.qr_attendance.auth.service import AuthService
from src.qr_attendance.qr_attendance.core.enums import Role
from src.qr_attendance.qr_attendance.core.exceptions import AuthenticationError


class Settings:
    ADMIN_USERNAME = "boss"
    ADMIN_PASSWORD_HASH = generate_password_hash("pw")
    ADMIN_EMPLOYEE_ID = "admin-1"
    ADMIN_ROLE = "manager"


@pytest.mark.parametrize("raw, expected", [("30", 30), ("", 15), ("fifteen", 15)])
def test_int_env_falls_back_on_bad_values(monkeypatch, raw, expected):
    monkeypatch.setenv("LATE_GRACE_MINUTES", raw)
    assert _int_env("LATE_GRACE_MINUTES", 15) == expected


def test_int_env_default_when_unset(monkeypatch):
    monkeypatch.delenv("AUTO_INIT_DB", raising=False)
    assert _int_env("AUTO_INIT_DB", 0) == 0


def test_admin_account_from_settings():
    account = AuthService.from_settings(Settings).login("boss", "pw")

    assert account.employee_id == "admin-1"
    assert account.role == Role.MANAGER


def test_unknown_admin_role_disables_login_instead_of_crashing():
    class BadRole(Settings):
        ADMIN_ROLE = "superuser"

    auth = AuthService.from_settings(BadRole)

    with pytest.raises(AuthenticationError):
        auth.login("boss", "pw")
