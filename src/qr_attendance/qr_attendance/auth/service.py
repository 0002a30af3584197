from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from werkzeug.security import check_password_hash

from ..core.enums import Role
from ..core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AdminAccount:
    username: str
    password_hash: str
    employee_id: str
    role: Role = Role.ADMIN


class AuthService:
    """Login for the administrators who decide leave requests."""

    def __init__(self, accounts: Optional[list[AdminAccount]] = None):
        self._accounts = {a.username: a for a in (accounts or [])}

    @classmethod
    def from_settings(cls, settings) -> "AuthService":
        username = getattr(settings, "ADMIN_USERNAME", None)
        password_hash = getattr(settings, "ADMIN_PASSWORD_HASH", None)
        if not username or not password_hash:
            return cls([])

        raw_role = getattr(settings, "ADMIN_ROLE", None) or Role.ADMIN.value
        try:
            role = Role(raw_role)
        except ValueError:
            logger.warning("ADMIN_ROLE=%r is not a known role: admin login disabled", raw_role)
            return cls([])

        return cls(
            [
                AdminAccount(
                    username=username,
                    password_hash=password_hash,
                    employee_id=getattr(settings, "ADMIN_EMPLOYEE_ID", None) or username,
                    role=role,
                )
            ]
        )

    def login(self, username: str, password: str) -> AdminAccount:
        account = self._accounts.get((username or "").strip())
        if not account or not check_password_hash(account.password_hash, password or ""):
            raise AuthenticationError("Invalid username or password")
        return account
