from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from flask import jsonify

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    BackendError,
    BackendNotConfiguredError,
    ConfigurationError,
    DomainError,
    DuplicateScanError,
    OnLeaveError,
    ScanNotAllowedError,
    SignatureMismatchError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = [
    (BackendNotConfiguredError, 503),
    (BackendError, 502),
    (ConfigurationError, 503),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (SignatureMismatchError, 401),
    (DuplicateScanError, 409),
    (OnLeaveError, 409),
    (ScanNotAllowedError, 409),
]


def status_for(exc: DomainError) -> int:
    for cls, status in _STATUS_BY_ERROR:
        if isinstance(exc, cls):
            return status
    return 400


def error_response(exc: DomainError, **extra):
    if isinstance(exc, BackendError):
        logger.error("backend failure: %s", exc)
    body = {"success": False, "message": str(exc)}
    body.update(extra)
    return jsonify(body), status_for(exc)


def failure(message: str, status: int = 400, **extra):
    body = {"success": False, "message": message}
    body.update(extra)
    return jsonify(body), status


def parse_date_arg(value: Optional[str], default: Optional[date]) -> Optional[date]:
    if not value:
        return default
    return datetime.strptime(value, "%Y-%m-%d").date()
