import logging
import os

logger = logging.getLogger(__name__)


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("%s=%r is not an integer, using %s", name, raw, default)
        return default


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY")

    # Backend endpoint + access key, e.g. mysql://attendance@localhost:3306/attendance_db
    BACKEND_URL = os.environ.get("BACKEND_URL")
    BACKEND_KEY = os.environ.get("BACKEND_KEY")

    # HMAC secret shared with the mobile app
    QR_SECRET_KEY = os.environ.get("QR_SECRET_KEY")

    # Workday thresholds
    WORK_START = os.environ.get("WORK_START", "09:00")
    LATE_GRACE_MINUTES = _int_env("LATE_GRACE_MINUTES", 15)
    LUNCH_START = os.environ.get("LUNCH_START", "12:00")
    LUNCH_END = os.environ.get("LUNCH_END", "14:00")
    WORK_END = os.environ.get("WORK_END", "18:00")

    # Administrator allowed to decide leave requests
    ADMIN_USERNAME = os.environ.get("ADMIN_USERNAME")
    ADMIN_PASSWORD_HASH = os.environ.get("ADMIN_PASSWORD_HASH")
    ADMIN_EMPLOYEE_ID = os.environ.get("ADMIN_EMPLOYEE_ID")
    ADMIN_ROLE = os.environ.get("ADMIN_ROLE", "admin")

    AUTO_INIT_DB = bool(_int_env("AUTO_INIT_DB", 0))
