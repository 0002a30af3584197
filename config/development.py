from .config import Config, _int_env

SECRET_KEY = Config.SECRET_KEY or "dev-secret-key"

BACKEND_URL = Config.BACKEND_URL or "mysql://root@localhost:3306/attendance_db"
BACKEND_KEY = Config.BACKEND_KEY or ""

QR_SECRET_KEY = Config.QR_SECRET_KEY or "dev-qr-secret"

WORK_START = Config.WORK_START
LATE_GRACE_MINUTES = Config.LATE_GRACE_MINUTES
LUNCH_START = Config.LUNCH_START
LUNCH_END = Config.LUNCH_END
WORK_END = Config.WORK_END

ADMIN_USERNAME = Config.ADMIN_USERNAME
ADMIN_PASSWORD_HASH = Config.ADMIN_PASSWORD_HASH
ADMIN_EMPLOYEE_ID = Config.ADMIN_EMPLOYEE_ID
ADMIN_ROLE = Config.ADMIN_ROLE

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(_int_env("AUTO_INIT_DB", 1))
