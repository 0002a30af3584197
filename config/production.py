from .config import Config

SECRET_KEY = Config.SECRET_KEY or "please-set-SECRET_KEY"

# No defaults: a missing backend or secret disables the feature, it does not crash.
BACKEND_URL = Config.BACKEND_URL
BACKEND_KEY = Config.BACKEND_KEY
QR_SECRET_KEY = Config.QR_SECRET_KEY

WORK_START = Config.WORK_START
LATE_GRACE_MINUTES = Config.LATE_GRACE_MINUTES
LUNCH_START = Config.LUNCH_START
LUNCH_END = Config.LUNCH_END
WORK_END = Config.WORK_END

ADMIN_USERNAME = Config.ADMIN_USERNAME
ADMIN_PASSWORD_HASH = Config.ADMIN_PASSWORD_HASH
ADMIN_EMPLOYEE_ID = Config.ADMIN_EMPLOYEE_ID
ADMIN_ROLE = Config.ADMIN_ROLE

DEBUG = False

AUTO_INIT_DB = Config.AUTO_INIT_DB
