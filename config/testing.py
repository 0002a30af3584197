SECRET_KEY = "test-secret"

BACKEND_URL = None
BACKEND_KEY = None
QR_SECRET_KEY = "test-qr-secret"

ADMIN_USERNAME = None
ADMIN_PASSWORD_HASH = None

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
