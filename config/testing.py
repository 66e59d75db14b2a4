from .config import DB_CONFIG, PREPARER_TASK  # noqa: F401

SECRET_KEY = "test-secret"
JWT_SECRET = "test-jwt-secret"
TOKEN_TTL_MINUTES = 60
ERP_WEBHOOK_TOKEN = ""
LOG_LEVEL = "WARNING"

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
AUTO_SEED_DB = False
