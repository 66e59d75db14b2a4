import os

from .config import DB_CONFIG, DEV_SECRETS, ERP_WEBHOOK_TOKEN, LOG_LEVEL, PREPARER_TASK, TOKEN_TTL_MINUTES  # noqa: F401

SECRET_KEY = os.getenv("SECRET_KEY", "")
JWT_SECRET = os.getenv("JWT_SECRET", "")

if JWT_SECRET in DEV_SECRETS:
    raise RuntimeError("JWT_SECRET must be set to a strong value in production")

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
