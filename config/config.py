"""Settings shared by every environment (read from the process environment)."""
import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "dispatch_control"),
}

# Lifetime of an issued credential; a newer login revokes it earlier.
TOKEN_TTL_MINUTES = int(os.getenv("TOKEN_TTL_MINUTES", "60"))

# Shared secret the ERP sends in X-Webhook-Token; empty disables the check.
ERP_WEBHOOK_TOKEN = os.getenv("ERP_WEBHOOK_TOKEN", "")

# Accounts carrying this task are offered as "prepared by" choices.
PREPARER_TASK = os.getenv("PREPARER_TASK", "Preparador")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DEV_SECRETS = {"", "dev-secret-key", "dev-jwt-secret", "test-secret", "test-jwt-secret"}
