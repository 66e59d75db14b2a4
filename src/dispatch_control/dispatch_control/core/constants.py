"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TOKEN_TTL_MINUTES = 60
DEFAULT_PREPARER_TASK = "Preparador"
MIN_PASSWORD_LENGTH = 6
USER_CODE_PATTERN = r"^\d{3}$"
TOKEN_HEADER = "x-auth-token"
JWT_ALGORITHM = "HS256"
