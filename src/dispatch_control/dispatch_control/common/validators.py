from __future__ import annotations

import re
from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_pattern(value: str, field_name: str, pattern: str, message: str) -> str:
    value = require_non_empty(value, field_name)
    if not re.match(pattern, value):
        raise ValidationError(message)
    return value


def require_int(value: Any, field_name: str, *, minimum: int) -> int:
    # bool is an int subclass; a JSON true must not pass as a quantity.
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field_name} must be an integer")
    if value < minimum:
        raise ValidationError(f"{field_name} must be >= {minimum}")
    return value


def require_list(value: Any, field_name: str) -> list:
    if not isinstance(value, list):
        raise ValidationError(f"{field_name} must be a list")
    return value


def optional_text(value: Any, field_name: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")
    return value.strip() or None
