from __future__ import annotations

from typing import Optional

from ..core.constants import USER_ID_MAX_LENGTH
from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} must not be empty")
    return value.strip()


def require_user_id(value: Optional[str]) -> str:
    user_id = require_non_empty(value, "userId")
    if len(user_id) > USER_ID_MAX_LENGTH:
        raise ValidationError(f"userId must be at most {USER_ID_MAX_LENGTH} characters")
    return user_id


def parse_positive_int(value: Optional[str], field_name: str, *, default: int) -> int:
    """Parse an optional query value; absent or blank falls back to ``default``."""

    if value is None or not value.strip():
        return default
    try:
        number = int(value.strip())
    except ValueError:
        raise ValidationError(f"{field_name} must be an integer") from None
    if number < 1:
        raise ValidationError(f"{field_name} must be at least 1")
    return number
