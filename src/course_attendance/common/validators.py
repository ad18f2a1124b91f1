from __future__ import annotations

from typing import Iterable, Optional

from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_positive_int(value, field_name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")
    if number <= 0:
        raise ValidationError(f"{field_name} must be positive")
    return number


def require_role(current_role: Role, allowed: Iterable[Role]) -> None:
    if current_role not in set(allowed):
        raise AuthorizationError("You do not have permission for this action")


def optional_text(value: Optional[str]) -> Optional[str]:
    return (value or "").strip() or None
