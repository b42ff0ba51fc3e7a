from __future__ import annotations

from ..core.exceptions import ValidationError


def require_non_empty(value, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_max_length(value: str, field_name: str, max_len: int) -> str:
    if len(value) > max_len:
        raise ValidationError(f"{field_name} must be at most {max_len} characters")
    return value


def require_positive_int(value, field_name: str, *, maximum: int | None = None) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer") from None
    if number <= 0:
        raise ValidationError(f"{field_name} must be positive")
    if maximum is not None and number > maximum:
        raise ValidationError(f"{field_name} must be at most {maximum}")
    return number
