from __future__ import annotations

from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], message: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(message)
    return str(value).strip()


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a boolean")
    return value


def optional_text(value: Any) -> Optional[str]:
    """Empty strings from query strings and forms become None."""
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def parse_positive_int(value: Any, default: int) -> int:
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return default
    return parsed if parsed > 0 else default


def normalize_email(value: Optional[str]) -> str:
    return require_non_empty(value, "Email is required").lower()


def parse_choice(value: Optional[str], enum_cls, field_name: str):
    """Map "all"/empty to None, otherwise require a known enum value."""
    value = optional_text(value)
    if value is None or value == "all":
        return None
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(f"Invalid {field_name}: {value}")
