from __future__ import annotations

from typing import Any, Optional

from ..core.constants import PIN_MAX_LENGTH, PIN_MIN_LENGTH
from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_int(value: Any, field_name: str) -> int:
    if value is None or isinstance(value, bool):
        raise ValidationError(f"{field_name} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")


def normalize_pin(
    value: Optional[str],
    *,
    min_len: int = PIN_MIN_LENGTH,
    max_len: int = PIN_MAX_LENGTH,
) -> Optional[str]:
    """Return a stripped PIN, or None when the caller is clearing it."""
    if value is None:
        return None
    pin = str(value).strip()
    if not pin:
        return None
    if not pin.isdigit():
        raise ValidationError("PIN must contain only digits")
    if not min_len <= len(pin) <= max_len:
        raise ValidationError(f"PIN must be {min_len}-{max_len} digits")
    return pin


def optional_text(value: Any, field_name: str) -> Optional[str]:
    """Stripped text, or None for null/blank; anything but a string is rejected."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")
    return value.strip() or None
