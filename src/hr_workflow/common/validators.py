from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_decimal(value: Any, field_name: str) -> Decimal:
    """Convert to Decimal, rejecting NaN, infinities and non-numbers."""
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if not result.is_finite():
        raise ValidationError(f"{field_name} must be a finite number")
    return result


def require_non_negative(value: Any, field_name: str) -> Decimal:
    result = require_decimal(value, field_name)
    if result < 0:
        raise ValidationError(f"{field_name} must not be negative")
    return result


def optional_text(value: Any, field_name: str) -> Optional[str]:
    """Stripped string or None; anything other than a string is rejected."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")
    return value.strip() or None
