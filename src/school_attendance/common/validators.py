from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.constants import MAX_PERIOD_NUMBER, MIN_PERIOD_NUMBER
from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_positive_id(value, field_name: str) -> int:
    try:
        ident = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} is required")
    if ident <= 0:
        raise ValidationError(f"{field_name} is required")
    return ident


def optional_id(value) -> Optional[int]:
    if value in (None, "", "none", "all"):
        return None
    try:
        ident = int(value)
    except (TypeError, ValueError):
        raise ValidationError("Invalid identifier")
    return ident if ident > 0 else None


def validate_period(period: int) -> bool:
    return MIN_PERIOD_NUMBER <= int(period) <= MAX_PERIOD_NUMBER


def validate_attendance_date(value: date, today: date) -> bool:
    """Attendance can be marked for today or the past, never the future."""
    return value <= today
