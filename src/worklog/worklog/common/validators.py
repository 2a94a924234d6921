from __future__ import annotations

from datetime import date, time
from typing import Any, Optional

from ..core.constants import MAX_TASK_HOURS
from ..core.exceptions import ValidationError
from .datetime_utils import parse_clock_time, parse_iso_date


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_hours(value: Any) -> float:
    try:
        hours = float(value)
    except (TypeError, ValueError):
        raise ValidationError("Hours must be a number")
    if hours < 0 or hours > MAX_TASK_HOURS:
        raise ValidationError(f"Hours must be between 0 and {MAX_TASK_HOURS}")
    return hours


def require_date(value: Any, field_name: str = "Date") -> date:
    if isinstance(value, date):
        return value
    try:
        return parse_iso_date(str(value or ""))
    except ValueError:
        raise ValidationError(f"{field_name} must be in YYYY-MM-DD format")


def optional_time(value: Any, field_name: str) -> Optional[time]:
    if value is None or value == "":
        return None
    if isinstance(value, time):
        return value
    try:
        return parse_clock_time(str(value))
    except ValueError:
        raise ValidationError(f"{field_name} must be in HH:MM format")


def optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def require_id(value: Any, field_name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} is required")
