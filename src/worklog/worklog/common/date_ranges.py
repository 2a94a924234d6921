"""Resolve symbolic report periods into concrete calendar bounds.

All bounds are local calendar days; callers compare them against the
``tasks.date`` column, which stores the trainer's local day.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from ..core.constants import ALL_TIME_FLOOR, MONTH_DAYS, WEEK_DAYS
from ..core.enums import DateRange
from ..core.exceptions import ValidationError
from .datetime_utils import today_local
from .validators import require_date


@dataclass(frozen=True)
class DateWindow:
    start: date
    end: Optional[date] = None


def days_ago(days: int, *, today: Optional[date] = None) -> date:
    today = today or today_local()
    return today - timedelta(days=int(days))


def resolve_range(
    period: DateRange | str,
    *,
    today: Optional[date] = None,
    start: Optional[date | str] = None,
    end: Optional[date | str] = None,
) -> DateWindow:
    today = today or today_local()

    try:
        period = DateRange(period)
    except ValueError:
        # Unknown periods fall back to the whole history.
        period = DateRange.ALL

    if period == DateRange.TODAY:
        return DateWindow(start=today)
    if period == DateRange.WEEK:
        return DateWindow(start=days_ago(WEEK_DAYS, today=today))
    if period == DateRange.MONTH:
        return DateWindow(start=days_ago(MONTH_DAYS, today=today))
    if period == DateRange.CUSTOM:
        if not start or not end:
            raise ValidationError("Custom range requires start and end dates")
        window = DateWindow(start=require_date(start, "Start date"), end=require_date(end, "End date"))
        if window.end < window.start:
            raise ValidationError("End date must not be before start date")
        return window
    return DateWindow(start=ALL_TIME_FLOOR)
