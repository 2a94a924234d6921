from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for access control."""

    ADMIN = "admin"
    TRAINER = "trainer"


class PerformanceStatus(str, Enum):
    """Daily status shown on KPI badges and tallied on the team dashboard."""

    UNDERPERFORMING = "underperforming"
    NORMAL = "normal"
    OVERPERFORMING = "overperforming"
    ON_LEAVE = "On Leave"
    HOLIDAY = "Holiday"


class DateRange(str, Enum):
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    ALL = "all"
    CUSTOM = "custom"


class SpecialTaskType(str, Enum):
    """Task types that change how a day is classified."""

    LEAVE = "Leave"
    HOLIDAY = "Holiday"
    HALF_DAY = "Half Day"
