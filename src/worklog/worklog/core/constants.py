"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import date

FULL_DAY_MIN_HOURS = 7.0
FULL_DAY_MAX_HOURS = 7.5
HALF_DAY_MIN_HOURS = 3.5
HALF_DAY_MAX_HOURS = 4.5

MAX_TASK_HOURS = 24

WEEK_DAYS = 7
MONTH_DAYS = 30
ALL_TIME_FLOOR = date(2020, 1, 1)
DEFAULT_TREND_DAYS = 30

TOP_PERFORMERS_LIMIT = 5
USER_ANNOUNCEMENTS_LIMIT = 5
ADMIN_ANNOUNCEMENTS_LIMIT = 20
DEFAULT_AUDIT_LOG_LIMIT = 100

DEFAULT_TRAINER_PASSWORD = "Welcome@JS2026"
MIN_PASSWORD_LENGTH = 6

FALLBACK_TASK_TYPES = (
    "Shift Briefing",
    "Refresher Session",
    "Call Audit",
    "Call Taking",
    "Meeting - Other",
    "Team Meeting",
    "Half Day",
    "Leave",
    "Holiday",
    "Others",
)
