from __future__ import annotations

from ...core.constants import FULL_DAY_MAX_HOURS, FULL_DAY_MIN_HOURS, HALF_DAY_MAX_HOURS, HALF_DAY_MIN_HOURS
from .base import HourThresholds, StatusClassifier


class StandardStatusClassifier(StatusClassifier):
    """Standard rule: 7-7.5h is a normal day, 3.5-4.5h on a half day."""

    def thresholds(self, *, is_half_day: bool) -> HourThresholds:
        if is_half_day:
            return HourThresholds(min_hours=HALF_DAY_MIN_HOURS, max_hours=HALF_DAY_MAX_HOURS)
        return HourThresholds(min_hours=FULL_DAY_MIN_HOURS, max_hours=FULL_DAY_MAX_HOURS)
