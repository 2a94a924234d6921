from __future__ import annotations

from typing import Iterable

from ..core.enums import PerformanceStatus
from .classifier.base import DayFlags, HourThresholds
from .classifier.standard_classifier import StandardStatusClassifier

_default = StandardStatusClassifier()


def thresholds(is_half_day: bool = False) -> HourThresholds:
    return _default.thresholds(is_half_day=is_half_day)


def flags_from_task_types(task_types: Iterable[str]) -> DayFlags:
    return DayFlags.from_task_types(task_types)


def classify(
    hours: float,
    is_half_day: bool = False,
    *,
    is_on_leave: bool = False,
    is_holiday: bool = False,
) -> PerformanceStatus:
    """Classify one trainer-day with the standard thresholds."""
    flags = DayFlags(is_on_leave=is_on_leave, is_holiday=is_holiday, is_half_day=is_half_day)
    return _default.classify(float(hours or 0), flags)
