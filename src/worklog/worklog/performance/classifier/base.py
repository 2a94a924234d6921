from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable

from ...core.enums import PerformanceStatus, SpecialTaskType


@dataclass(frozen=True)
class DayFlags:
    is_on_leave: bool = False
    is_holiday: bool = False
    is_half_day: bool = False

    @classmethod
    def from_task_types(cls, task_types: Iterable[str]) -> "DayFlags":
        types = set(task_types)
        return cls(
            is_on_leave=SpecialTaskType.LEAVE.value in types,
            is_holiday=SpecialTaskType.HOLIDAY.value in types,
            is_half_day=SpecialTaskType.HALF_DAY.value in types,
        )


@dataclass(frozen=True)
class HourThresholds:
    min_hours: float
    max_hours: float


class StatusClassifier(ABC):
    """Classifier interface (Strategy Pattern for daily status).

    Leave wins over holiday, and both win over any hours-based result.
    """

    @abstractmethod
    def thresholds(self, *, is_half_day: bool) -> HourThresholds:
        raise NotImplementedError

    def classify(self, hours: float, flags: DayFlags) -> PerformanceStatus:
        if flags.is_on_leave:
            return PerformanceStatus.ON_LEAVE
        if flags.is_holiday:
            return PerformanceStatus.HOLIDAY

        limits = self.thresholds(is_half_day=flags.is_half_day)
        if hours < limits.min_hours:
            return PerformanceStatus.UNDERPERFORMING
        if hours <= limits.max_hours:
            return PerformanceStatus.NORMAL
        return PerformanceStatus.OVERPERFORMING
