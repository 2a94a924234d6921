from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional

from ..common.date_ranges import DateWindow, days_ago, resolve_range
from ..common.validators import require_date, require_id
from ..core.constants import DEFAULT_TREND_DAYS, MONTH_DAYS, TOP_PERFORMERS_LIMIT, WEEK_DAYS
from ..core.enums import DateRange, PerformanceStatus, Role
from ..core.exceptions import ValidationError
from ..performance.classifier.base import DayFlags, StatusClassifier
from ..performance.classifier.standard_classifier import StandardStatusClassifier
from ..tasks.model import ExportRow, PerformerRow, Task, TrendPoint
from ..tasks.repository import TaskRepository
from ..users.repository import UserRepository

_BUCKETS = {
    PerformanceStatus.UNDERPERFORMING: "underperforming",
    PerformanceStatus.NORMAL: "normal",
    PerformanceStatus.OVERPERFORMING: "overperforming",
    PerformanceStatus.ON_LEAVE: "onLeave",
    PerformanceStatus.HOLIDAY: "holiday",
}


@dataclass(frozen=True)
class TrainerPerformance:
    user_id: int
    name: str
    js_id: str
    hours: float
    status: PerformanceStatus
    is_half_day: bool

    def to_dict(self) -> dict:
        return {
            "id": self.user_id,
            "name": self.name,
            "js_id": self.js_id,
            "hours": self.hours,
            "status": self.status.value,
            "isHalfDay": self.is_half_day,
        }


@dataclass
class TeamPerformance:
    work_date: date
    performance: dict[str, int] = field(default_factory=lambda: {k: 0 for k in _BUCKETS.values()})
    trainers: list[TrainerPerformance] = field(default_factory=list)

    def add(self, trainer: TrainerPerformance) -> None:
        self.performance[_BUCKETS[trainer.status]] += 1
        self.trainers.append(trainer)

    def to_dict(self) -> dict:
        return {
            "date": self.work_date.strftime("%Y-%m-%d"),
            "performance": dict(self.performance),
            "trainers": [t.to_dict() for t in self.trainers],
        }


@dataclass(frozen=True)
class TrainerTaskRow:
    task: Task
    daily_hours: float
    daily_status: PerformanceStatus

    def to_dict(self) -> dict:
        data = self.task.to_dict()
        data["daily_hours"] = self.daily_hours
        data["daily_status"] = self.daily_status.value
        return data


@dataclass(frozen=True)
class TrainerReport:
    trainer_id: int
    window: DateWindow
    rows: list[TrainerTaskRow]
    total_hours: float
    total_tasks: int
    avg_hours_per_day: float

    def to_dict(self) -> dict:
        return {
            "tasks": [r.to_dict() for r in self.rows],
            "stats": {
                "totalHours": self.total_hours,
                "totalTasks": self.total_tasks,
                "avgHoursPerDay": self.avg_hours_per_day,
            },
        }


class ReportService:
    """Read-heavy aggregations behind the admin dashboard and reports pages."""

    def __init__(
        self,
        tasks: TaskRepository,
        users: UserRepository,
        *,
        classifier: Optional[StatusClassifier] = None,
    ):
        self._tasks = tasks
        self._users = users
        self._classifier = classifier or StandardStatusClassifier()

    def team_performance(self, work_date: Any) -> TeamPerformance:
        day = require_date(work_date)

        hours_by_user: dict[int, float] = defaultdict(float)
        types_by_user: dict[int, set[str]] = defaultdict(set)
        for row in self._tasks.hours_by_user_and_type(day):
            hours_by_user[row.user_id] += row.hours
            types_by_user[row.user_id].add(row.task_type)

        result = TeamPerformance(work_date=day)
        for trainer in self._users.list_by_role(Role.TRAINER):
            hours = round(hours_by_user.get(trainer.user_id, 0.0), 2)
            flags = DayFlags.from_task_types(types_by_user.get(trainer.user_id, ()))
            result.add(
                TrainerPerformance(
                    user_id=trainer.user_id,
                    name=trainer.name,
                    js_id=trainer.js_id,
                    hours=hours,
                    status=self._classifier.classify(hours, flags),
                    is_half_day=flags.is_half_day,
                )
            )
        return result

    def trainer_tasks(
        self,
        trainer_id: int,
        date_range: DateRange | str = DateRange.WEEK,
        *,
        start: Optional[Any] = None,
        end: Optional[Any] = None,
        today: Optional[date] = None,
    ) -> TrainerReport:
        trainer_id = require_id(trainer_id, "Trainer")
        window = resolve_range(date_range, today=today, start=start, end=end)
        tasks = self._tasks.list_for_user_between(trainer_id, start=window.start, end=window.end)

        daily_hours: dict[date, float] = defaultdict(float)
        daily_types: dict[date, set[str]] = defaultdict(set)
        for t in tasks:
            daily_hours[t.work_date] += t.hours
            daily_types[t.work_date].add(t.task_type)

        daily_status = {
            day: self._classifier.classify(hours, DayFlags.from_task_types(daily_types[day]))
            for day, hours in daily_hours.items()
        }

        rows = [
            TrainerTaskRow(
                task=t,
                daily_hours=round(daily_hours[t.work_date], 2),
                daily_status=daily_status[t.work_date],
            )
            for t in tasks
        ]

        total_hours = round(sum(t.hours for t in tasks), 2)
        unique_days = len(daily_hours)
        return TrainerReport(
            trainer_id=trainer_id,
            window=window,
            rows=rows,
            total_hours=total_hours,
            total_tasks=len(tasks),
            avg_hours_per_day=round(total_hours / unique_days, 2) if unique_days else 0.0,
        )

    def team_trends(self, days: int = DEFAULT_TREND_DAYS, *, today: Optional[date] = None) -> list[TrendPoint]:
        try:
            days = int(days)
        except (TypeError, ValueError):
            raise ValidationError("Days must be a number")
        if days < 0:
            raise ValidationError("Days must not be negative")
        return list(self._tasks.trends_since(days_ago(days, today=today)))

    def top_performers(self, period: str = "month", *, today: Optional[date] = None) -> list[PerformerRow]:
        window_days = WEEK_DAYS if period == DateRange.WEEK.value else MONTH_DAYS
        return list(
            self._tasks.top_performers_since(days_ago(window_days, today=today), limit=TOP_PERFORMERS_LIMIT)
        )

    def export_data(self, start: Any, end: Any) -> list[ExportRow]:
        start_d = require_date(start, "Start date")
        end_d = require_date(end, "End date")
        if end_d < start_d:
            raise ValidationError("End date must not be before start date")
        return list(self._tasks.export_rows(start=start_d, end=end_d))
