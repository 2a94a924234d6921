from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional


def _clock(value: Optional[time]) -> Optional[str]:
    return value.strftime("%H:%M") if value else None


@dataclass(frozen=True)
class Task:
    """Domain entity: one logged activity of a trainer."""

    task_id: int
    user_id: int
    task_type: str
    custom_task_name: Optional[str]
    hours: float
    work_date: date
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    remarks: Optional[str] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.task_id,
            "user_id": self.user_id,
            "task_type": self.task_type,
            "custom_task_name": self.custom_task_name,
            "hours": self.hours,
            "date": self.work_date.strftime("%Y-%m-%d"),
            "start_time": _clock(self.start_time),
            "end_time": _clock(self.end_time),
            "remarks": self.remarks,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class TaskDraft:
    """Validated field values for an insert or update."""

    task_type: str
    custom_task_name: Optional[str]
    hours: float
    work_date: date
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    remarks: Optional[str] = None


@dataclass(frozen=True)
class UserTypeHours:
    """Read-model: hours per (user, task type) on one date."""

    user_id: int
    task_type: str
    hours: float


@dataclass(frozen=True)
class TrendPoint:
    work_date: date
    total_hours: float
    active_trainers: int

    def to_dict(self) -> dict:
        return {
            "date": self.work_date.strftime("%Y-%m-%d"),
            "total_hours": self.total_hours,
            "active_trainers": self.active_trainers,
        }


@dataclass(frozen=True)
class PerformerRow:
    user_id: int
    name: str
    total_hours: float
    tasks_count: int

    def to_dict(self) -> dict:
        return {
            "id": self.user_id,
            "name": self.name,
            "total_hours": self.total_hours,
            "tasks_count": self.tasks_count,
        }


@dataclass(frozen=True)
class ExportRow:
    """Read-model for exports (task joined with its trainer)."""

    work_date: date
    trainer_name: str
    js_id: str
    task_type: str
    custom_task_name: Optional[str]
    hours: float
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    remarks: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "date": self.work_date.strftime("%Y-%m-%d"),
            "trainer_name": self.trainer_name,
            "js_id": self.js_id,
            "task_type": self.task_type,
            "custom_task_name": self.custom_task_name,
            "hours": self.hours,
            "start_time": _clock(self.start_time),
            "end_time": _clock(self.end_time),
            "remarks": self.remarks,
        }
