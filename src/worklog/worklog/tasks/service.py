from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional, Sequence

from ..audit.service import AuditService
from ..common.validators import (
    optional_text,
    optional_time,
    require_date,
    require_hours,
    require_id,
    require_non_empty,
)
from ..core.enums import PerformanceStatus
from ..core.exceptions import AuthorizationError
from ..performance.classifier.base import DayFlags, StatusClassifier
from ..performance.classifier.standard_classifier import StandardStatusClassifier
from .model import Task, TaskDraft
from .repository import TaskRepository

logger = logging.getLogger(__name__)


class TaskStorageError(RuntimeError):
    """The store accepted the statement but reported no affected row."""


@dataclass(frozen=True)
class DayStatus:
    work_date: date
    hours: float
    status: PerformanceStatus
    is_half_day: bool

    def to_dict(self) -> dict:
        return {
            "date": self.work_date.strftime("%Y-%m-%d"),
            "hours": self.hours,
            "status": self.status.value,
            "isHalfDay": self.is_half_day,
        }


def build_draft(
    *,
    task_type: Any,
    custom_task_name: Any = None,
    hours: Any,
    work_date: Any,
    start_time: Any = None,
    end_time: Any = None,
    remarks: Any = None,
) -> TaskDraft:
    # "Others" without a custom name is accepted as-is; the form enforces it.
    return TaskDraft(
        task_type=require_non_empty(task_type, "Task type"),
        custom_task_name=optional_text(custom_task_name),
        hours=require_hours(hours),
        work_date=require_date(work_date),
        start_time=optional_time(start_time, "Start time"),
        end_time=optional_time(end_time, "End time"),
        remarks=optional_text(remarks),
    )


class TaskService:
    """Use cases of the trainer dashboard: log, edit and review daily tasks."""

    def __init__(
        self,
        tasks: TaskRepository,
        audit: AuditService,
        *,
        classifier: Optional[StatusClassifier] = None,
    ):
        self._tasks = tasks
        self._audit = audit
        self._classifier = classifier or StandardStatusClassifier()

    def get_user_tasks(self, user_id: int, work_date: Optional[Any] = None) -> Sequence[Task]:
        day = require_date(work_date) if work_date else None
        return self._tasks.list_for_user(require_id(user_id, "User"), day)

    def add_task(self, *, user_id: int, draft: TaskDraft) -> int:
        user_id = require_id(user_id, "User")
        task_id = self._tasks.create(user_id=user_id, draft=draft)
        if not task_id:
            raise TaskStorageError("Insert reported no affected rows")

        self._audit.log_action(
            user_id,
            "ADD_TASK",
            {"task_type": draft.task_type, "hours": draft.hours, "date": draft.work_date},
        )
        return task_id

    def update_task(self, *, task_id: int, user_id: int, draft: TaskDraft) -> None:
        task_id = require_id(task_id, "Task")
        user_id = require_id(user_id, "User")

        if not self._tasks.update_owned(task_id=task_id, user_id=user_id, draft=draft):
            logger.warning("Rejected update of task %s by user %s", task_id, user_id)
            raise AuthorizationError("Task not found or unauthorized")

        self._audit.log_action(
            user_id,
            "UPDATE_TASK",
            {"taskId": task_id, "task_type": draft.task_type, "hours": draft.hours, "date": draft.work_date},
        )

    def delete_task(self, *, task_id: int, user_id: int) -> None:
        task_id = require_id(task_id, "Task")
        user_id = require_id(user_id, "User")

        if not self._tasks.delete_owned(task_id=task_id, user_id=user_id):
            logger.warning("Rejected delete of task %s by user %s", task_id, user_id)
            raise AuthorizationError("Task not found or unauthorized")

        self._audit.log_action(user_id, "DELETE_TASK", {"taskId": task_id})

    def get_today_hours(self, user_id: int, work_date: Any) -> float:
        return self._tasks.sum_hours(user_id=require_id(user_id, "User"), work_date=require_date(work_date))

    def get_day_status(self, user_id: int, work_date: Any) -> DayStatus:
        day = require_date(work_date)
        tasks = self._tasks.list_for_user(require_id(user_id, "User"), day)

        hours = round(sum(t.hours for t in tasks), 2)
        flags = DayFlags.from_task_types(t.task_type for t in tasks)
        return DayStatus(
            work_date=day,
            hours=hours,
            status=self._classifier.classify(hours, flags),
            is_half_day=flags.is_half_day,
        )
