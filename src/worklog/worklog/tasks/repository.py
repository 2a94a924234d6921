from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import ExportRow, PerformerRow, Task, TaskDraft, TrendPoint, UserTypeHours


class TaskRepository(Protocol):
    def list_for_user(self, user_id: int, work_date: Optional[date] = None) -> Sequence[Task]:
        """Newest ``created_at`` first."""
        raise NotImplementedError

    def list_for_user_between(self, user_id: int, *, start: date, end: Optional[date] = None) -> Sequence[Task]:
        """Ordered by date DESC, then created_at DESC."""
        raise NotImplementedError

    def create(self, *, user_id: int, draft: TaskDraft) -> int:
        """Return the new id, or 0 when the driver reports no inserted row."""
        raise NotImplementedError

    def update_owned(self, *, task_id: int, user_id: int, draft: TaskDraft) -> bool:
        """Update only when the task belongs to ``user_id``."""
        raise NotImplementedError

    def delete_owned(self, *, task_id: int, user_id: int) -> bool:
        raise NotImplementedError

    def sum_hours(self, *, user_id: int, work_date: date) -> float:
        raise NotImplementedError

    def hours_by_user_and_type(self, work_date: date) -> Sequence[UserTypeHours]:
        raise NotImplementedError

    def trends_since(self, start: date) -> Sequence[TrendPoint]:
        raise NotImplementedError

    def top_performers_since(self, start: date, *, limit: int) -> Sequence[PerformerRow]:
        raise NotImplementedError

    def export_rows(self, *, start: date, end: date) -> Sequence[ExportRow]:
        raise NotImplementedError
