"""Worklog operations as plain function calls.

Every method returns an :class:`Envelope` (``{"success": True, ...}`` or
``{"success": False, "error": ...}``) so server-side callers and the JSON
endpoints share one contract.
"""
from __future__ import annotations

from typing import Any, Iterable, Optional

from .common.date_ranges import DateWindow
from .common.envelope import Envelope, operation
from .container import Container
from .core.constants import DEFAULT_AUDIT_LOG_LIMIT, DEFAULT_TREND_DAYS
from .tasks.service import build_draft


class Operations:
    def __init__(self, container: Container):
        self._c = container

    # Auth -----------------------------------------------------------------

    @operation("Login")
    def login(self, js_id: str, password: str) -> dict:
        user = self._c.auth_service.authenticate(js_id, password)
        return {"user": user.to_public()}

    @operation("Change password")
    def change_password(self, user_id: int, new_password: str) -> dict:
        self._c.auth_service.change_password(user_id, new_password)
        return {}

    # Trainers -------------------------------------------------------------

    @operation("Fetch trainers")
    def get_all_trainers(self) -> dict:
        trainers = self._c.user_service.list_trainers()
        return {"trainers": [_trainer_view(u.to_public()) for u in trainers]}

    @operation("Add trainer")
    def add_trainer(self, name: str, js_id: str, admin_id: Optional[int] = None) -> dict:
        user_id = self._c.user_service.add_trainer(name=name, js_id=js_id, admin_id=admin_id)
        return {"id": user_id}

    @operation("Update user")
    def update_user(self, user_id: int, name: str, js_id: str, admin_id: Optional[int] = None) -> dict:
        self._c.user_service.update_user(user_id=user_id, name=name, js_id=js_id, admin_id=admin_id)
        return {}

    @operation("Reset password")
    def reset_password(self, user_id: int, admin_id: Optional[int] = None) -> dict:
        self._c.user_service.reset_password(user_id=user_id, admin_id=admin_id)
        return {}

    @operation("Delete user")
    def delete_user(self, user_id: int, admin_id: Optional[int] = None) -> dict:
        self._c.user_service.delete_user(user_id=user_id, admin_id=admin_id)
        return {}

    # Tasks ----------------------------------------------------------------

    @operation("Fetch tasks")
    def get_user_tasks(self, user_id: int, date: Optional[str] = None) -> dict:
        tasks = self._c.task_service.get_user_tasks(user_id, date)
        return {"tasks": [t.to_dict() for t in tasks]}

    @operation("Add task")
    def add_task(
        self,
        user_id: int,
        task_type: str,
        custom_task_name: Optional[str],
        hours: Any,
        date: str,
        start_time: Optional[str] = None,
        end_time: Optional[str] = None,
        remarks: Optional[str] = None,
    ) -> dict:
        draft = build_draft(
            task_type=task_type,
            custom_task_name=custom_task_name,
            hours=hours,
            work_date=date,
            start_time=start_time,
            end_time=end_time,
            remarks=remarks,
        )
        task_id = self._c.task_service.add_task(user_id=user_id, draft=draft)
        return {"id": task_id}

    @operation("Update task")
    def update_task(
        self,
        task_id: int,
        user_id: int,
        task_type: str,
        custom_task_name: Optional[str],
        hours: Any,
        date: str,
        start_time: Optional[str] = None,
        end_time: Optional[str] = None,
        remarks: Optional[str] = None,
    ) -> dict:
        draft = build_draft(
            task_type=task_type,
            custom_task_name=custom_task_name,
            hours=hours,
            work_date=date,
            start_time=start_time,
            end_time=end_time,
            remarks=remarks,
        )
        self._c.task_service.update_task(task_id=task_id, user_id=user_id, draft=draft)
        return {}

    @operation("Delete task")
    def delete_task(self, task_id: int, user_id: int) -> dict:
        self._c.task_service.delete_task(task_id=task_id, user_id=user_id)
        return {}

    @operation("Calculate hours")
    def get_today_hours(self, user_id: int, date: str) -> dict:
        return {"hours": self._c.task_service.get_today_hours(user_id, date)}

    @operation("Calculate status")
    def get_day_status(self, user_id: int, date: str) -> dict:
        return self._c.task_service.get_day_status(user_id, date).to_dict()

    # Dashboards -----------------------------------------------------------

    @operation("Fetch team performance")
    def get_team_performance(self, date: str) -> dict:
        result = self._c.report_service.team_performance(date)
        return {"performance": result.performance, "trainers": [t.to_dict() for t in result.trainers]}

    @operation("Fetch trainer tasks")
    def get_trainer_tasks(
        self,
        trainer_id: int,
        date_range: str = "week",
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> dict:
        report = self._c.report_service.trainer_tasks(trainer_id, date_range, start=start_date, end=end_date)
        return {**report.to_dict(), "range": _window_view(report.window)}

    @operation("Fetch team trends")
    def get_team_trends(self, days: Any = DEFAULT_TREND_DAYS) -> dict:
        return {"trends": [p.to_dict() for p in self._c.report_service.team_trends(days)]}

    @operation("Fetch top performers")
    def get_top_performers(self, period: str = "month") -> dict:
        return {"performers": [p.to_dict() for p in self._c.report_service.top_performers(period)]}

    @operation("Fetch export data")
    def get_export_data(self, start_date: str, end_date: str) -> dict:
        return {"data": [r.to_dict() for r in self._c.report_service.export_data(start_date, end_date)]}

    # Task types -----------------------------------------------------------

    @operation("Fetch task types")
    def get_task_types(self) -> dict:
        service = self._c.task_type_service
        # "names" falls back to the built-in vocabulary while the table is empty.
        return {"types": [t.to_dict() for t in service.list_types()], "names": service.list_names()}

    @operation("Add task type")
    def add_task_type(self, name: str, user_id: Optional[int] = None) -> dict:
        return {"id": self._c.task_type_service.add_type(name=name, user_id=user_id)}

    @operation("Update task type")
    def update_task_type(self, type_id: int, name: str, user_id: Optional[int] = None) -> dict:
        self._c.task_type_service.update_type(type_id=type_id, name=name, user_id=user_id)
        return {}

    @operation("Delete task type")
    def delete_task_type(self, type_id: int, user_id: Optional[int] = None) -> dict:
        self._c.task_type_service.delete_type(type_id=type_id, user_id=user_id)
        return {}

    # Announcements / audit ------------------------------------------------

    @operation("Create announcement")
    def create_announcement(
        self,
        message: str,
        is_urgent: bool = False,
        recipient_ids: Iterable[Any] = (),
        admin_id: Optional[int] = None,
    ) -> dict:
        announcement_id = self._c.announcement_service.create(
            message=message,
            is_urgent=is_urgent,
            recipient_ids=recipient_ids,
            admin_id=admin_id,
        )
        return {"id": announcement_id}

    @operation("Fetch announcements")
    def get_announcements(self, user_id: Optional[int] = None) -> dict:
        return {"announcements": [a.to_dict() for a in self._c.announcement_service.list_for(user_id)]}

    @operation("Fetch audit logs")
    def get_audit_logs(self, limit: int = DEFAULT_AUDIT_LOG_LIMIT) -> dict:
        return {"logs": [e.to_dict() for e in self._c.audit_service.list_recent(limit)]}


def _trainer_view(public: dict) -> dict:
    return {k: public[k] for k in ("id", "name", "js_id", "created_at")}


def _window_view(window: DateWindow) -> dict:
    return {
        "start": window.start.strftime("%Y-%m-%d"),
        "end": window.end.strftime("%Y-%m-%d") if window.end else None,
    }
