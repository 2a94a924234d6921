from __future__ import annotations

from collections import defaultdict
from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from src.worklog.worklog.announcements.model import Announcement
from src.worklog.worklog.audit.model import AuditLogEntry
from src.worklog.worklog.container import wire
from src.worklog.worklog.core.enums import Role
from src.worklog.worklog.core.exceptions import ValidationError
from src.worklog.worklog.main import create_app
from src.worklog.worklog.task_types.model import TaskType
from src.worklog.worklog.tasks.model import ExportRow, PerformerRow, Task, TaskDraft, TrendPoint, UserTypeHours
from src.worklog.worklog.users.model import User

# Cheap hash so fixtures stay fast; check_password_hash reads the method from the string.
FAST_HASH = "pbkdf2:sha256:1000"

_EPOCH = datetime(2024, 1, 1, 8, 0)


def make_user(user_id: int, name: str, js_id: str, password: str, role: Role = Role.TRAINER, **kw) -> User:
    return User(
        user_id=user_id,
        name=name,
        js_id=js_id,
        password_hash=generate_password_hash(password, method=FAST_HASH),
        role=role,
        **kw,
    )


class InMemoryUsers:
    def __init__(self, users=()):
        self._by_id: dict[int, User] = {u.user_id: u for u in users}
        self._id = max(self._by_id, default=0)
        self.tasks: Optional["InMemoryTasks"] = None

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._by_id.get(int(user_id))

    def get_by_js_id(self, js_id: str) -> Optional[User]:
        for u in self._by_id.values():
            if u.js_id.lower() == (js_id or "").lower():
                return u
        return None

    def list_by_role(self, role: Role):
        return sorted((u for u in self._by_id.values() if u.role == role), key=lambda u: u.name)

    def create_user(self, *, name, js_id, password_hash, role, must_change_password) -> int:
        self._id += 1
        self._by_id[self._id] = User(
            user_id=self._id,
            name=name,
            js_id=js_id,
            password_hash=password_hash,
            role=role,
            must_change_password=must_change_password,
            created_at=_EPOCH,
        )
        return self._id

    def update_profile(self, user_id: int, *, name: str, js_id: str) -> bool:
        user = self._by_id.get(int(user_id))
        if not user:
            return False
        self._by_id[user.user_id] = replace(user, name=name, js_id=js_id)
        return True

    def set_password(self, user_id: int, *, password_hash: str, must_change_password: bool) -> bool:
        user = self._by_id.get(int(user_id))
        if not user:
            return False
        self._by_id[user.user_id] = replace(user, password_hash=password_hash, must_change_password=must_change_password)
        return True

    def delete_with_tasks(self, user_id: int) -> bool:
        if self.tasks is not None:
            self.tasks.drop_user(int(user_id))
        return self._by_id.pop(int(user_id), None) is not None


class InMemoryTasks:
    def __init__(self, users: InMemoryUsers):
        self._users = users
        self._rows: dict[int, Task] = {}
        self._id = 0
        self.fail_inserts = False
        users.tasks = self

    def seed(self, user_id: int, task_type: str, hours: float, work_date: date, **kw) -> int:
        draft = TaskDraft(
            task_type=task_type,
            custom_task_name=kw.pop("custom_task_name", None),
            hours=hours,
            work_date=work_date,
            **kw,
        )
        return self.create(user_id=user_id, draft=draft)

    def get(self, task_id: int) -> Optional[Task]:
        return self._rows.get(task_id)

    def drop_user(self, user_id: int) -> None:
        self._rows = {k: t for k, t in self._rows.items() if t.user_id != user_id}

    def list_for_user(self, user_id: int, work_date: Optional[date] = None):
        items = [t for t in self._rows.values() if t.user_id == user_id]
        if work_date is not None:
            items = [t for t in items if t.work_date == work_date]
        return sorted(items, key=lambda t: (t.created_at, t.task_id), reverse=True)

    def list_for_user_between(self, user_id: int, *, start: date, end: Optional[date] = None):
        items = [
            t
            for t in self._rows.values()
            if t.user_id == user_id and t.work_date >= start and (end is None or t.work_date <= end)
        ]
        return sorted(items, key=lambda t: (t.work_date, t.created_at, t.task_id), reverse=True)

    def create(self, *, user_id: int, draft: TaskDraft) -> int:
        if self.fail_inserts:
            return 0
        self._id += 1
        self._rows[self._id] = Task(
            task_id=self._id,
            user_id=user_id,
            task_type=draft.task_type,
            custom_task_name=draft.custom_task_name,
            hours=draft.hours,
            work_date=draft.work_date,
            start_time=draft.start_time,
            end_time=draft.end_time,
            remarks=draft.remarks,
            created_at=_EPOCH + timedelta(seconds=self._id),
        )
        return self._id

    def update_owned(self, *, task_id: int, user_id: int, draft: TaskDraft) -> bool:
        task = self._rows.get(task_id)
        if not task or task.user_id != user_id:
            return False
        self._rows[task_id] = replace(
            task,
            task_type=draft.task_type,
            custom_task_name=draft.custom_task_name,
            hours=draft.hours,
            work_date=draft.work_date,
            start_time=draft.start_time,
            end_time=draft.end_time,
            remarks=draft.remarks,
        )
        return True

    def delete_owned(self, *, task_id: int, user_id: int) -> bool:
        task = self._rows.get(task_id)
        if not task or task.user_id != user_id:
            return False
        del self._rows[task_id]
        return True

    def sum_hours(self, *, user_id: int, work_date: date) -> float:
        return round(sum(t.hours for t in self.list_for_user(user_id, work_date)), 2)

    def hours_by_user_and_type(self, work_date: date):
        grouped: dict[tuple[int, str], float] = defaultdict(float)
        for t in self._rows.values():
            user = self._users.get_by_id(t.user_id)
            if t.work_date == work_date and user and user.role == Role.TRAINER:
                grouped[(t.user_id, t.task_type)] += t.hours
        return [UserTypeHours(user_id=u, task_type=k, hours=h) for (u, k), h in grouped.items()]

    def trends_since(self, start: date):
        hours: dict[date, float] = defaultdict(float)
        people: dict[date, set[int]] = defaultdict(set)
        for t in self._rows.values():
            if t.work_date >= start:
                hours[t.work_date] += t.hours
                people[t.work_date].add(t.user_id)
        return [
            TrendPoint(work_date=d, total_hours=round(hours[d], 2), active_trainers=len(people[d]))
            for d in sorted(hours)
        ]

    def top_performers_since(self, start: date, *, limit: int):
        hours: dict[int, float] = defaultdict(float)
        counts: dict[int, int] = defaultdict(int)
        for t in self._rows.values():
            if t.work_date >= start:
                hours[t.user_id] += t.hours
                counts[t.user_id] += 1
        rows = [
            PerformerRow(
                user_id=u,
                name=self._users.get_by_id(u).name,
                total_hours=round(h, 1),
                tasks_count=counts[u],
            )
            for u, h in hours.items()
        ]
        return sorted(rows, key=lambda r: r.total_hours, reverse=True)[:limit]

    def export_rows(self, *, start: date, end: date):
        rows = []
        for t in self._rows.values():
            if start <= t.work_date <= end:
                user = self._users.get_by_id(t.user_id)
                rows.append(
                    ExportRow(
                        work_date=t.work_date,
                        trainer_name=user.name,
                        js_id=user.js_id,
                        task_type=t.task_type,
                        custom_task_name=t.custom_task_name,
                        hours=t.hours,
                        start_time=t.start_time,
                        end_time=t.end_time,
                        remarks=t.remarks,
                    )
                )
        rows.sort(key=lambda r: r.trainer_name)
        rows.sort(key=lambda r: r.work_date, reverse=True)
        return rows


class InMemoryTaskTypes:
    def __init__(self, names=()):
        self._by_id: dict[int, TaskType] = {}
        self._id = 0
        for n in names:
            self.create(n)

    def list_all(self):
        return sorted(self._by_id.values(), key=lambda t: t.name)

    def get_by_name(self, name: str) -> Optional[TaskType]:
        return next((t for t in self._by_id.values() if t.name == name), None)

    def create(self, name: str) -> int:
        if self.get_by_name(name):
            raise ValidationError("Task type already exists")
        self._id += 1
        self._by_id[self._id] = TaskType(type_id=self._id, name=name)
        return self._id

    def rename(self, type_id: int, name: str) -> bool:
        if type_id not in self._by_id:
            return False
        self._by_id[type_id] = TaskType(type_id=type_id, name=name)
        return True

    def delete_by_id(self, type_id: int) -> bool:
        return self._by_id.pop(type_id, None) is not None


class InMemoryAnnouncements:
    def __init__(self):
        self.items: list[Announcement] = []
        self.recipients: dict[int, list[int]] = {}

    def create(self, *, message, is_urgent, is_global, recipient_ids) -> int:
        announcement_id = len(self.items) + 1
        self.items.append(
            Announcement(
                announcement_id=announcement_id,
                message=message,
                is_urgent=is_urgent,
                is_global=is_global,
                created_at=_EPOCH + timedelta(minutes=announcement_id),
            )
        )
        self.recipients[announcement_id] = list(recipient_ids)
        return announcement_id

    def list_for_user(self, user_id: int, *, limit: int):
        visible = [a for a in self.items if a.is_global or user_id in self.recipients[a.announcement_id]]
        return list(reversed(visible))[:limit]

    def list_recent(self, *, limit: int):
        return list(reversed(self.items))[:limit]


class InMemoryAuditLogs:
    def __init__(self):
        self.entries: list[AuditLogEntry] = []

    def insert(self, *, user_id, action, details) -> None:
        self.entries.append(
            AuditLogEntry(
                log_id=len(self.entries) + 1,
                user_id=user_id,
                action=action,
                details=details,
                created_at=_EPOCH + timedelta(seconds=len(self.entries)),
            )
        )

    def list_recent(self, limit: int):
        return list(reversed(self.entries))[:limit]

    def actions(self) -> list[str]:
        return [e.action for e in self.entries]


class BrokenAuditLogs(InMemoryAuditLogs):
    def insert(self, *, user_id, action, details) -> None:
        raise RuntimeError("audit table unavailable")


@pytest.fixture
def users_repo():
    return InMemoryUsers(
        [
            make_user(1, "Admin", "ADMIN", "admin123", Role.ADMIN),
            make_user(2, "Alice", "JS100", "alice123"),
            make_user(3, "Bob", "JS200", "bob12345"),
            make_user(4, "Carol", "JS300", "carol123"),
        ]
    )


@pytest.fixture
def tasks_repo(users_repo):
    return InMemoryTasks(users_repo)


@pytest.fixture
def audit_repo():
    return InMemoryAuditLogs()


@pytest.fixture
def announcements_repo():
    return InMemoryAnnouncements()


@pytest.fixture
def task_types_repo():
    return InMemoryTaskTypes(["Call Audit", "Leave", "Holiday", "Half Day", "Others"])


@pytest.fixture
def container(users_repo, tasks_repo, task_types_repo, announcements_repo, audit_repo):
    return wire(
        users_repo=users_repo,
        tasks_repo=tasks_repo,
        task_types_repo=task_types_repo,
        announcements_repo=announcements_repo,
        audit_repo=audit_repo,
        default_password="Welcome@JS2026",
    )


@pytest.fixture
def app(container):
    return create_app(container, settings_module="config.testing")


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login_as(client):
    def _login(user_id: int, role: Role = Role.TRAINER):
        with client.session_transaction() as sess:
            sess["user_id"] = user_id
            sess["role"] = role.value
        return client

    return _login


@pytest.fixture
def broken_audit_repo():
    return BrokenAuditLogs()


@pytest.fixture
def empty_task_types_repo():
    return InMemoryTaskTypes()
