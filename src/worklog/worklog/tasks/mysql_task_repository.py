from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_clock_time, to_date, to_hours
from .model import ExportRow, PerformerRow, Task, TaskDraft, TrendPoint, UserTypeHours
from .repository import TaskRepository

_TASK_COLUMNS = "id, user_id, task_type, custom_task_name, hours, date, start_time, end_time, remarks, created_at"


def _to_task(r: dict) -> Task:
    return Task(
        task_id=int(r["id"]),
        user_id=int(r["user_id"]),
        task_type=r["task_type"],
        custom_task_name=r.get("custom_task_name"),
        hours=to_hours(r["hours"]),
        work_date=to_date(r["date"]),
        start_time=to_clock_time(r.get("start_time")),
        end_time=to_clock_time(r.get("end_time")),
        remarks=r.get("remarks"),
        created_at=r.get("created_at"),
    )


def _draft_params(draft: TaskDraft) -> tuple:
    return (
        draft.task_type,
        draft.custom_task_name,
        draft.hours,
        draft.work_date,
        draft.start_time,
        draft.end_time,
        draft.remarks,
    )


class MySQLTaskRepository(TaskRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_user(self, user_id: int, work_date: Optional[date] = None) -> Sequence[Task]:
        query = f"SELECT {_TASK_COLUMNS} FROM tasks WHERE user_id=%s"
        params: list[object] = [user_id]
        if work_date is not None:
            query += " AND date=%s"
            params.append(work_date)
        query += " ORDER BY created_at DESC, id DESC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(query, tuple(params))
            return [_to_task(r) for r in fetchall(cur)]

    def list_for_user_between(self, user_id: int, *, start: date, end: Optional[date] = None) -> Sequence[Task]:
        clauses = ["user_id=%s", "date>=%s"]
        params: list[object] = [user_id, start]
        if end is not None:
            clauses.append("date<=%s")
            params.append(end)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_TASK_COLUMNS}
                FROM tasks
                WHERE {where}
                ORDER BY date DESC, created_at DESC, id DESC
                """,
                tuple(params),
            )
            return [_to_task(r) for r in fetchall(cur)]

    def create(self, *, user_id: int, draft: TaskDraft) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO tasks(user_id, task_type, custom_task_name, hours, date, start_time, end_time, remarks)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (user_id, *_draft_params(draft)),
            )
            if cur.rowcount < 1:
                return 0
            return int(cur.lastrowid)

    def update_owned(self, *, task_id: int, user_id: int, draft: TaskDraft) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE tasks
                SET task_type=%s, custom_task_name=%s, hours=%s, date=%s, start_time=%s, end_time=%s, remarks=%s
                WHERE id=%s AND user_id=%s
                """,
                (*_draft_params(draft), task_id, user_id),
            )
            return cur.rowcount > 0

    def delete_owned(self, *, task_id: int, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM tasks WHERE id=%s AND user_id=%s", (task_id, user_id))
            return cur.rowcount > 0

    def sum_hours(self, *, user_id: int, work_date: date) -> float:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT SUM(hours) AS total FROM tasks WHERE user_id=%s AND date=%s",
                (user_id, work_date),
            )
            row = fetchone(cur)
            return to_hours(row.get("total") if row else None)

    def hours_by_user_and_type(self, work_date: date) -> Sequence[UserTypeHours]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT t.user_id, t.task_type, SUM(t.hours) AS hours
                FROM tasks t
                JOIN users u ON u.id = t.user_id
                WHERE t.date=%s AND u.role='trainer'
                GROUP BY t.user_id, t.task_type
                """,
                (work_date,),
            )
            return [
                UserTypeHours(user_id=int(r["user_id"]), task_type=r["task_type"], hours=to_hours(r["hours"]))
                for r in fetchall(cur)
            ]

    def trends_since(self, start: date) -> Sequence[TrendPoint]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT date, SUM(hours) AS total_hours, COUNT(DISTINCT user_id) AS active_trainers
                FROM tasks
                WHERE date >= %s
                GROUP BY date
                ORDER BY date ASC
                """,
                (start,),
            )
            return [
                TrendPoint(
                    work_date=to_date(r["date"]),
                    total_hours=to_hours(r["total_hours"]),
                    active_trainers=int(r["active_trainers"]),
                )
                for r in fetchall(cur)
            ]

    def top_performers_since(self, start: date, *, limit: int) -> Sequence[PerformerRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT u.id, u.name, ROUND(SUM(t.hours), 1) AS total_hours, COUNT(t.id) AS tasks_count
                FROM tasks t
                JOIN users u ON t.user_id = u.id
                WHERE t.date >= %s
                GROUP BY u.id, u.name
                ORDER BY total_hours DESC
                LIMIT %s
                """,
                (start, int(limit)),
            )
            return [
                PerformerRow(
                    user_id=int(r["id"]),
                    name=r["name"],
                    total_hours=to_hours(r["total_hours"]),
                    tasks_count=int(r["tasks_count"]),
                )
                for r in fetchall(cur)
            ]

    def export_rows(self, *, start: date, end: date) -> Sequence[ExportRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT t.date, u.name AS trainer_name, u.js_id, t.task_type, t.custom_task_name,
                       t.hours, t.start_time, t.end_time, t.remarks
                FROM tasks t
                JOIN users u ON t.user_id = u.id
                WHERE t.date >= %s AND t.date <= %s
                ORDER BY t.date DESC, u.name ASC
                """,
                (start, end),
            )
            return [
                ExportRow(
                    work_date=to_date(r["date"]),
                    trainer_name=r["trainer_name"],
                    js_id=r["js_id"],
                    task_type=r["task_type"],
                    custom_task_name=r.get("custom_task_name"),
                    hours=to_hours(r["hours"]),
                    start_time=to_clock_time(r.get("start_time")),
                    end_time=to_clock_time(r.get("end_time")),
                    remarks=r.get("remarks"),
                )
                for r in fetchall(cur)
            ]
