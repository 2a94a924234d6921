from __future__ import annotations

from typing import Optional, Sequence

from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from ..core.exceptions import ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import TaskType
from .repository import TaskTypeRepository

DUPLICATE_MESSAGE = "Task type already exists"


class MySQLTaskTypeRepository(TaskTypeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[TaskType]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name FROM task_types ORDER BY name")
            return [TaskType(type_id=int(r["id"]), name=r["name"]) for r in fetchall(cur)]

    def get_by_name(self, name: str) -> Optional[TaskType]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name FROM task_types WHERE name=%s", (name,))
            r = fetchone(cur)
            return TaskType(type_id=int(r["id"]), name=r["name"]) if r else None

    def create(self, name: str) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("INSERT INTO task_types(name) VALUES(%s)", (name,))
                return int(cur.lastrowid)
        except IntegrityError as e:
            if e.errno == errorcode.ER_DUP_ENTRY:
                raise ValidationError(DUPLICATE_MESSAGE) from e
            raise

    def rename(self, type_id: int, name: str) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("UPDATE task_types SET name=%s WHERE id=%s", (name, type_id))
                return cur.rowcount > 0
        except IntegrityError as e:
            if e.errno == errorcode.ER_DUP_ENTRY:
                raise ValidationError(DUPLICATE_MESSAGE) from e
            raise

    def delete_by_id(self, type_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM task_types WHERE id=%s", (type_id,))
            return cur.rowcount > 0
