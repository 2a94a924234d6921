from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import User
from .repository import UserRepository

_COLUMNS = "id, name, js_id, password_hash, role, must_change_password, created_at"


def _to_user(row: dict) -> User:
    return User(
        user_id=int(row["id"]),
        name=row["name"],
        js_id=row["js_id"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        must_change_password=bool(row.get("must_change_password")),
        created_at=row.get("created_at"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE id=%s", (user_id,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_js_id(self, js_id: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE LOWER(js_id)=LOWER(%s)", (js_id,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def list_by_role(self, role: Role) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE role=%s ORDER BY name", (role.value,))
            return [_to_user(r) for r in fetchall(cur)]

    def create_user(
        self,
        *,
        name: str,
        js_id: str,
        password_hash: str,
        role: Role,
        must_change_password: bool,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(name, js_id, password_hash, role, must_change_password)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (name, js_id, password_hash, role.value, 1 if must_change_password else 0),
            )
            return int(cur.lastrowid)

    def update_profile(self, user_id: int, *, name: str, js_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET name=%s, js_id=%s WHERE id=%s", (name, js_id, user_id))
            return cur.rowcount > 0

    def set_password(self, user_id: int, *, password_hash: str, must_change_password: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE users SET password_hash=%s, must_change_password=%s WHERE id=%s",
                (password_hash, 1 if must_change_password else 0, user_id),
            )
            return cur.rowcount > 0

    def delete_with_tasks(self, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM tasks WHERE user_id=%s", (user_id,))
            cur.execute("DELETE FROM users WHERE id=%s", (user_id,))
            return cur.rowcount > 0
