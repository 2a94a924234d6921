from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AuditLogEntry
from .repository import AuditLogRepository


class MySQLAuditLogRepository(AuditLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def insert(self, *, user_id: Optional[int], action: str, details: Optional[str]) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO audit_logs(user_id, action, details) VALUES(%s,%s,%s)",
                (user_id, action, details),
            )

    def list_recent(self, limit: int) -> Sequence[AuditLogEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT a.id, a.user_id, a.action, a.details, a.created_at,
                       u.name AS user_name, u.js_id
                FROM audit_logs a
                LEFT JOIN users u ON a.user_id = u.id
                ORDER BY a.created_at DESC, a.id DESC
                LIMIT %s
                """,
                (int(limit),),
            )
            return [
                AuditLogEntry(
                    log_id=int(r["id"]),
                    user_id=r.get("user_id"),
                    action=r["action"],
                    details=r.get("details"),
                    created_at=r["created_at"],
                    user_name=r.get("user_name"),
                    js_id=r.get("js_id"),
                )
                for r in fetchall(cur)
            ]
