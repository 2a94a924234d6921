from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Announcement
from .repository import AnnouncementRepository


def _to_announcement(r: dict) -> Announcement:
    return Announcement(
        announcement_id=int(r["id"]),
        message=r["message"],
        is_urgent=bool(r["is_urgent"]),
        is_global=bool(r["is_global"]),
        created_at=r.get("created_at"),
    )


class MySQLAnnouncementRepository(AnnouncementRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, message: str, is_urgent: bool, is_global: bool, recipient_ids: Sequence[int]) -> int:
        # Single connection: commit happens once, after the recipients.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO announcements(message, is_urgent, is_global) VALUES(%s,%s,%s)",
                (message, 1 if is_urgent else 0, 1 if is_global else 0),
            )
            announcement_id = int(cur.lastrowid)

            if not is_global and recipient_ids:
                cur.executemany(
                    "INSERT INTO announcement_recipients(announcement_id, user_id) VALUES(%s,%s)",
                    [(announcement_id, int(uid)) for uid in recipient_ids],
                )
            return announcement_id

    def list_for_user(self, user_id: int, *, limit: int) -> Sequence[Announcement]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT DISTINCT a.id, a.message, a.is_urgent, a.is_global, a.created_at
                FROM announcements a
                LEFT JOIN announcement_recipients ar ON a.id = ar.announcement_id
                WHERE a.is_global = 1 OR ar.user_id = %s
                ORDER BY a.created_at DESC, a.id DESC
                LIMIT %s
                """,
                (user_id, int(limit)),
            )
            return [_to_announcement(r) for r in fetchall(cur)]

    def list_recent(self, *, limit: int) -> Sequence[Announcement]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, message, is_urgent, is_global, created_at
                FROM announcements
                ORDER BY created_at DESC, id DESC
                LIMIT %s
                """,
                (int(limit),),
            )
            return [_to_announcement(r) for r in fetchall(cur)]
