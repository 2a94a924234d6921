from __future__ import annotations

from contextlib import contextmanager
from datetime import date, time, timedelta
from typing import Any, Dict, List, Optional

from ..common.datetime_utils import parse_clock_time, parse_iso_date
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield ``(conn, cursor)``; commit on normal exit, roll back on any error."""
    conn = conn_factory.connect()
    cur = conn.cursor(dictionary=dictionary)
    try:
        yield conn, cur
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        cur.close()
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    return cur.fetchone() or None


def fetchall(cur) -> List[Dict[str, Any]]:
    return list(cur.fetchall() or [])


def to_hours(value: Any) -> float:
    # DECIMAL and SUM() come back as Decimal; SUM() over no rows is NULL.
    return float(value) if value is not None else 0.0


def to_date(value: Any) -> date:
    return value if isinstance(value, date) else parse_iso_date(str(value))


def to_clock_time(value: Any) -> Optional[time]:
    """TIME columns arrive as ``timedelta`` from the C extension, ``time`` or str otherwise."""
    if value is None or isinstance(value, time):
        return value
    if isinstance(value, timedelta):
        minutes, seconds = divmod(int(value.total_seconds()) % 86400, 60)
        return time(*divmod(minutes, 60), seconds)
    return parse_clock_time(str(value).strip())
