from datetime import time, timedelta
from decimal import Decimal
from pathlib import Path

from src.worklog.worklog.database.bootstrap import _DB_SWITCH, iter_sql_statements
from src.worklog.worklog.database.mysql_base import to_clock_time, to_hours

DATABASE_DIR = Path(__file__).resolve().parents[1] / "database"


def test_statements_split_outside_quotes():
    sql = """
    -- comment; not a statement
    INSERT INTO announcements(message) VALUES ('a; b');
    INSERT INTO announcements(message) VALUES ("it\\'s; fine")
    """
    assert list(iter_sql_statements(sql)) == [
        "INSERT INTO announcements(message) VALUES ('a; b')",
        'INSERT INTO announcements(message) VALUES ("it\\\'s; fine")',
    ]


def test_schema_creates_every_table():
    sql = _DB_SWITCH.sub("", (DATABASE_DIR / "schema.sql").read_text(encoding="utf-8"))
    statements = list(iter_sql_statements(sql))

    created = [s.split()[5] for s in statements if s.upper().startswith("CREATE TABLE IF NOT EXISTS")]
    assert created == ["users", "task_types", "tasks", "announcements", "announcement_recipients", "audit_logs"]


def test_seed_is_single_insert():
    statements = list(iter_sql_statements((DATABASE_DIR / "seed.sql").read_text(encoding="utf-8")))
    assert len(statements) == 1
    assert "'Others'" in statements[0]


def test_mysql_value_conversions():
    assert to_hours(None) == 0.0
    assert to_hours(Decimal("7.50")) == 7.5
    assert to_clock_time(timedelta(hours=9, minutes=30)) == time(9, 30)
    assert to_clock_time("08:15:00") == time(8, 15)
    assert to_clock_time(None) is None
