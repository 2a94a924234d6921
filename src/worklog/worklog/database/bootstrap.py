"""Schema and seed helpers used by ``scripts/init_db.py`` and app start-up."""
from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

import mysql.connector
from werkzeug.security import generate_password_hash

from ..core.enums import Role
from .connection import DBConfig

logger = logging.getLogger(__name__)

DEFAULT_DATABASE = "worklog_db"

DEMO_USERS = (
    ("Admin Demo", "admin", "admin123", Role.ADMIN),
    ("Trainer Demo", "trainer", "trainer123", Role.TRAINER),
)

# Quoted literals are kept whole so a ';' inside them never ends a statement.
_SQL_TOKEN = re.compile(r"""'(?:[^'\\]|\\.)*'|"(?:[^"\\]|\\.)*"|;|[^'";]+|.""", re.S)
_DB_SWITCH = re.compile(r"(?im)^\s*(?:CREATE\s+DATABASE|USE)\b[^;]*;\s*$")


def _target(db_config: dict) -> DBConfig:
    return DBConfig.from_dict(
        {
            "host": db_config.get("host", "localhost"),
            "port": db_config.get("port", 3306),
            "user": db_config.get("user", "root"),
            "password": db_config.get("password", ""),
            "database": db_config.get("database", DEFAULT_DATABASE),
        }
    )


@contextmanager
def _session(db_config: dict, *, with_database: bool = True) -> Iterator:
    target = _target(db_config)
    params = dict(host=target.host, port=target.port, user=target.user, password=target.password, use_pure=True)
    if with_database:
        params["database"] = target.database

    conn = mysql.connector.connect(**params)
    try:
        yield conn, conn.cursor()
        conn.commit()
    finally:
        conn.close()


def iter_sql_statements(sql: str) -> Iterator[str]:
    """Yield the statements of a script, skipping ``--`` comment lines."""
    body = "\n".join(ln for ln in sql.splitlines() if not ln.lstrip().startswith("--"))

    pending: list[str] = []
    for match in _SQL_TOKEN.finditer(body):
        token = match.group(0)
        if token != ";":
            pending.append(token)
            continue
        statement = "".join(pending).strip()
        pending = []
        if statement:
            yield statement

    statement = "".join(pending).strip()
    if statement:
        yield statement


def _execute_script(db_config: dict, path: str | Path) -> int:
    # The configured database wins over any CREATE DATABASE / USE in the file.
    sql = _DB_SWITCH.sub("", Path(path).read_text(encoding="utf-8"))
    count = 0
    with _session(db_config) as (_, cur):
        for statement in iter_sql_statements(sql):
            cur.execute(statement)
            count += 1
    return count


def ensure_database_exists(db_config: dict) -> None:
    name = _target(db_config).database
    with _session(db_config, with_database=False) as (_, cur):
        cur.execute(f"CREATE DATABASE IF NOT EXISTS `{name}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci")


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    count = _execute_script(db_config, schema_path)
    logger.info("Applied %s (%d statements)", schema_path, count)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    count = _execute_script(db_config, seed_path)
    logger.info("Applied %s (%d statements)", seed_path, count)


def ensure_demo_users(db_config: dict) -> None:
    """Create (or reset) the demo admin and trainer accounts."""
    with _session(db_config) as (_, cur):
        for name, js_id, password, role in DEMO_USERS:
            cur.execute(
                """
                INSERT INTO users (name, js_id, password_hash, role, must_change_password)
                VALUES (%s, %s, %s, %s, 0)
                ON DUPLICATE KEY UPDATE
                    name=VALUES(name), password_hash=VALUES(password_hash),
                    role=VALUES(role), must_change_password=0
                """,
                (name, js_id, generate_password_hash(password), role.value),
            )
            logger.debug("demo user %s ready", js_id)


def list_tables(db_config: dict) -> list[str]:
    with _session(db_config) as (_, cur):
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
