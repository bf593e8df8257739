from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

import mysql.connector
from werkzeug.security import generate_password_hash

from .connection import DBConfig

logger = logging.getLogger(__name__)

DEMO_OPERATOR = {
    "name": "Admin Demo",
    "email": "admin@example.com",
    "password": "admin123",
    "mobile_number": "03000000000",
}


def _connect(target: DBConfig, *, with_database: bool = True):
    return mysql.connector.connect(use_pure=True, **target.connect_kwargs(with_database=with_database))


def strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql usable regardless of the configured DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a SQL script on ';' outside of quotes, dropping '--' comment lines."""

    sql = "\n".join(line for line in sql.splitlines() if not line.lstrip().startswith("--"))

    buf: list[str] = []
    quote: str | None = None
    escape = False

    for ch in sql:
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch in ("'", '"'):
            if quote is None:
                quote = ch
            elif quote == ch:
                quote = None
            buf.append(ch)
            continue

        if ch == ";" and quote is None:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _run_script(db_config: dict, path: str | Path) -> int:
    target = DBConfig.from_mapping(db_config)
    sql = strip_create_db_and_use(Path(path).read_text(encoding="utf-8"))

    conn = _connect(target)
    count = 0
    try:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
            count += 1
        conn.commit()
    finally:
        conn.close()
    return count


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_mapping(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    count = _run_script(db_config, schema_path)
    logger.info("applied %s statements from %s", count, schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    count = _run_script(db_config, seed_path)
    logger.info("applied %s seed statements from %s", count, seed_path)


def ensure_demo_operator(db_config: dict) -> None:
    """Create (or reset the password of) the demo operator account."""

    target = DBConfig.from_mapping(db_config)
    password_hash = generate_password_hash(DEMO_OPERATOR["password"])

    conn = _connect(target)
    try:
        cur = conn.cursor(dictionary=True)
        cur.execute("SELECT user_id FROM users WHERE email=%s", (DEMO_OPERATOR["email"],))
        if cur.fetchone():
            cur.execute(
                "UPDATE users SET name=%s, password=%s, mobile_number=%s WHERE email=%s",
                (DEMO_OPERATOR["name"], password_hash, DEMO_OPERATOR["mobile_number"], DEMO_OPERATOR["email"]),
            )
        else:
            cur.execute(
                """
                INSERT INTO users (name, email, password, mobile_number, role)
                VALUES (%s, %s, %s, %s, 'admin')
                """,
                (DEMO_OPERATOR["name"], DEMO_OPERATOR["email"], password_hash, DEMO_OPERATOR["mobile_number"]),
            )
        conn.commit()
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(DBConfig.from_mapping(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
