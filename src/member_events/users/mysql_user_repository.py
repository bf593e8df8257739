from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Operator
from .repository import OperatorRepository

_COLUMNS = "user_id, name, email, password, mobile_number, role"


def _row_to_operator(row: dict) -> Operator:
    return Operator(
        user_id=int(row["user_id"]),
        name=row["name"],
        email=row["email"],
        password=row.get("password"),
        mobile_number=row.get("mobile_number"),
        role=row.get("role") or "admin",
    )


class MySQLOperatorRepository(OperatorRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_email(self, email: str) -> Optional[Operator]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE email=%s", (email,))
            row = fetchone(cur)
            return _row_to_operator(row) if row else None

    def get_by_id(self, user_id: int) -> Optional[Operator]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id=%s", (user_id,))
            row = fetchone(cur)
            return _row_to_operator(row) if row else None

    def update_password(self, user_id: int, password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET password=%s WHERE user_id=%s", (password_hash, user_id))
            return cur.rowcount > 0
