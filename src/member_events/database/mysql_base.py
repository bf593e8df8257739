from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, List, Optional, Sequence

import mysql.connector

from ..core.exceptions import PersistenceFailure
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield (connection, cursor); commit on success, rollback on error.

    Driver errors surface as PersistenceFailure so services never have to know
    about mysql.connector.
    """

    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as exc:
        raise PersistenceFailure(f"Database connection failed: {exc}") from exc

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as exc:
        conn.rollback()
        raise PersistenceFailure(str(exc)) from exc
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def like_params(term: str, count: int) -> tuple:
    """Same %term% wildcard repeated for each searched column."""
    pattern = f"%{term}%"
    return tuple(pattern for _ in range(count))


def or_like(columns: Sequence[str]) -> str:
    return "(" + " OR ".join(f"{c} LIKE %s" for c in columns) + ")"
