from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

import mysql.connector

from ..core.enums import AttendanceState
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, like_params, or_like
from ..members.mysql_member_repository import row_to_member
from .model import AttendanceDetail, AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "attendance_id, event_id, member_id, member_clockin, member_clockout, event_status, present_hours"

_DETAIL_SELECT = """
    SELECT
        a.attendance_id, a.event_id, a.member_id, a.member_clockin, a.member_clockout,
        a.event_status, a.present_hours,
        m.full_name, m.father_name, m.zone, m.mobile_number, m.address, m.education,
        m.email, m.cnic, m.dob, m.district, m.age, m.profession, m.image,
        m.status, m.join_status,
        e.event_name, e.event_date, e.start_time AS event_start_time
    FROM event_attendance a
    JOIN members m ON m.member_id = a.member_id
    JOIN events e ON e.event_id = a.event_id
"""

_DETAIL_SEARCH_COLUMNS = ("e.event_name", "m.full_name", "m.mobile_number", "e.event_date")


def _row_to_record(r: dict) -> AttendanceRecord:
    status = r.get("event_status")
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        event_id=int(r["event_id"]),
        member_id=int(r["member_id"]) if r.get("member_id") is not None else None,
        member_clockin=r.get("member_clockin"),
        member_clockout=r.get("member_clockout"),
        event_status=AttendanceState(status) if status else None,
        present_hours=r.get("present_hours"),
    )


def _row_to_detail(r: dict) -> AttendanceDetail:
    return AttendanceDetail(
        record=_row_to_record(r),
        member=row_to_member(r),
        event_name=r["event_name"],
        event_date=r.get("event_date"),
        event_start_time=r.get("event_start_time"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def has_start_marker(self, event_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT 1 AS found FROM event_attendance WHERE event_id=%s LIMIT 1", (event_id,))
            return fetchone(cur) is not None

    def create_start_marker(self, event_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO event_attendance(event_id) VALUES(%s)", (event_id,))
            return int(cur.lastrowid)

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM event_attendance WHERE attendance_id=%s", (attendance_id,))
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def get_for_member(self, event_id: int, member_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM event_attendance WHERE event_id=%s AND member_id=%s",
                (event_id, member_id),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def create_join(self, *, event_id: int, member_id: int, clockin: datetime) -> Optional[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    """
                    INSERT INTO event_attendance(event_id, member_id, member_clockin, event_status)
                    VALUES(%s,%s,%s,%s)
                    """,
                    (event_id, member_id, clockin, AttendanceState.JOIN.value),
                )
            except mysql.connector.IntegrityError:
                # uq_attendance_event_member: a concurrent request inserted first.
                return None
            return int(cur.lastrowid)

    def clock_out(
        self,
        *,
        attendance_id: int,
        clockout: datetime,
        state: AttendanceState,
        present_hours: str,
        expected: AttendanceState,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE event_attendance
                SET member_clockout=%s, event_status=%s, present_hours=%s
                WHERE attendance_id=%s AND member_clockout IS NULL AND event_status=%s
                """,
                (clockout, state.value, present_hours, attendance_id, expected.value),
            )
            return cur.rowcount > 0

    def list_open(self, event_id: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM event_attendance
                WHERE event_id=%s AND member_id IS NOT NULL AND member_clockout IS NULL
                ORDER BY attendance_id
                """,
                (event_id,),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def promote_state(self, event_id: int, *, current: AttendanceState, target: AttendanceState) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE event_attendance SET event_status=%s WHERE event_id=%s AND event_status=%s",
                (target.value, event_id, current.value),
            )
            return int(cur.rowcount)

    def list_details(
        self,
        event_id: int,
        *,
        state: Optional[AttendanceState] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> Sequence[AttendanceDetail]:
        sql = _DETAIL_SELECT + " WHERE a.event_id=%s"
        params: list[object] = [event_id]
        if state is not None:
            sql += " AND a.event_status=%s"
            params.append(state.value)
        sql += " ORDER BY a.member_clockin, a.attendance_id"
        if limit is not None:
            sql += " LIMIT %s OFFSET %s"
            params.extend([int(limit), int(offset)])

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_row_to_detail(r) for r in fetchall(cur)]

    def count_details(self, event_id: int, *, state: Optional[AttendanceState] = None) -> int:
        sql = "SELECT COUNT(*) AS total FROM event_attendance WHERE event_id=%s AND member_id IS NOT NULL"
        params: list[object] = [event_id]
        if state is not None:
            sql += " AND event_status=%s"
            params.append(state.value)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            r = fetchone(cur)
            return int(r["total"]) if r else 0

    def search_details(self, term: str, *, state: AttendanceState) -> Sequence[AttendanceDetail]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _DETAIL_SELECT
                + f" WHERE {or_like(_DETAIL_SEARCH_COLUMNS)} AND a.event_status=%s ORDER BY a.member_clockin DESC",
                like_params(term, len(_DETAIL_SEARCH_COLUMNS)) + (state.value,),
            )
            return [_row_to_detail(r) for r in fetchall(cur)]
