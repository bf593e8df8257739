from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import is_zero_datetime
from ..core.enums import RecordStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, like_params, or_like
from .model import Event, EventDetails
from .repository import EventRepository

_COLUMNS = """
    event_id, event_name, event_date, location, description, image,
    focal_person_name, focal_person_number, focal_person_email,
    info_person_name, info_person_number, info_person_email, event_type,
    start_time, end_time, present_time, end_note, event_status
"""

_SEARCH_COLUMNS = (
    "event_name",
    "location",
    "description",
    "focal_person_name",
    "focal_person_email",
    "info_person_name",
    "info_person_email",
)


def _timestamp(value):
    # Zero-date sentinels come back as strings from some connector builds.
    return None if is_zero_datetime(value) else value


def row_to_event(r: dict) -> Event:
    return Event(
        event_id=int(r["event_id"]),
        event_name=r["event_name"],
        event_date=r.get("event_date"),
        location=r["location"],
        focal_person_name=r["focal_person_name"],
        focal_person_number=r["focal_person_number"],
        focal_person_email=r["focal_person_email"],
        description=r.get("description"),
        image=r.get("image"),
        info_person_name=r.get("info_person_name"),
        info_person_number=r.get("info_person_number"),
        info_person_email=r.get("info_person_email"),
        event_type=r.get("event_type"),
        start_time=_timestamp(r.get("start_time")),
        end_time=_timestamp(r.get("end_time")),
        present_time=r.get("present_time"),
        end_note=r.get("end_note"),
        event_status=RecordStatus(r.get("event_status") or "Y"),
    )


def _details_params(d: EventDetails) -> tuple:
    return (
        d.event_name,
        d.event_date,
        d.location,
        d.description,
        d.image,
        d.focal_person_name,
        d.focal_person_number,
        d.focal_person_email,
        d.info_person_name,
        d.info_person_number,
        d.info_person_email,
        d.event_type,
    )


class MySQLEventRepository(EventRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, event_id: int) -> Optional[Event]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM events WHERE event_id=%s", (event_id,))
            r = fetchone(cur)
            return row_to_event(r) if r else None

    def get_by_name(self, event_name: str) -> Optional[Event]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM events WHERE event_name=%s", (event_name,))
            r = fetchone(cur)
            return row_to_event(r) if r else None

    def create(self, details: EventDetails) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO events(
                    event_name, event_date, location, description, image,
                    focal_person_name, focal_person_number, focal_person_email,
                    info_person_name, info_person_number, info_person_email, event_type
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                _details_params(details),
            )
            return int(cur.lastrowid)

    def update(self, event_id: int, details: EventDetails) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE events SET
                    event_name=%s, event_date=%s, location=%s, description=%s, image=%s,
                    focal_person_name=%s, focal_person_number=%s, focal_person_email=%s,
                    info_person_name=%s, info_person_number=%s, info_person_email=%s, event_type=%s
                WHERE event_id=%s
                """,
                _details_params(details) + (event_id,),
            )

    def disable(self, event_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE events SET event_status=%s WHERE event_id=%s",
                (RecordStatus.DISABLED.value, event_id),
            )
            return cur.rowcount > 0

    def list_active(self, *, limit: int) -> Sequence[Event]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM events WHERE event_status=%s ORDER BY event_date DESC, event_id DESC LIMIT %s",
                (RecordStatus.ACTIVE.value, int(limit)),
            )
            return [row_to_event(r) for r in fetchall(cur)]

    def search_active(self, term: str) -> Sequence[Event]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM events
                WHERE {or_like(_SEARCH_COLUMNS)} AND event_status=%s
                ORDER BY event_date DESC
                """,
                like_params(term, len(_SEARCH_COLUMNS)) + (RecordStatus.ACTIVE.value,),
            )
            return [row_to_event(r) for r in fetchall(cur)]

    def stamp_start(self, event_id: int, at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE events SET start_time=COALESCE(start_time, %s) WHERE event_id=%s",
                (at, event_id),
            )
            return cur.rowcount > 0

    def stamp_end(self, event_id: int, at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE events SET end_time=%s WHERE event_id=%s", (at, event_id))
            return cur.rowcount > 0

    def close(self, event_id: int, *, present_time: str, end_note: Optional[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE events SET present_time=%s, end_note=%s WHERE event_id=%s",
                (present_time, end_note, event_id),
            )
            return cur.rowcount > 0
