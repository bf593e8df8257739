from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import JoinStatus, RecordStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, like_params, or_like
from .model import Member, MemberProfile
from .repository import MemberRepository

_COLUMNS = """
    member_id, full_name, father_name, zone, mobile_number, address, education,
    email, cnic, dob, district, age, profession, image, status, join_status
"""

_SEARCH_COLUMNS = (
    "full_name",
    "father_name",
    "zone",
    "mobile_number",
    "address",
    "education",
    "email",
    "cnic",
    "district",
    "profession",
)


def row_to_member(r: dict) -> Member:
    return Member(
        member_id=int(r["member_id"]),
        full_name=r["full_name"],
        father_name=r["father_name"],
        zone=r["zone"],
        mobile_number=r["mobile_number"],
        address=r["address"],
        education=r["education"],
        email=r["email"],
        cnic=r["cnic"],
        dob=r.get("dob"),
        district=r["district"],
        age=int(r.get("age") or 0),
        profession=r["profession"],
        image=r.get("image"),
        status=RecordStatus(r.get("status") or "Y"),
        join_status=JoinStatus(r.get("join_status") or "Y"),
    )


def _profile_params(p: MemberProfile) -> tuple:
    return (
        p.full_name,
        p.father_name,
        p.zone,
        p.mobile_number,
        p.address,
        p.education,
        p.email,
        p.cnic,
        p.dob,
        p.district,
        p.age,
        p.profession,
        p.image,
    )


class MySQLMemberRepository(MemberRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, member_id: int) -> Optional[Member]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM members WHERE member_id=%s", (member_id,))
            r = fetchone(cur)
            return row_to_member(r) if r else None

    def create(self, profile: MemberProfile) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO members(
                    full_name, father_name, zone, mobile_number, address, education,
                    email, cnic, dob, district, age, profession, image
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                _profile_params(profile),
            )
            return int(cur.lastrowid)

    def update(self, member_id: int, profile: MemberProfile) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE members SET
                    full_name=%s, father_name=%s, zone=%s, mobile_number=%s, address=%s,
                    education=%s, email=%s, cnic=%s, dob=%s, district=%s, age=%s,
                    profession=%s, image=%s
                WHERE member_id=%s
                """,
                _profile_params(profile) + (member_id,),
            )

    def disable(self, member_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE members SET status=%s WHERE member_id=%s",
                (RecordStatus.DISABLED.value, member_id),
            )
            return cur.rowcount > 0

    def list_active(self, *, limit: int, offset: int) -> Sequence[Member]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM members
                WHERE status=%s
                ORDER BY member_id
                LIMIT %s OFFSET %s
                """,
                (RecordStatus.ACTIVE.value, int(limit), int(offset)),
            )
            return [row_to_member(r) for r in fetchall(cur)]

    def count_active(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM members WHERE status=%s", (RecordStatus.ACTIVE.value,))
            r = fetchone(cur)
            return int(r["total"]) if r else 0

    def search_free(self, term: str) -> Sequence[Member]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM members
                WHERE {or_like(_SEARCH_COLUMNS)}
                  AND status=%s AND join_status=%s
                ORDER BY full_name
                """,
                like_params(term, len(_SEARCH_COLUMNS)) + (RecordStatus.ACTIVE.value, JoinStatus.FREE.value),
            )
            return [row_to_member(r) for r in fetchall(cur)]

    def set_join_status(self, member_id: int, join_status: JoinStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE members SET join_status=%s WHERE member_id=%s",
                (join_status.value, member_id),
            )
            return cur.rowcount > 0

    def reset_all_joined(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE members SET join_status=%s WHERE join_status=%s",
                (JoinStatus.FREE.value, JoinStatus.JOINED.value),
            )
            return int(cur.rowcount)
