from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceState
from ..members.model import Member


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one member's attendance within one event.

    A row with `member_id=None` is the event's start marker.
    """

    attendance_id: int
    event_id: int
    member_id: Optional[int]
    member_clockin: Optional[datetime]
    member_clockout: Optional[datetime]
    event_status: Optional[AttendanceState]
    present_hours: Optional[str] = None

    @property
    def is_start_marker(self) -> bool:
        return self.member_id is None


@dataclass(frozen=True)
class AttendanceDetail:
    """Read-model: attendance record merged with member and event fields."""

    record: AttendanceRecord
    member: Member
    event_name: str
    event_date: Optional[date] = None
    event_start_time: Optional[datetime] = None


@dataclass(frozen=True)
class JoinResult:
    """Outcome of a join/clock request: which state it produced and the affected rows."""

    state: AttendanceState
    member: Member
    record: AttendanceRecord
