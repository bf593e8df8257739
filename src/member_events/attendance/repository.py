from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceState
from .model import AttendanceDetail, AttendanceRecord


class AttendanceRepository(Protocol):
    def has_start_marker(self, event_id: int) -> bool:
        raise NotImplementedError

    def create_start_marker(self, event_id: int) -> int:
        raise NotImplementedError

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_member(self, event_id: int, member_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create_join(self, *, event_id: int, member_id: int, clockin: datetime) -> Optional[int]:
        """Insert a Join record; None when a record for (event, member) already exists."""
        raise NotImplementedError

    def clock_out(
        self,
        *,
        attendance_id: int,
        clockout: datetime,
        state: AttendanceState,
        present_hours: str,
        expected: AttendanceState,
    ) -> bool:
        """Compare-and-swap: only applies while the record is still open in `expected` state."""
        raise NotImplementedError

    def list_open(self, event_id: int) -> Sequence[AttendanceRecord]:
        """Member records of the event still missing a clock-out."""
        raise NotImplementedError

    def promote_state(self, event_id: int, *, current: AttendanceState, target: AttendanceState) -> int:
        raise NotImplementedError

    def list_details(
        self,
        event_id: int,
        *,
        state: Optional[AttendanceState] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> Sequence[AttendanceDetail]:
        raise NotImplementedError

    def count_details(self, event_id: int, *, state: Optional[AttendanceState] = None) -> int:
        raise NotImplementedError

    def search_details(self, term: str, *, state: AttendanceState) -> Sequence[AttendanceDetail]:
        raise NotImplementedError
