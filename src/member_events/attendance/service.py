from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import is_zero_datetime, now_local
from ..common.paging import Page, page_offset
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_PAGE_SIZE
from ..core.enums import AttendanceAction, AttendanceState, JoinStatus
from ..core.exceptions import AlreadyClockedOut, EventNotFound, MemberNotFound, NotStarted, PersistenceFailure
from ..events.model import Event
from ..events.repository import EventRepository
from ..members.model import Member
from ..members.repository import MemberRepository
from .duration import format_duration
from .model import AttendanceDetail, AttendanceRecord, JoinResult
from .repository import AttendanceRepository
from .states import transition

logger = logging.getLogger(__name__)


class AttendanceTracker:
    """Event attendance lifecycle: start, join/leave, end.

    Each state change is a single conditional write, so two requests racing on
    the same (event, member) pair cannot both win. Nothing is retried: a failed
    write surfaces as PersistenceFailure.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        events: EventRepository,
        members: MemberRepository,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        self._attendance = attendance
        self._events = events
        self._members = members
        self._page_size = int(page_size)

    def _get_event(self, event_id: int) -> Event:
        event = self._events.get_by_id(event_id)
        if not event:
            raise EventNotFound("Event not found!")
        return event

    def start_event(self, event_id: int, *, now: datetime | None = None) -> Event:
        now = now or now_local()
        event = self._get_event(event_id)

        has_marker = self._attendance.has_start_marker(event_id)
        if not has_marker or not event.is_started:
            if not has_marker:
                self._attendance.create_start_marker(event_id)
            # start_time is only written while still unset.
            self._events.stamp_start(event_id, now)
            logger.info("event %s started", event_id)

        return self._get_event(event_id)

    def join_event(self, event_id: int, member_id: int, *, now: datetime | None = None) -> JoinResult:
        """Clock a member in on the first call and out on the second."""

        now = now or now_local()

        if not self._attendance.has_start_marker(event_id):
            raise NotStarted("Please start an event to continue!")

        member = self._members.get_by_id(member_id)
        if not member:
            raise MemberNotFound("Member not found!")

        record = self._attendance.get_for_member(event_id, member_id)
        if record is None:
            attendance_id = self._attendance.create_join(event_id=event_id, member_id=member_id, clockin=now)
            if attendance_id is not None:
                self._members.set_join_status(member_id, JoinStatus.JOINED)
                logger.info("member %s joined event %s", member_id, event_id)
                return JoinResult(
                    state=AttendanceState.JOIN,
                    member=self._members.get_by_id(member_id) or member,
                    record=self._require_record(attendance_id),
                )
            # Lost the insert race: the member is already inside, so this is their second clock.
            record = self._attendance.get_for_member(event_id, member_id)
            if record is None:
                raise PersistenceFailure(f"attendance row for member {member_id} in event {event_id} vanished")

        return self._clock_out(record, member_id=member_id, now=now, member=member)

    def _clock_out(self, record: AttendanceRecord, *, member_id: int, now: datetime, member: Member) -> JoinResult:
        target = transition(record.event_status, AttendanceAction.CLOCK)
        clockin = record.member_clockin or now
        present_hours = format_duration(clockin, now)

        swapped = self._attendance.clock_out(
            attendance_id=record.attendance_id,
            clockout=now,
            state=target,
            present_hours=present_hours,
            expected=AttendanceState.JOIN,
        )
        if not swapped:
            # Another request (or an end-of-event sweep) closed the record first.
            raise AlreadyClockedOut("You have already clocked out!")

        logger.info("member %s left event %s after %s", member_id, record.event_id, present_hours)
        return JoinResult(state=target, member=member, record=self._require_record(record.attendance_id))

    def end_event(
        self,
        event_id: int,
        end_note: Optional[str] = None,
        *,
        now: datetime | None = None,
    ) -> list[AttendanceDetail]:
        """Close the event, clock out everyone still inside and free joined members.

        The per-member sweep is not transactional as a whole: if one update
        fails, records already closed stay closed.
        """

        now = now or now_local()
        event = self._get_event(event_id)
        if not event.is_started:
            raise EventNotFound("Event has no recorded start time!")

        end_time = event.end_time
        if end_time is None or is_zero_datetime(end_time):
            self._events.stamp_end(event_id, now)
            end_time = now

        present_time = format_duration(event.start_time, end_time)
        self._events.close(event_id, present_time=present_time, end_note=end_note)

        closed = 0
        for record in self._attendance.list_open(event_id):
            target = transition(record.event_status, AttendanceAction.END)
            hours = format_duration(record.member_clockin or now, now)
            if self._attendance.clock_out(
                attendance_id=record.attendance_id,
                clockout=now,
                state=target,
                present_hours=hours,
                expected=AttendanceState.JOIN,
            ):
                closed += 1

        promoted = self._attendance.promote_state(
            event_id,
            current=AttendanceState.LEAVE,
            target=transition(AttendanceState.LEAVE, AttendanceAction.END),
        )

        # Releases every joined member system-wide, not only this event's attendees.
        released = self._members.reset_all_joined()

        logger.info(
            "event %s ended after %s (clocked out=%s, leave->end=%s, members released=%s)",
            event_id,
            present_time,
            closed,
            promoted,
            released,
        )
        return list(self._attendance.list_details(event_id))

    def list_by_state(self, event_id: int, state: AttendanceState, page: int = 1) -> Page[AttendanceDetail]:
        items = self._attendance.list_details(
            event_id,
            state=state,
            limit=self._page_size,
            offset=page_offset(page, self._page_size),
        )
        total = self._attendance.count_details(event_id, state=state)
        return Page(items=items, page=page, page_size=self._page_size, total=total)

    def search_event_details(self, query: Optional[str]) -> list[AttendanceDetail]:
        """Currently joined members whose event or profile matches the query."""
        term = require_non_empty(query or "", "Search query")
        return list(self._attendance.search_details(term, state=AttendanceState.JOIN))

    def _require_record(self, attendance_id: int) -> AttendanceRecord:
        record = self._attendance.get_by_id(attendance_id)
        if record is None:
            raise PersistenceFailure(f"attendance row {attendance_id} not readable after write")
        return record
