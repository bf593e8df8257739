from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional

import pytest

from member_events.attendance.model import AttendanceDetail, AttendanceRecord
from member_events.attendance.service import AttendanceTracker
from member_events.core.enums import AttendanceState, JoinStatus, RecordStatus, RegionKind
from member_events.events.model import Event, EventDetails
from member_events.members.model import Member, MemberProfile
from member_events.regions.model import Region
from member_events.users.model import Operator


class InMemoryOperators:
    def __init__(self, operators: list[Operator] | None = None):
        self.by_id: dict[int, Operator] = {o.user_id: o for o in operators or []}
        self.password_updates: list[tuple[int, str]] = []

    def get_by_email(self, email: str) -> Optional[Operator]:
        return next((o for o in self.by_id.values() if o.email == email), None)

    def get_by_id(self, user_id: int) -> Optional[Operator]:
        return self.by_id.get(user_id)

    def update_password(self, user_id: int, password_hash: str) -> bool:
        op = self.by_id.get(user_id)
        if not op:
            return False
        self.by_id[user_id] = replace(op, password=password_hash)
        self.password_updates.append((user_id, password_hash))
        return True


class InMemoryMembers:
    def __init__(self):
        self.by_id: dict[int, Member] = {}
        self._id = 0

    def add(self, full_name: str = "Ali Raza", **overrides) -> Member:
        self._id += 1
        fields = dict(
            member_id=self._id,
            full_name=full_name,
            father_name="Raza Khan",
            zone="North",
            mobile_number=f"0300{self._id:07d}",
            address="12 Mall Road",
            education="BSc",
            email=f"member{self._id}@example.com",
            cnic=f"35202-{self._id:07d}-1",
            dob=date(1990, 5, 17),
            district="Lahore",
            age=35,
            profession="Engineer",
        )
        fields.update(overrides)
        member = Member(**fields)
        self.by_id[member.member_id] = member
        return member

    def get_by_id(self, member_id: int) -> Optional[Member]:
        return self.by_id.get(member_id)

    def create(self, profile: MemberProfile) -> int:
        self._id += 1
        self.by_id[self._id] = Member(member_id=self._id, **vars(profile))
        return self._id

    def update(self, member_id: int, profile: MemberProfile) -> None:
        current = self.by_id[member_id]
        self.by_id[member_id] = replace(current, **vars(profile))

    def disable(self, member_id: int) -> bool:
        current = self.by_id.get(member_id)
        if not current:
            return False
        self.by_id[member_id] = replace(current, status=RecordStatus.DISABLED)
        return True

    def _active(self) -> list[Member]:
        return [m for m in sorted(self.by_id.values(), key=lambda m: m.member_id) if m.status == RecordStatus.ACTIVE]

    def list_active(self, *, limit: int, offset: int):
        return self._active()[offset : offset + limit]

    def count_active(self) -> int:
        return len(self._active())

    def search_free(self, term: str):
        term = term.lower()
        return [
            m
            for m in self._active()
            if m.join_status == JoinStatus.FREE
            and any(term in str(v).lower() for v in (m.full_name, m.father_name, m.zone, m.mobile_number, m.email))
        ]

    def set_join_status(self, member_id: int, join_status: JoinStatus) -> bool:
        current = self.by_id.get(member_id)
        if not current:
            return False
        self.by_id[member_id] = replace(current, join_status=join_status)
        return True

    def reset_all_joined(self) -> int:
        count = 0
        for member_id, m in list(self.by_id.items()):
            if m.join_status == JoinStatus.JOINED:
                self.by_id[member_id] = replace(m, join_status=JoinStatus.FREE)
                count += 1
        return count


class InMemoryEvents:
    def __init__(self):
        self.by_id: dict[int, Event] = {}
        self._id = 0

    def add(self, event_name: str = "Annual Gathering", **overrides) -> Event:
        self._id += 1
        fields = dict(
            event_id=self._id,
            event_name=event_name,
            event_date=date(2026, 3, 1),
            location="Community Hall",
            focal_person_name="Sara",
            focal_person_number="03001234567",
            focal_person_email="sara@example.com",
        )
        fields.update(overrides)
        event = Event(**fields)
        self.by_id[event.event_id] = event
        return event

    def get_by_id(self, event_id: int) -> Optional[Event]:
        return self.by_id.get(event_id)

    def get_by_name(self, event_name: str) -> Optional[Event]:
        return next((e for e in self.by_id.values() if e.event_name == event_name), None)

    def create(self, details: EventDetails) -> int:
        self._id += 1
        self.by_id[self._id] = Event(event_id=self._id, **vars(details))
        return self._id

    def update(self, event_id: int, details: EventDetails) -> None:
        self.by_id[event_id] = replace(self.by_id[event_id], **vars(details))

    def disable(self, event_id: int) -> bool:
        self.by_id[event_id] = replace(self.by_id[event_id], event_status=RecordStatus.DISABLED)
        return True

    def list_active(self, *, limit: int):
        return [e for e in self.by_id.values() if e.event_status == RecordStatus.ACTIVE][:limit]

    def search_active(self, term: str):
        term = term.lower()
        return [
            e
            for e in self.by_id.values()
            if e.event_status == RecordStatus.ACTIVE and (term in e.event_name.lower() or term in e.location.lower())
        ]

    def stamp_start(self, event_id: int, at: datetime) -> bool:
        event = self.by_id[event_id]
        if event.start_time is None:
            self.by_id[event_id] = replace(event, start_time=at)
        return True

    def stamp_end(self, event_id: int, at: datetime) -> bool:
        self.by_id[event_id] = replace(self.by_id[event_id], end_time=at)
        return True

    def close(self, event_id: int, *, present_time: str, end_note: Optional[str]) -> bool:
        self.by_id[event_id] = replace(self.by_id[event_id], present_time=present_time, end_note=end_note)
        return True


class InMemoryAttendance:
    def __init__(self, members: InMemoryMembers, events: InMemoryEvents):
        self._members = members
        self._events = events
        self.by_id: dict[int, AttendanceRecord] = {}
        self._id = 0

    def has_start_marker(self, event_id: int) -> bool:
        return any(r.event_id == event_id for r in self.by_id.values())

    def create_start_marker(self, event_id: int) -> int:
        self._id += 1
        self.by_id[self._id] = AttendanceRecord(
            attendance_id=self._id,
            event_id=event_id,
            member_id=None,
            member_clockin=None,
            member_clockout=None,
            event_status=None,
        )
        return self._id

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        return self.by_id.get(attendance_id)

    def get_for_member(self, event_id: int, member_id: int) -> Optional[AttendanceRecord]:
        return next(
            (r for r in self.by_id.values() if r.event_id == event_id and r.member_id == member_id),
            None,
        )

    def create_join(self, *, event_id: int, member_id: int, clockin: datetime) -> Optional[int]:
        if self.get_for_member(event_id, member_id):
            return None
        self._id += 1
        self.by_id[self._id] = AttendanceRecord(
            attendance_id=self._id,
            event_id=event_id,
            member_id=member_id,
            member_clockin=clockin,
            member_clockout=None,
            event_status=AttendanceState.JOIN,
        )
        return self._id

    def clock_out(self, *, attendance_id, clockout, state, present_hours, expected) -> bool:
        r = self.by_id.get(attendance_id)
        if not r or r.member_clockout is not None or r.event_status != expected:
            return False
        self.by_id[attendance_id] = replace(
            r, member_clockout=clockout, event_status=state, present_hours=present_hours
        )
        return True

    def list_open(self, event_id: int):
        return [
            r
            for r in self.by_id.values()
            if r.event_id == event_id and r.member_id is not None and r.member_clockout is None
        ]

    def promote_state(self, event_id: int, *, current, target) -> int:
        count = 0
        for rid, r in list(self.by_id.items()):
            if r.event_id == event_id and r.event_status == current:
                self.by_id[rid] = replace(r, event_status=target)
                count += 1
        return count

    def _details(self, event_id: int, state=None):
        out = []
        for r in self.by_id.values():
            if r.event_id != event_id or r.member_id is None:
                continue
            if state is not None and r.event_status != state:
                continue
            event = self._events.get_by_id(r.event_id)
            out.append(
                AttendanceDetail(
                    record=r,
                    member=self._members.get_by_id(r.member_id),
                    event_name=event.event_name,
                    event_date=event.event_date,
                    event_start_time=event.start_time,
                )
            )
        return out

    def list_details(self, event_id: int, *, state=None, limit=None, offset=0):
        rows = self._details(event_id, state)
        if limit is None:
            return rows
        return rows[offset : offset + limit]

    def count_details(self, event_id: int, *, state=None) -> int:
        return len(self._details(event_id, state))

    def search_details(self, term: str, *, state):
        term = term.lower()
        out = []
        for event_id in {r.event_id for r in self.by_id.values()}:
            for d in self._details(event_id, state):
                if term in d.event_name.lower() or term in d.member.full_name.lower():
                    out.append(d)
        return out


class InMemoryRegions:
    def __init__(self):
        self.rows: dict[tuple[RegionKind, int], Region] = {}
        self._id = 0

    def get_by_id(self, kind: RegionKind, region_id: int) -> Optional[Region]:
        return self.rows.get((kind, region_id))

    def create(self, kind: RegionKind, name: str) -> int:
        self._id += 1
        self.rows[(kind, self._id)] = Region(region_id=self._id, kind=kind, name=name)
        return self._id

    def rename(self, kind: RegionKind, region_id: int, name: str) -> bool:
        self.rows[(kind, region_id)] = replace(self.rows[(kind, region_id)], name=name)
        return True

    def disable(self, kind: RegionKind, region_id: int) -> bool:
        self.rows[(kind, region_id)] = replace(self.rows[(kind, region_id)], status=RecordStatus.DISABLED)
        return True

    def list_active(self, kind: RegionKind):
        return [r for (k, _), r in self.rows.items() if k == kind and r.status == RecordStatus.ACTIVE]

    def search_active(self, kind: RegionKind, term: str):
        return [r for r in self.list_active(kind) if term.lower() in r.name.lower()]


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 3, 1, 10, 0, 0)


@pytest.fixture
def members() -> InMemoryMembers:
    return InMemoryMembers()


@pytest.fixture
def events() -> InMemoryEvents:
    return InMemoryEvents()


@pytest.fixture
def attendance(members, events) -> InMemoryAttendance:
    return InMemoryAttendance(members, events)


@pytest.fixture
def regions() -> InMemoryRegions:
    return InMemoryRegions()


@pytest.fixture
def tracker(attendance, events, members) -> AttendanceTracker:
    return AttendanceTracker(attendance, events, members, page_size=10)
