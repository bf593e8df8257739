from __future__ import annotations

from datetime import timedelta

import pytest

from member_events.core.enums import AttendanceState, JoinStatus
from member_events.core.exceptions import AlreadyClockedOut, EventNotFound, MemberNotFound, NotStarted


def test_start_event_stamps_start_time_once(tracker, events, attendance, fixed_now):
    event = events.add()

    first = tracker.start_event(event.event_id, now=fixed_now)
    second = tracker.start_event(event.event_id, now=fixed_now + timedelta(minutes=30))

    assert first.start_time == fixed_now
    assert second.start_time == fixed_now
    assert attendance.has_start_marker(event.event_id)
    markers = [r for r in attendance.by_id.values() if r.is_start_marker]
    assert len(markers) == 1


def test_start_event_unknown_event(tracker):
    with pytest.raises(EventNotFound):
        tracker.start_event(999)


def test_join_before_start_fails(tracker, events, members, fixed_now):
    event = events.add()
    member = members.add()

    with pytest.raises(NotStarted):
        tracker.join_event(event.event_id, member.member_id, now=fixed_now)


def test_join_unknown_member_fails(tracker, events, fixed_now):
    event = events.add()
    tracker.start_event(event.event_id, now=fixed_now)

    with pytest.raises(MemberNotFound):
        tracker.join_event(event.event_id, 42, now=fixed_now)


def test_join_leave_then_rejects_third_call(tracker, events, members, fixed_now):
    event = events.add()
    member = members.add()
    tracker.start_event(event.event_id, now=fixed_now)

    joined = tracker.join_event(event.event_id, member.member_id, now=fixed_now + timedelta(minutes=5))
    assert joined.state == AttendanceState.JOIN
    assert joined.record.member_clockout is None
    assert joined.member.join_status == JoinStatus.JOINED

    left = tracker.join_event(event.event_id, member.member_id, now=fixed_now + timedelta(hours=2, minutes=50))
    assert left.state == AttendanceState.LEAVE
    assert left.record.member_clockout == fixed_now + timedelta(hours=2, minutes=50)
    assert left.record.present_hours == "2 Hours 45 Minutes"

    with pytest.raises(AlreadyClockedOut):
        tracker.join_event(event.event_id, member.member_id, now=fixed_now + timedelta(hours=3))

    record = tracker.list_by_state(event.event_id, AttendanceState.LEAVE).items[0].record
    assert record.member_clockout == fixed_now + timedelta(hours=2, minutes=50)


def test_leave_keeps_member_marked_joined_until_event_ends(tracker, events, members, fixed_now):
    event = events.add()
    member = members.add()
    tracker.start_event(event.event_id, now=fixed_now)
    tracker.join_event(event.event_id, member.member_id, now=fixed_now)
    tracker.join_event(event.event_id, member.member_id, now=fixed_now + timedelta(minutes=10))

    assert members.get_by_id(member.member_id).join_status == JoinStatus.JOINED


def test_end_event_closes_join_and_leave_records(tracker, events, members, attendance, fixed_now):
    event = events.add()
    stayer = members.add("Stayer")
    leaver = members.add("Leaver")
    tracker.start_event(event.event_id, now=fixed_now)
    tracker.join_event(event.event_id, stayer.member_id, now=fixed_now)
    tracker.join_event(event.event_id, leaver.member_id, now=fixed_now)
    tracker.join_event(event.event_id, leaver.member_id, now=fixed_now + timedelta(minutes=40))

    end_at = fixed_now + timedelta(hours=1, minutes=1)
    details = tracker.end_event(event.event_id, "Went well", now=end_at)

    assert len(details) == 2
    by_name = {d.member.full_name: d.record for d in details}
    assert all(r.event_status == AttendanceState.END for r in by_name.values())
    assert all(r.member_clockout is not None and r.present_hours for r in by_name.values())
    assert by_name["Stayer"].member_clockout == end_at
    assert by_name["Stayer"].present_hours == "1 Hour 1 Minute"
    assert by_name["Leaver"].present_hours == "40 Minutes"

    closed = events.get_by_id(event.event_id)
    assert closed.end_time == end_at
    assert closed.present_time == "1 Hour 1 Minute"
    assert closed.end_note == "Went well"
    # start marker is untouched and never reported
    assert all(d.record.member_id is not None for d in details)


def test_end_event_keeps_existing_end_time(tracker, events, fixed_now):
    event = events.add(end_time=fixed_now + timedelta(hours=3))
    tracker.start_event(event.event_id, now=fixed_now)

    tracker.end_event(event.event_id, None, now=fixed_now + timedelta(hours=5))

    closed = events.get_by_id(event.event_id)
    assert closed.end_time == fixed_now + timedelta(hours=3)
    assert closed.present_time == "3 Hours"


def test_end_event_unknown_event(tracker):
    with pytest.raises(EventNotFound):
        tracker.end_event(404, "note")


def test_end_event_never_started_is_not_found(tracker, events):
    event = events.add()
    with pytest.raises(EventNotFound):
        tracker.end_event(event.event_id, "note")


def test_end_event_resets_join_status_globally(tracker, events, members, fixed_now):
    event_a = events.add("A")
    event_b = events.add("B")
    member_a = members.add()
    member_b = members.add()
    tracker.start_event(event_a.event_id, now=fixed_now)
    tracker.start_event(event_b.event_id, now=fixed_now)
    tracker.join_event(event_a.event_id, member_a.member_id, now=fixed_now)
    tracker.join_event(event_b.event_id, member_b.member_id, now=fixed_now)

    tracker.end_event(event_a.event_id, None, now=fixed_now + timedelta(hours=1))

    assert members.get_by_id(member_a.member_id).join_status == JoinStatus.FREE
    assert members.get_by_id(member_b.member_id).join_status == JoinStatus.FREE
    # event B attendance itself is untouched
    b_rows = tracker.list_by_state(event_b.event_id, AttendanceState.JOIN).items
    assert [d.member.member_id for d in b_rows] == [member_b.member_id]


def test_join_after_event_end_is_rejected(tracker, events, members, fixed_now):
    event = events.add()
    member = members.add()
    tracker.start_event(event.event_id, now=fixed_now)
    tracker.join_event(event.event_id, member.member_id, now=fixed_now)
    tracker.end_event(event.event_id, None, now=fixed_now + timedelta(hours=1))

    with pytest.raises(AlreadyClockedOut):
        tracker.join_event(event.event_id, member.member_id, now=fixed_now + timedelta(hours=2))


def test_full_scenario(tracker, events, members, fixed_now):
    event = events.add()
    member = members.add()

    tracker.start_event(event.event_id, now=fixed_now)
    joined = tracker.join_event(event.event_id, member.member_id, now=fixed_now + timedelta(minutes=1))
    left = tracker.join_event(event.event_id, member.member_id, now=fixed_now + timedelta(minutes=31))
    ended = tracker.end_event(event.event_id, "done", now=fixed_now + timedelta(hours=1))

    assert joined.state == AttendanceState.JOIN
    assert left.state == AttendanceState.LEAVE
    assert left.record.present_hours == "30 Minutes"
    assert len(ended) == 1
    final = ended[0].record
    assert final.event_status == AttendanceState.END
    assert final.member_clockin == joined.record.member_clockin
    assert final.member_clockout >= left.record.member_clockout


def test_lost_insert_race_continues_as_clock_out(tracker, events, members, attendance, fixed_now, monkeypatch):
    event = events.add()
    member = members.add()
    tracker.start_event(event.event_id, now=fixed_now)

    # Simulate a concurrent request inserting the Join row between our read and our insert.
    real_create = attendance.create_join

    def racing_create(**kwargs):
        real_create(**kwargs)
        return None

    monkeypatch.setattr(attendance, "create_join", racing_create)
    result = tracker.join_event(event.event_id, member.member_id, now=fixed_now + timedelta(minutes=5))

    assert result.state == AttendanceState.LEAVE
    assert result.record.present_hours == "0 Minutes"


def test_lost_clock_out_race_reports_already_clocked_out(tracker, events, members, attendance, fixed_now, monkeypatch):
    event = events.add()
    member = members.add()
    tracker.start_event(event.event_id, now=fixed_now)
    tracker.join_event(event.event_id, member.member_id, now=fixed_now)

    monkeypatch.setattr(attendance, "clock_out", lambda **kwargs: False)

    with pytest.raises(AlreadyClockedOut):
        tracker.join_event(event.event_id, member.member_id, now=fixed_now + timedelta(minutes=5))


def test_list_by_state_pages(tracker, events, members, fixed_now):
    event = events.add()
    tracker.start_event(event.event_id, now=fixed_now)
    for i in range(12):
        m = members.add(f"Member {i}")
        tracker.join_event(event.event_id, m.member_id, now=fixed_now)

    first = tracker.list_by_state(event.event_id, AttendanceState.JOIN, page=1)
    second = tracker.list_by_state(event.event_id, AttendanceState.JOIN, page=2)

    assert len(first.items) == 10
    assert len(second.items) == 2
    assert first.total == 12
    assert first.total_pages == 2


def test_search_event_details_requires_query(tracker):
    from member_events.core.exceptions import ValidationError

    with pytest.raises(ValidationError):
        tracker.search_event_details("  ")
