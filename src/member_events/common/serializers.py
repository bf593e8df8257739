"""Domain objects -> JSON-ready dicts for the HTTP layer."""

from __future__ import annotations

from typing import Callable, Optional

from ..attendance.model import AttendanceDetail, AttendanceRecord, JoinResult
from ..events.model import Event
from ..members.model import Member
from ..regions.model import Region
from .datetime_utils import format_date, format_datetime
from .paging import Page

ImageEncoder = Callable[[Optional[str]], Optional[str]]


def member_json(m: Member, *, encode_image: ImageEncoder | None = None) -> dict:
    out = {
        "member_id": m.member_id,
        "full_name": m.full_name,
        "father_name": m.father_name,
        "zone": m.zone,
        "mobile_number": m.mobile_number,
        "address": m.address,
        "education": m.education,
        "email": m.email,
        "cnic": m.cnic,
        "dob": format_date(m.dob),
        "district": m.district,
        "age": m.age,
        "profession": m.profession,
        "image": m.image,
        "status": m.status.value,
        "join_status": m.join_status.value,
    }
    if encode_image is not None:
        out["image_base64"] = encode_image(m.image)
    return out


def event_json(e: Event, *, encode_image: ImageEncoder | None = None) -> dict:
    out = {
        "event_id": e.event_id,
        "event_name": e.event_name,
        "event_date": format_date(e.event_date),
        "location": e.location,
        "description": e.description,
        "image": e.image,
        "focal_person_name": e.focal_person_name,
        "focal_person_number": e.focal_person_number,
        "focal_person_email": e.focal_person_email,
        "info_person_name": e.info_person_name,
        "info_person_number": e.info_person_number,
        "info_person_email": e.info_person_email,
        "event_type": e.event_type,
        "start_time": format_datetime(e.start_time),
        "end_time": format_datetime(e.end_time),
        "present_time": e.present_time,
        "end_note": e.end_note,
        "event_status": e.event_status.value,
    }
    if encode_image is not None:
        out["image_base64"] = encode_image(e.image)
    return out


def record_json(r: AttendanceRecord) -> dict:
    return {
        "attendance_id": r.attendance_id,
        "event_id": r.event_id,
        "member_id": r.member_id,
        "member_clockin": format_datetime(r.member_clockin),
        "member_clockout": format_datetime(r.member_clockout),
        "event_status": r.event_status.value if r.event_status else None,
        "present_hours": r.present_hours,
    }


def detail_json(d: AttendanceDetail) -> dict:
    out = member_json(d.member)
    out.update(record_json(d.record))
    out["event_name"] = d.event_name
    out["event_date"] = format_date(d.event_date)
    out["event_start_time"] = format_datetime(d.event_start_time)
    return out


def join_json(result: JoinResult) -> dict:
    return {
        "state": result.state.value,
        "member": member_json(result.member),
        "attendance": record_json(result.record),
    }


def region_json(r: Region) -> dict:
    return {"id": r.region_id, r.kind.value: r.name, "status": r.status.value}


def page_json(page: Page, item_json: Callable) -> dict:
    return {
        "items": [item_json(item) for item in page.items],
        "page": page.page,
        "page_size": page.page_size,
        "total": page.total,
        "total_pages": page.total_pages,
    }
