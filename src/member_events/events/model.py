from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import RecordStatus

REQUIRED_FIELDS = (
    "event_name",
    "event_date",
    "location",
    "focal_person_name",
    "focal_person_number",
    "focal_person_email",
)

OPTIONAL_FIELDS = (
    "description",
    "image",
    "info_person_name",
    "info_person_number",
    "info_person_email",
    "event_type",
)


@dataclass(frozen=True)
class Event:
    """Domain entity: an event members attend."""

    event_id: int
    event_name: str
    event_date: Optional[date]
    location: str
    focal_person_name: str
    focal_person_number: str
    focal_person_email: str
    description: Optional[str] = None
    image: Optional[str] = None
    info_person_name: Optional[str] = None
    info_person_number: Optional[str] = None
    info_person_email: Optional[str] = None
    event_type: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    present_time: Optional[str] = None
    end_note: Optional[str] = None
    event_status: RecordStatus = RecordStatus.ACTIVE

    @property
    def is_started(self) -> bool:
        return self.start_time is not None


@dataclass(frozen=True)
class EventDetails:
    """Validated write-model for create/update."""

    event_name: str
    event_date: date
    location: str
    focal_person_name: str
    focal_person_number: str
    focal_person_email: str
    description: Optional[str] = None
    image: Optional[str] = None
    info_person_name: Optional[str] = None
    info_person_number: Optional[str] = None
    info_person_email: Optional[str] = None
    event_type: Optional[str] = None
