from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_fields, require_non_empty
from ..core.constants import DEFAULT_EVENT_ENTRIES
from ..core.exceptions import EventNotFound, ValidationError
from ..storage.images import ImageStorage
from .model import OPTIONAL_FIELDS, REQUIRED_FIELDS, Event, EventDetails
from .repository import EventRepository

logger = logging.getLogger(__name__)


def build_details(data: Mapping[str, Any]) -> EventDetails:
    values = require_fields(data, REQUIRED_FIELDS, message="Provide all required fields!")
    try:
        event_date = parse_iso_date(str(values["event_date"]))
    except ValueError:
        raise ValidationError("Event date must be YYYY-MM-DD")

    optional = {}
    for name in OPTIONAL_FIELDS:
        value = data.get(name)
        optional[name] = value.strip() if isinstance(value, str) and value.strip() else None

    return EventDetails(
        event_name=values["event_name"],
        event_date=event_date,
        location=values["location"],
        focal_person_name=values["focal_person_name"],
        focal_person_number=str(values["focal_person_number"]),
        focal_person_email=values["focal_person_email"],
        **optional,
    )


class EventService:
    """Use case: event catalogue (create, list, update, soft delete, search)."""

    def __init__(self, events: EventRepository, images: ImageStorage):
        self._events = events
        self._images = images

    def get_event(self, event_id: int) -> Event:
        event = self._events.get_by_id(event_id)
        if not event:
            raise EventNotFound("No Event Found!")
        return event

    def add_event(self, data: Mapping[str, Any]) -> Event:
        details = build_details(data)
        if self._events.get_by_name(details.event_name):
            raise ValidationError("Event already Exist!")
        event_id = self._events.create(details)
        logger.info("created event %s (%s)", event_id, details.event_name)
        return self.get_event(event_id)

    def list_events(self, entries: Any = None) -> list[Event]:
        try:
            limit = int(entries)
        except (TypeError, ValueError):
            limit = DEFAULT_EVENT_ENTRIES
        if limit <= 0:
            limit = DEFAULT_EVENT_ENTRIES
        return list(self._events.list_active(limit=limit))

    def update_event(self, event_id: int, data: Mapping[str, Any]) -> Event:
        details = build_details(data)
        self.get_event(event_id)
        clash = self._events.get_by_name(details.event_name)
        if clash and clash.event_id != event_id:
            raise ValidationError("Event already Exist!")
        self._events.update(event_id, details)
        return self.get_event(event_id)

    def delete_event(self, event_id: int) -> Event:
        event = self.get_event(event_id)
        self._events.disable(event_id)
        logger.info("disabled event %s", event_id)
        return event

    def search_events(self, query: Optional[str]) -> list[Event]:
        term = require_non_empty(query or "", "Search query")
        return list(self._events.search_active(term))

    def image_base64(self, event: Event) -> Optional[str]:
        return self._images.encode_base64(event.image)
