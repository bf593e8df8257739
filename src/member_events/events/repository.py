from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import Event, EventDetails


class EventRepository(Protocol):
    def get_by_id(self, event_id: int) -> Optional[Event]:
        raise NotImplementedError

    def get_by_name(self, event_name: str) -> Optional[Event]:
        raise NotImplementedError

    def create(self, details: EventDetails) -> int:
        raise NotImplementedError

    def update(self, event_id: int, details: EventDetails) -> None:
        raise NotImplementedError

    def disable(self, event_id: int) -> bool:
        raise NotImplementedError

    def list_active(self, *, limit: int) -> Sequence[Event]:
        raise NotImplementedError

    def search_active(self, term: str) -> Sequence[Event]:
        raise NotImplementedError

    def stamp_start(self, event_id: int, at: datetime) -> bool:
        """Set start_time only if it is still unset."""
        raise NotImplementedError

    def stamp_end(self, event_id: int, at: datetime) -> bool:
        raise NotImplementedError

    def close(self, event_id: int, *, present_time: str, end_note: Optional[str]) -> bool:
        raise NotImplementedError
