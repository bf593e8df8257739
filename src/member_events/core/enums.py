from __future__ import annotations

from enum import Enum


class RecordStatus(str, Enum):
    """Soft-delete flag shared by members, events, zones and districts."""

    ACTIVE = "Y"
    DISABLED = "N"


class JoinStatus(str, Enum):
    """Whether a member is currently inside an event.

    The stored letters are inverted in the legacy schema:
    `N` means "currently joined", `Y` means "free".
    """

    JOINED = "N"
    FREE = "Y"


class AttendanceState(str, Enum):
    """State of one member's attendance record within one event."""

    JOIN = "Join"
    LEAVE = "Leave"
    END = "End"


class AttendanceAction(str, Enum):
    """Inputs accepted by the attendance state machine."""

    CLOCK = "clock"
    END = "end"


class RegionKind(str, Enum):
    ZONE = "zone"
    DISTRICT = "district"
