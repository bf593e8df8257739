"""Attendance state machine.

Every change to an attendance record's state goes through `transition`, so the
allowed moves live in exactly one table.
"""

from __future__ import annotations

from typing import Optional

from ..core.enums import AttendanceAction, AttendanceState
from ..core.exceptions import AlreadyClockedOut, InvalidTransition

# (current state, action) -> next state. `None` is "no record yet".
TRANSITIONS: dict[tuple[Optional[AttendanceState], AttendanceAction], AttendanceState] = {
    (None, AttendanceAction.CLOCK): AttendanceState.JOIN,
    (AttendanceState.JOIN, AttendanceAction.CLOCK): AttendanceState.LEAVE,
    (AttendanceState.JOIN, AttendanceAction.END): AttendanceState.END,
    (AttendanceState.LEAVE, AttendanceAction.END): AttendanceState.END,
    (AttendanceState.END, AttendanceAction.END): AttendanceState.END,
}

# Records in these states already carry a clock-out time.
CLOCKED_OUT = frozenset({AttendanceState.LEAVE, AttendanceState.END})


def transition(current: Optional[AttendanceState], action: AttendanceAction) -> AttendanceState:
    try:
        return TRANSITIONS[(current, action)]
    except KeyError:
        pass

    if action == AttendanceAction.CLOCK and current in CLOCKED_OUT:
        raise AlreadyClockedOut("You have already clocked out!")
    label = current.value if current else "none"
    raise InvalidTransition(f"Cannot apply {action.value!r} to attendance in state {label!r}")
