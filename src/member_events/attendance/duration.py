from __future__ import annotations

from datetime import datetime


def split_duration(start: datetime, end: datetime) -> tuple[int, int]:
    """Whole hours and the remaining whole minutes between two timestamps.

    Negative spans (clock skew) count as zero.
    """

    seconds = int((end - start).total_seconds())
    if seconds < 0:
        seconds = 0
    total_minutes = seconds // 60
    return total_minutes // 60, total_minutes % 60


def _plural(value: int, unit: str) -> str:
    return f"{value} {unit}" if value == 1 else f"{value} {unit}s"


def format_duration(start: datetime, end: datetime) -> str:
    """Render an elapsed time as e.g. '2 Hours 45 Minutes', '1 Hour', '0 Minutes'."""

    hours, minutes = split_duration(start, end)
    parts = []
    if hours:
        parts.append(_plural(hours, "Hour"))
    if minutes:
        parts.append(_plural(minutes, "Minute"))
    return " ".join(parts) or "0 Minutes"
