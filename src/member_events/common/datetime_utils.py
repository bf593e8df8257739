from __future__ import annotations

from datetime import date, datetime


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD (optionally followed by a 'T...' time part) into date."""
    return datetime.strptime(value.split("T")[0].strip(), "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time, truncated to whole seconds.

    Wrapped so tests can patch it.
    """
    return datetime.now().replace(microsecond=0)


def is_zero_datetime(value) -> bool:
    """True for MySQL's zero-date sentinel in the shapes connectors return it."""
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip() in {"00:00:00", "0000-00-00", "0000-00-00 00:00:00"}
    return False


def format_date(value) -> str | None:
    if value is None:
        return None
    if isinstance(value, (date, datetime)):
        return value.strftime("%Y-%m-%d")
    return str(value)[:10]


def format_datetime(value) -> str | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M:%S")
    return str(value)
