from __future__ import annotations

from typing import Any, Iterable, Mapping

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_fields(data: Mapping[str, Any], fields: Iterable[str], *, message: str) -> dict:
    """Check every field is present and non-blank; return the stripped values.

    One shared message is raised for any missing field, mirroring what the
    mobile client expects to display.
    """

    out: dict = {}
    for name in fields:
        value = data.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError(message)
        out[name] = value.strip() if isinstance(value, str) else value
    return out


def parse_page(value: Any) -> int:
    """Page numbers default to 1 when missing or not a positive integer."""
    try:
        page = int(value)
    except (TypeError, ValueError):
        return 1
    return page if page > 0 else 1
