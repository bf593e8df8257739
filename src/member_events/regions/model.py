from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import RecordStatus, RegionKind


@dataclass(frozen=True)
class Region:
    """Reference data row: a zone or a district."""

    region_id: int
    kind: RegionKind
    name: str
    status: RecordStatus = RecordStatus.ACTIVE
