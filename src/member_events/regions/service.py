from __future__ import annotations

from typing import Optional

from ..common.validators import require_non_empty
from ..core.enums import RegionKind
from ..core.exceptions import RegionNotFound
from .model import Region
from .repository import RegionRepository


class RegionService:
    """Use case: maintain zone and district reference lists."""

    def __init__(self, regions: RegionRepository):
        self._regions = regions

    def _get(self, kind: RegionKind, region_id: int) -> Region:
        region = self._regions.get_by_id(kind, region_id)
        if not region:
            raise RegionNotFound(f"{kind.value.capitalize()} not found!")
        return region

    def add(self, kind: RegionKind, name: Optional[str]) -> Region:
        name = require_non_empty(name or "", kind.value.capitalize())
        region_id = self._regions.create(kind, name)
        return self._get(kind, region_id)

    def list_active(self, kind: RegionKind) -> list[Region]:
        return list(self._regions.list_active(kind))

    def update(self, kind: RegionKind, region_id: int, name: Optional[str]) -> Region:
        name = require_non_empty(name or "", kind.value.capitalize())
        self._get(kind, region_id)
        self._regions.rename(kind, region_id, name)
        return self._get(kind, region_id)

    def delete(self, kind: RegionKind, region_id: int) -> Region:
        self._get(kind, region_id)
        self._regions.disable(kind, region_id)
        return self._get(kind, region_id)

    def search(self, kind: RegionKind, query: Optional[str]) -> list[Region]:
        term = require_non_empty(query or "", "Search query (q)")
        return list(self._regions.search_active(kind, term))
