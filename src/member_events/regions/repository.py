from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import RegionKind
from .model import Region


class RegionRepository(Protocol):
    def get_by_id(self, kind: RegionKind, region_id: int) -> Optional[Region]:
        raise NotImplementedError

    def create(self, kind: RegionKind, name: str) -> int:
        raise NotImplementedError

    def rename(self, kind: RegionKind, region_id: int, name: str) -> bool:
        raise NotImplementedError

    def disable(self, kind: RegionKind, region_id: int) -> bool:
        raise NotImplementedError

    def list_active(self, kind: RegionKind) -> Sequence[Region]:
        raise NotImplementedError

    def search_active(self, kind: RegionKind, term: str) -> Sequence[Region]:
        raise NotImplementedError
