from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import JoinStatus
from .model import Member, MemberProfile


class MemberRepository(Protocol):
    def get_by_id(self, member_id: int) -> Optional[Member]:
        raise NotImplementedError

    def create(self, profile: MemberProfile) -> int:
        raise NotImplementedError

    def update(self, member_id: int, profile: MemberProfile) -> None:
        raise NotImplementedError

    def disable(self, member_id: int) -> bool:
        raise NotImplementedError

    def list_active(self, *, limit: int, offset: int) -> Sequence[Member]:
        raise NotImplementedError

    def count_active(self) -> int:
        raise NotImplementedError

    def search_free(self, term: str) -> Sequence[Member]:
        """Active members not currently inside an event whose profile matches term."""
        raise NotImplementedError

    def set_join_status(self, member_id: int, join_status: JoinStatus) -> bool:
        raise NotImplementedError

    def reset_all_joined(self) -> int:
        """Flip every currently-joined member back to free; return affected rows."""
        raise NotImplementedError
