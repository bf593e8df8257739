from __future__ import annotations

from typing import Optional, Protocol

from .model import Operator


class OperatorRepository(Protocol):
    def get_by_email(self, email: str) -> Optional[Operator]:
        raise NotImplementedError

    def get_by_id(self, user_id: int) -> Optional[Operator]:
        raise NotImplementedError

    def update_password(self, user_id: int, password_hash: str) -> bool:
        raise NotImplementedError
