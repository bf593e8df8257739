from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Operator:
    """Back-office account that signs in to manage members and events.

    Note: plain data object, no DB access here.
    """

    user_id: int
    name: str
    email: str
    password: Optional[str]
    mobile_number: Optional[str]
    role: str = "admin"
