from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import JoinStatus, RecordStatus

# Profile fields the registration form must fill in (image is optional there).
PROFILE_FIELDS = (
    "full_name",
    "father_name",
    "zone",
    "mobile_number",
    "address",
    "education",
    "email",
    "cnic",
    "dob",
    "district",
    "age",
    "profession",
)


@dataclass(frozen=True)
class Member:
    """Domain entity: a registered member."""

    member_id: int
    full_name: str
    father_name: str
    zone: str
    mobile_number: str
    address: str
    education: str
    email: str
    cnic: str
    dob: Optional[date]
    district: str
    age: int
    profession: str
    image: Optional[str] = None
    status: RecordStatus = RecordStatus.ACTIVE
    join_status: JoinStatus = JoinStatus.FREE


@dataclass(frozen=True)
class MemberProfile:
    """Validated write-model for create/update."""

    full_name: str
    father_name: str
    zone: str
    mobile_number: str
    address: str
    education: str
    email: str
    cnic: str
    dob: date
    district: str
    age: int
    profession: str
    image: Optional[str] = None
