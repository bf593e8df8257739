from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_iso_date
from ..common.paging import Page, page_offset
from ..common.validators import require_fields, require_non_empty
from ..core.constants import DEFAULT_PAGE_SIZE
from ..core.exceptions import ImageNotFound, MemberNotFound, ValidationError
from ..storage.images import ImageStorage
from .model import PROFILE_FIELDS, Member, MemberProfile
from .repository import MemberRepository

logger = logging.getLogger(__name__)

ALL_FIELDS_REQUIRED = "All fields are required!"


def build_profile(data: Mapping[str, Any], *, require_image: bool = False) -> MemberProfile:
    fields = PROFILE_FIELDS + (("image",) if require_image else ())
    values = require_fields(data, fields, message=ALL_FIELDS_REQUIRED)

    try:
        dob = parse_iso_date(str(values["dob"]))
    except ValueError:
        raise ValidationError("Date of birth must be YYYY-MM-DD")

    try:
        age = int(values["age"])
    except (TypeError, ValueError):
        raise ValidationError("Age must be a number")

    image = values.get("image") if require_image else data.get("image")
    return MemberProfile(
        full_name=values["full_name"],
        father_name=values["father_name"],
        zone=values["zone"],
        mobile_number=str(values["mobile_number"]),
        address=values["address"],
        education=values["education"],
        email=values["email"],
        cnic=str(values["cnic"]),
        dob=dob,
        district=values["district"],
        age=age,
        profession=values["profession"],
        image=image or None,
    )


class MemberService:
    """Use case: member registry (register, list, update, soft delete, search)."""

    def __init__(self, members: MemberRepository, images: ImageStorage, *, page_size: int = DEFAULT_PAGE_SIZE):
        self._members = members
        self._images = images
        self._page_size = int(page_size)

    def get_member(self, member_id: int) -> Member:
        member = self._members.get_by_id(member_id)
        if not member:
            raise MemberNotFound("Member not found!")
        return member

    def register_member(self, data: Mapping[str, Any]) -> Member:
        profile = build_profile(data)
        member_id = self._members.create(profile)
        logger.info("registered member %s (%s)", member_id, profile.email)
        return self.get_member(member_id)

    def list_members(self, page: int = 1) -> Page[Member]:
        items = self._members.list_active(limit=self._page_size, offset=page_offset(page, self._page_size))
        return Page(items=items, page=page, page_size=self._page_size, total=self._members.count_active())

    def update_member(self, member_id: int, data: Mapping[str, Any]) -> Member:
        profile = build_profile(data, require_image=True)
        self.get_member(member_id)
        self._members.update(member_id, profile)
        return self.get_member(member_id)

    def delete_member(self, member_id: int) -> Member:
        self.get_member(member_id)
        self._members.disable(member_id)
        logger.info("disabled member %s", member_id)
        return self.get_member(member_id)

    def search_members(self, query: Optional[str]) -> list[Member]:
        term = require_non_empty(query or "", "Search query")
        return list(self._members.search_free(term))

    def get_member_image(self, member_id: int) -> Path:
        member = self.get_member(member_id)
        if not member.image:
            raise ImageNotFound("Image file not found on server")
        path = self._images.resolve(member.image)
        if not path.is_file():
            raise ImageNotFound("Image file not found on server")
        return path

    def image_base64(self, member: Member) -> Optional[str]:
        return self._images.encode_base64(member.image)
