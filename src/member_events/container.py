from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceTracker
from .database.connection import DatabaseConnection, DBConfig
from .events.mysql_event_repository import MySQLEventRepository
from .events.service import EventService
from .members.mysql_member_repository import MySQLMemberRepository
from .members.service import MemberService
from .regions.mysql_region_repository import MySQLRegionRepository
from .regions.service import RegionService
from .storage.images import ImageStorage
from .users.mysql_user_repository import MySQLOperatorRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection
    image_storage: ImageStorage

    operators_repo: MySQLOperatorRepository
    members_repo: MySQLMemberRepository
    regions_repo: MySQLRegionRepository
    events_repo: MySQLEventRepository
    attendance_repo: MySQLAttendanceRepository

    auth_service: AuthService
    member_service: MemberService
    region_service: RegionService
    event_service: EventService
    attendance_tracker: AttendanceTracker


def build_container(*, db_config: dict, upload_dir: str, page_size: int) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))
    image_storage = ImageStorage(upload_dir)

    operators_repo = MySQLOperatorRepository(conn)
    members_repo = MySQLMemberRepository(conn)
    regions_repo = MySQLRegionRepository(conn)
    events_repo = MySQLEventRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)

    return Container(
        conn=conn,
        image_storage=image_storage,
        operators_repo=operators_repo,
        members_repo=members_repo,
        regions_repo=regions_repo,
        events_repo=events_repo,
        attendance_repo=attendance_repo,
        auth_service=AuthService(operators_repo),
        member_service=MemberService(members_repo, image_storage, page_size=page_size),
        region_service=RegionService(regions_repo),
        event_service=EventService(events_repo, image_storage),
        attendance_tracker=AttendanceTracker(attendance_repo, events_repo, members_repo, page_size=page_size),
    )
