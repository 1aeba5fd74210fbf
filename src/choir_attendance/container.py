from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .announcements.mysql_announcement_repository import MySQLAnnouncementRepository
from .announcements.repository import AnnouncementRepository
from .announcements.service import AnnouncementService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .database.connection import DBConfig, DatabaseConnection
from .events.mysql_event_repository import MySQLEventRepository
from .events.repository import EventRepository
from .events.service import EventService
from .ledger.loader import SnapshotLoader
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import MembershipService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    events_repo: EventRepository
    attendance_repo: AttendanceRepository
    announcements_repo: AnnouncementRepository

    loader: SnapshotLoader
    attendance_service: AttendanceService
    membership_service: MembershipService
    event_service: EventService
    announcement_service: AnnouncementService

    conn: Optional[DatabaseConnection] = None


def wire(
    *,
    users_repo: UserRepository,
    events_repo: EventRepository,
    attendance_repo: AttendanceRepository,
    announcements_repo: AnnouncementRepository,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Build services on top of any set of repositories (MySQL or in-memory)."""

    return Container(
        users_repo=users_repo,
        events_repo=events_repo,
        attendance_repo=attendance_repo,
        announcements_repo=announcements_repo,
        loader=SnapshotLoader(users_repo, events_repo, attendance_repo, announcements_repo),
        attendance_service=AttendanceService(attendance_repo, users_repo, events_repo),
        membership_service=MembershipService(users_repo),
        event_service=EventService(events_repo),
        announcement_service=AnnouncementService(announcements_repo),
        conn=conn,
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return wire(
        users_repo=MySQLUserRepository(conn),
        events_repo=MySQLEventRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        announcements_repo=MySQLAnnouncementRepository(conn),
        conn=conn,
    )
