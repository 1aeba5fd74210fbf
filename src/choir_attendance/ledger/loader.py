from __future__ import annotations

import logging
from typing import Optional

from ..announcements.repository import AnnouncementRepository
from ..attendance.repository import AttendanceRepository
from ..events.repository import EventRepository
from ..users.repository import UserRepository
from .snapshot import Ledger, Snapshot

logger = logging.getLogger(__name__)


class SnapshotLoader:
    """Reads every repository into a fresh Snapshot.

    Call it again after each mutation; nothing is kept between calls.
    """

    def __init__(
        self,
        users: UserRepository,
        events: EventRepository,
        attendance: AttendanceRepository,
        announcements: Optional[AnnouncementRepository] = None,
    ):
        self._users = users
        self._events = events
        self._attendance = attendance
        self._announcements = announcements

    def load(self) -> Snapshot:
        snapshot = Snapshot.of(
            users=self._users.list_all(),
            events=self._events.list_all(),
            attendance=self._attendance.list_all(),
            announcements=self._announcements.list_all() if self._announcements else (),
        )
        logger.debug(
            "Snapshot loaded: %d users, %d events, %d attendance records",
            len(snapshot.users),
            len(snapshot.events),
            len(snapshot.attendance),
        )
        return snapshot

    def load_ledger(self) -> Ledger:
        return Ledger(self.load())
