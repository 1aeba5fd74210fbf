from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from ..announcements.model import Announcement
from ..attendance.model import AttendanceRecord
from ..events.model import Event
from ..users.model import User


@dataclass(frozen=True)
class Snapshot:
    """Immutable copy of the data the aggregation core works on."""

    users: tuple[User, ...] = ()
    events: tuple[Event, ...] = ()
    attendance: tuple[AttendanceRecord, ...] = ()
    announcements: tuple[Announcement, ...] = ()

    @classmethod
    def of(
        cls,
        *,
        users: Iterable[User] = (),
        events: Iterable[Event] = (),
        attendance: Iterable[AttendanceRecord] = (),
        announcements: Iterable[Announcement] = (),
    ) -> "Snapshot":
        return cls(
            users=tuple(users),
            events=tuple(events),
            attendance=tuple(attendance),
            announcements=tuple(announcements),
        )


class Ledger:
    """Read-only view over a snapshot.

    Lookups are indexed once per instance. The ledger is not a cache: after a
    mutation the caller builds a new one from a fresh snapshot.
    """

    def __init__(self, snapshot: Snapshot):
        self._snapshot = snapshot
        self._users = {u.user_id: u for u in snapshot.users}
        self._events = {e.event_id: e for e in snapshot.events}

        # At most one record per key; the latest submission wins.
        records: dict[tuple[str, str], AttendanceRecord] = {}
        for r in snapshot.attendance:
            current = records.get(r.key)
            if current is None or r.timestamp >= current.timestamp:
                records[r.key] = r
        self._records = records

        by_event: dict[str, list[AttendanceRecord]] = {}
        for r in records.values():
            by_event.setdefault(r.event_id, []).append(r)
        self._by_event = by_event

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    @property
    def users(self) -> tuple[User, ...]:
        return self._snapshot.users

    @property
    def events(self) -> tuple[Event, ...]:
        return self._snapshot.events

    @property
    def announcements(self) -> tuple[Announcement, ...]:
        return self._snapshot.announcements

    def active_users(self) -> list[User]:
        return [u for u in self._snapshot.users if u.is_active]

    def user_by_id(self, user_id: str) -> Optional[User]:
        return self._users.get(user_id)

    def event_by_id(self, event_id: str) -> Optional[Event]:
        return self._events.get(event_id)

    def record_for(self, user_id: str, event_id: str) -> Optional[AttendanceRecord]:
        return self._records.get((user_id, event_id))

    def records_for_event(self, event_id: str) -> list[AttendanceRecord]:
        return list(self._by_event.get(event_id, ()))
