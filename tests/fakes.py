"""In-memory repositories and a sample choir shared by the tests."""

from __future__ import annotations

import dataclasses
from datetime import datetime
from typing import Optional

from choir_attendance.announcements.model import Announcement
from choir_attendance.attendance.model import AttendanceRecord
from choir_attendance.core.enums import AttendanceStatus, EventCategory, Role, UserStatus, VoicePart
from choir_attendance.events.model import Event, EventDraft
from choir_attendance.ledger.snapshot import Snapshot
from choir_attendance.users.model import User

NOW = datetime(2026, 1, 31, 20, 0)


def make_user(
    user_id: str,
    name: str,
    voice_part: Optional[VoicePart],
    *,
    role: Role = Role.MEMBER,
    status: UserStatus = UserStatus.ACTIVE,
) -> User:
    return User(
        user_id=user_id,
        name=name,
        email=f"{user_id}@choir.test",
        role=role,
        voice_part=voice_part,
        status=status,
    )


def make_record(user_id: str, event_id: str, status: AttendanceStatus, reason=None, *, at=None) -> AttendanceRecord:
    return AttendanceRecord(
        user_id=user_id,
        event_id=event_id,
        status=status,
        reason=reason,
        timestamp=at or datetime(2026, 1, 20, 12, 0),
    )


PRESENT = AttendanceStatus.PRESENT
ABSENT = AttendanceStatus.ABSENT


def sample_snapshot() -> Snapshot:
    users = [
        make_user("admin", "Grace", VoicePart.ALTO, role=Role.ADMIN),
        make_user("coord", "Tom", VoicePart.TENOR, role=Role.COORDINATOR),
        make_user("s1", "Sarah", VoicePart.SOPRANO),
        make_user("s2", "Abigail", VoicePart.SOPRANO),
        make_user("s3", "Hannah", VoicePart.SOPRANO),
        make_user("a1", "Ruth", VoicePart.ALTO),
        make_user("t1", "Daniel", VoicePart.TENOR),
        make_user("b1", "Peter", VoicePart.BASS),
        make_user("p1", "Paul", VoicePart.BASS, status=UserStatus.PENDING),
        make_user("r1", "Rita", VoicePart.SOPRANO, status=UserStatus.REJECTED),
    ]
    events = [
        Event("e1", "Weekly Rehearsal", datetime(2026, 1, 27, 19, 0), "Hall A", category=EventCategory.REHEARSAL),
        Event("e2", "Sunday Service", datetime(2026, 1, 25, 9, 0), "St. Mark, Main Church", category=EventCategory.SERVICE),
        Event("e3", "Choir Dinner", datetime(2026, 1, 20, 18, 0), "Cafe", category=EventCategory.OTHER),
        Event("e4", "February Rehearsal", datetime(2026, 2, 3, 19, 0), "Hall A", category=EventCategory.REHEARSAL),
    ]
    attendance = [
        make_record("s1", "e2", PRESENT),
        make_record("s1", "e1", ABSENT, "sick"),
        make_record("s2", "e1", PRESENT),
        make_record("s2", "e2", PRESENT),
        make_record("a1", "e2", ABSENT, None),
        make_record("t1", "e1", PRESENT),
        make_record("coord", "e1", PRESENT),
        make_record("coord", "e2", PRESENT),
        make_record("admin", "e3", PRESENT),
        make_record("p1", "e1", PRESENT),
        # Left behind by deletions.
        make_record("ghost", "e1", PRESENT),
        make_record("s1", "gone", PRESENT),
    ]
    announcements = [
        Announcement("n1", "Robes", "Bring your robes", "admin", datetime(2026, 1, 10, 8, 0)),
        Announcement("n2", "New piece", "Practice bar 12", "deleted-user", datetime(2026, 1, 12, 8, 0)),
    ]
    return Snapshot.of(users=users, events=events, attendance=attendance, announcements=announcements)


class InMemoryUsers:
    def __init__(self, users=()):
        self.users: dict[str, User] = {u.user_id: u for u in users}
        self._next_id = 1

    def list_all(self):
        return list(self.users.values())

    def get_by_id(self, user_id):
        return self.users.get(user_id)

    def get_by_email(self, email):
        return next((u for u in self.users.values() if u.email == email), None)

    def create_user(self, *, name, email, password_hash, role, voice_part, phone, status):
        user_id = f"u{self._next_id}"
        self._next_id += 1
        self.users[user_id] = User(user_id, name, email, role, voice_part, status, phone, password_hash)
        return user_id

    def update_user(self, user_id, *, name, email, role, voice_part, phone, status):
        if user_id not in self.users:
            return False
        self.users[user_id] = dataclasses.replace(
            self.users[user_id], name=name, email=email, role=role, voice_part=voice_part, phone=phone, status=status
        )
        return True

    def set_status(self, user_id, *, status):
        if user_id not in self.users:
            return False
        self.users[user_id] = dataclasses.replace(self.users[user_id], status=status)
        return True

    def set_password_hash(self, user_id, *, password_hash):
        if user_id not in self.users:
            return False
        self.users[user_id] = dataclasses.replace(self.users[user_id], password_hash=password_hash)
        return True

    def delete_by_id(self, user_id):
        return self.users.pop(user_id, None) is not None


class InMemoryEvents:
    def __init__(self, events=()):
        self.events: dict[str, Event] = {e.event_id: e for e in events}
        self._next_id = 1

    def list_all(self):
        return sorted(self.events.values(), key=lambda e: e.date)

    def get_by_id(self, event_id):
        return self.events.get(event_id)

    def create(self, draft: EventDraft):
        event_id = f"ev{self._next_id}"
        self._next_id += 1
        self.events[event_id] = Event(event_id=event_id, **dataclasses.asdict(draft))
        return event_id

    def update(self, event_id, draft: EventDraft):
        if event_id not in self.events:
            return False
        self.events[event_id] = Event(event_id=event_id, **dataclasses.asdict(draft))
        return True

    def delete(self, event_id):
        return self.events.pop(event_id, None) is not None


class InMemoryAttendance:
    def __init__(self, records=()):
        self.records: dict[tuple[str, str], AttendanceRecord] = {r.key: r for r in records}
        self.upserts = 0

    def list_all(self):
        return list(self.records.values())

    def upsert(self, *, user_id, event_id, status, reason, timestamp):
        self.upserts += 1
        self.records[(user_id, event_id)] = AttendanceRecord(user_id, event_id, status, reason, timestamp)

    def delete(self, *, user_id, event_id):
        return self.records.pop((user_id, event_id), None) is not None


class InMemoryAnnouncements:
    def __init__(self, announcements=()):
        self.items: dict[str, Announcement] = {a.announcement_id: a for a in announcements}
        self._next_id = 1

    def list_all(self):
        return list(self.items.values())

    def create(self, *, title, content, author_id, timestamp):
        announcement_id = f"an{self._next_id}"
        self._next_id += 1
        self.items[announcement_id] = Announcement(announcement_id, title, content, author_id, timestamp)
        return announcement_id

    def update(self, announcement_id, *, title, content):
        if announcement_id not in self.items:
            return False
        self.items[announcement_id] = dataclasses.replace(self.items[announcement_id], title=title, content=content)
        return True

    def delete(self, announcement_id):
        return self.items.pop(announcement_id, None) is not None
