from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles used for permission checks."""

    MEMBER = "member"
    ADMIN = "admin"
    COORDINATOR = "coordinator"


class UserStatus(str, Enum):
    """Membership lifecycle: registration starts as PENDING until an admin decides."""

    ACTIVE = "active"
    PENDING = "pending"
    REJECTED = "rejected"


class VoicePart(str, Enum):
    SOPRANO = "Soprano"
    ALTO = "Alto"
    TENOR = "Tenor"
    BASS = "Bass"


class EventCategory(str, Enum):
    REHEARSAL = "Rehearsal"
    SERVICE = "Service"
    OTHER = "Other"

    @property
    def counts(self) -> bool:
        """Only rehearsals and services take part in attendance percentages."""
        return self in (EventCategory.REHEARSAL, EventCategory.SERVICE)


class AttendanceStatus(str, Enum):
    """Stored attendance status. "Pending" is derived, never stored."""

    PRESENT = "present"
    ABSENT = "absent"
