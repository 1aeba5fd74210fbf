"""Mapping from backend rows (dicts) to domain entities.

Field correspondences:

=================  ==============================================================
Entity             Row fields
=================  ==============================================================
User               id, name, email, role, voice_part, status, phone, password_hash
Event              id, title, date, location, description, category, is_important
AttendanceRecord   user_id, event_id, status, reason, timestamp
Announcement       id, title, content, author_id, timestamp
=================  ==============================================================

Every function is total: missing identity fields and unknown enum values raise
``MappingError``; optional fields fall back to documented defaults; any other
key in the row is ignored.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Mapping, Optional, TypeVar

from ..announcements.model import Announcement
from ..attendance.model import AttendanceRecord
from ..core.enums import AttendanceStatus, EventCategory, Role, UserStatus, VoicePart
from ..core.exceptions import MappingError
from ..events.model import Event
from ..users.model import User

E = TypeVar("E")

# Legacy spellings stored by the first version of the backend are still accepted.
_ROLES = {
    "member": Role.MEMBER,
    "user": Role.MEMBER,
    "admin": Role.ADMIN,
    "coordinator": Role.COORDINATOR,
    "koordi": Role.COORDINATOR,
}

_VOICE_PARTS = {
    "soprano": VoicePart.SOPRANO,
    "sopran": VoicePart.SOPRANO,
    "alto": VoicePart.ALTO,
    "tenor": VoicePart.TENOR,
    "bass": VoicePart.BASS,
}

_CATEGORIES = {
    "rehearsal": EventCategory.REHEARSAL,
    "latihan": EventCategory.REHEARSAL,
    "service": EventCategory.SERVICE,
    "pelayanan": EventCategory.SERVICE,
    "other": EventCategory.OTHER,
    "lainnya": EventCategory.OTHER,
}

_USER_STATUSES = {s.value: s for s in UserStatus}

_TRUE_STRINGS = {"1", "true", "yes", "y"}


def _required(row: Mapping[str, Any], key: str, entity: str) -> Any:
    value = row.get(key)
    if value is None or (isinstance(value, str) and not value.strip()):
        raise MappingError(f"{entity} row is missing '{key}'")
    return value


def _text(row: Mapping[str, Any], key: str) -> str:
    value = row.get(key)
    return str(value).strip() if value is not None else ""


def _lookup(value: Any, table: Mapping[str, E], *, field: str, default: Optional[E] = None) -> Optional[E]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    key = str(getattr(value, "value", value)).strip().lower()
    try:
        return table[key]
    except KeyError:
        raise MappingError(f"Unknown {field}: {value!r}") from None


def parse_flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return bool(value)


def parse_timestamp(value: Any, *, field: str = "timestamp") -> datetime:
    """Accept datetime, date, ISO-8601 string or epoch milliseconds.

    Timezone-aware values are converted to naive local time so they compare
    with the naive datetimes used everywhere else.
    """

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        parsed = datetime.fromtimestamp(value / 1000)
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise MappingError(f"Invalid {field}: {value!r}") from None
    else:
        raise MappingError(f"Invalid {field}: {value!r}")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def user_from_row(row: Mapping[str, Any]) -> User:
    return User(
        user_id=str(_required(row, "id", "User")),
        name=str(_required(row, "name", "User")).strip(),
        email=str(_required(row, "email", "User")).strip(),
        role=_lookup(row.get("role"), _ROLES, field="role", default=Role.MEMBER),
        voice_part=_lookup(row.get("voice_part"), _VOICE_PARTS, field="voice part"),
        status=_lookup(row.get("status"), _USER_STATUSES, field="user status", default=UserStatus.PENDING),
        phone=_text(row, "phone"),
        password_hash=row.get("password_hash") or None,
    )


def event_from_row(row: Mapping[str, Any]) -> Event:
    return Event(
        event_id=str(_required(row, "id", "Event")),
        title=str(_required(row, "title", "Event")).strip(),
        date=parse_timestamp(_required(row, "date", "Event"), field="event date"),
        location=_text(row, "location"),
        description=_text(row, "description"),
        category=_lookup(row.get("category"), _CATEGORIES, field="category", default=EventCategory.REHEARSAL),
        is_important=parse_flag(row.get("is_important")),
    )


def attendance_from_row(row: Mapping[str, Any]) -> Optional[AttendanceRecord]:
    """Map an attendance row; a stored "pending" status means no record at all."""

    raw_status = str(_required(row, "status", "Attendance")).strip().lower()
    if raw_status == "pending":
        return None
    try:
        status = AttendanceStatus(raw_status)
    except ValueError:
        raise MappingError(f"Unknown attendance status: {raw_status!r}") from None

    reason = _text(row, "reason") or None
    return AttendanceRecord(
        user_id=str(_required(row, "user_id", "Attendance")),
        event_id=str(_required(row, "event_id", "Attendance")),
        status=status,
        reason=reason,
        timestamp=parse_timestamp(_required(row, "timestamp", "Attendance")),
    )


def announcement_from_row(row: Mapping[str, Any]) -> Announcement:
    author_id = row.get("author_id")
    return Announcement(
        announcement_id=str(_required(row, "id", "Announcement")),
        title=str(_required(row, "title", "Announcement")).strip(),
        content=str(_required(row, "content", "Announcement")),
        author_id=str(author_id) if author_id is not None else None,
        timestamp=parse_timestamp(_required(row, "timestamp", "Announcement")),
    )
