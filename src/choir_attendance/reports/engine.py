"""Attendance aggregation over a ledger snapshot.

Every function here is pure: it reads the ledger it is given and returns a
fresh result. Percentages all go through ``attendance_stats`` so that the
profile, monthly, member management and recap views agree on rounding and on
which event categories count.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from ..attendance.model import Absent, Classification, Pending, Present
from ..core.constants import NO_REASON_PLACEHOLDER, VOICE_PART_ORDER
from ..core.enums import AttendanceStatus, VoicePart
from ..core.exceptions import NotFoundError
from ..events.model import Event
from ..ledger.snapshot import Ledger
from ..users.model import User
from .interval import Interval


@dataclass(frozen=True)
class AbsentMember:
    user: User
    reason: str


@dataclass(frozen=True)
class VoicePartBucket:
    voice_part: VoicePart
    present: tuple[User, ...]
    absent: tuple[AbsentMember, ...]
    pending: tuple[User, ...]

    @property
    def present_count(self) -> int:
        return len(self.present)

    @property
    def absent_count(self) -> int:
        return len(self.absent)

    @property
    def pending_count(self) -> int:
        return len(self.pending)

    @property
    def total(self) -> int:
        return len(self.present) + len(self.absent) + len(self.pending)


@dataclass(frozen=True)
class EventComposition:
    event: Event
    buckets: tuple[VoicePartBucket, ...]

    def bucket(self, voice_part: VoicePart) -> VoicePartBucket:
        for b in self.buckets:
            if b.voice_part == voice_part:
                return b
        raise KeyError(voice_part)

    @property
    def present_count(self) -> int:
        return sum(b.present_count for b in self.buckets)

    @property
    def absent_count(self) -> int:
        return sum(b.absent_count for b in self.buckets)

    @property
    def pending_count(self) -> int:
        return sum(b.pending_count for b in self.buckets)


@dataclass(frozen=True)
class AttendanceStats:
    present: int
    absent: int
    pending: int
    total: int
    percentage: int


@dataclass(frozen=True)
class HistoryEntry:
    event: Event
    classification: Classification


@dataclass(frozen=True)
class MemberHistory:
    user: User
    interval: Interval
    entries: tuple[HistoryEntry, ...]
    stats: AttendanceStats


@dataclass(frozen=True)
class RecapRow:
    user: User
    present: int
    absent: int
    total: int
    percentage: int


@dataclass(frozen=True)
class RecapSummary:
    interval: Interval
    rows: tuple[RecapRow, ...]
    average: float
    total_events: int


@dataclass(frozen=True)
class VoicePartCounts:
    counts: dict[VoicePart, int]
    total: int


def round_half_up_percentage(present: int, total: int) -> int:
    """round(100 * present / total) with halves rounded up; 0 when total is 0."""
    if total <= 0:
        return 0
    # Integer form of floor(100 * present / total + 0.5).
    return (200 * present + total) // (2 * total)


def counted_events(events: Iterable[Event], interval: Interval) -> list[Event]:
    """Rehearsals and services inside the interval, oldest first."""
    selected = [e for e in events if e.category.counts and interval.contains(e.date)]
    return sorted(selected, key=lambda e: (e.date, e.event_id))


def classify(ledger: Ledger, user_id: str, event_id: str) -> Classification:
    # Records whose user or event has disappeared from the snapshot are ignored.
    if ledger.user_by_id(user_id) is None or ledger.event_by_id(event_id) is None:
        return Pending()

    record = ledger.record_for(user_id, event_id)
    if record is None:
        return Pending()
    if record.status == AttendanceStatus.PRESENT:
        return Present()
    reason = (record.reason or "").strip()
    return Absent(reason=reason or NO_REASON_PLACEHOLDER)


def event_composition(ledger: Ledger, event_id: str) -> EventComposition:
    event = ledger.event_by_id(event_id)
    if event is None:
        raise NotFoundError("Event not found")

    groups: dict[VoicePart, tuple[list[User], list[AbsentMember], list[User]]] = {
        vp: ([], [], []) for vp in VOICE_PART_ORDER
    }
    for user in ledger.active_users():
        if user.voice_part is None:
            continue
        present, absent, pending = groups[user.voice_part]
        state = classify(ledger, user.user_id, event_id)
        if isinstance(state, Present):
            present.append(user)
        elif isinstance(state, Absent):
            absent.append(AbsentMember(user=user, reason=state.reason))
        else:
            pending.append(user)

    buckets = tuple(
        VoicePartBucket(
            voice_part=vp,
            present=tuple(groups[vp][0]),
            absent=tuple(groups[vp][1]),
            pending=tuple(groups[vp][2]),
        )
        for vp in VOICE_PART_ORDER
    )
    return EventComposition(event=event, buckets=buckets)


def _tally(ledger: Ledger, user_id: str, events: Sequence[Event]) -> AttendanceStats:
    present = absent = 0
    for event in events:
        state = classify(ledger, user_id, event.event_id)
        if isinstance(state, Present):
            present += 1
        elif isinstance(state, Absent):
            absent += 1
    total = len(events)
    return AttendanceStats(
        present=present,
        absent=absent,
        pending=total - present - absent,
        total=total,
        percentage=round_half_up_percentage(present, total),
    )


def attendance_stats(ledger: Ledger, user_id: str, interval: Interval) -> AttendanceStats:
    """Attendance of one user over the counted events of ``interval``."""
    return _tally(ledger, user_id, counted_events(ledger.events, interval))


def attendance_percentage(ledger: Ledger, user_id: str, interval: Interval) -> int:
    return attendance_stats(ledger, user_id, interval).percentage


def average_percentage(
    ledger: Ledger,
    interval: Interval,
    users: Optional[Iterable[User]] = None,
) -> float:
    """Mean of per-user percentages (not a recomputation from raw counts).

    ``users`` defaults to the active members. Every user is measured over the
    same interval.
    """

    members = list(ledger.active_users() if users is None else users)
    if not members:
        return 0.0
    events = counted_events(ledger.events, interval)
    return sum(_tally(ledger, u.user_id, events).percentage for u in members) / len(members)


def member_history(ledger: Ledger, user_id: str, interval: Interval) -> MemberHistory:
    user = ledger.user_by_id(user_id)
    if user is None:
        raise NotFoundError("Member not found")

    events = counted_events(ledger.events, interval)
    entries = tuple(HistoryEntry(event=e, classification=classify(ledger, user_id, e.event_id)) for e in events)
    return MemberHistory(user=user, interval=interval, entries=entries, stats=_tally(ledger, user_id, events))


def matches_query(user: User, query: str) -> bool:
    """Case-insensitive match on name or voice part; an empty query matches all."""
    needle = (query or "").strip().lower()
    if not needle:
        return True
    if needle in user.name.lower():
        return True
    return user.voice_part is not None and needle in user.voice_part.value.lower()


def build_recap(ledger: Ledger, interval: Interval, query: str = "") -> RecapSummary:
    events = counted_events(ledger.events, interval)

    rows = []
    for user in ledger.active_users():
        if not matches_query(user, query):
            continue
        stats = _tally(ledger, user.user_id, events)
        rows.append(
            RecapRow(
                user=user,
                present=stats.present,
                absent=stats.absent,
                total=stats.total,
                percentage=stats.percentage,
            )
        )

    rows.sort(key=lambda r: (-r.percentage, r.user.name.lower(), r.user.user_id))
    average = sum(r.percentage for r in rows) / len(rows) if rows else 0.0
    return RecapSummary(interval=interval, rows=tuple(rows), average=average, total_events=len(events))


def voice_part_counts(ledger: Ledger) -> VoicePartCounts:
    counts = {vp: 0 for vp in VOICE_PART_ORDER}
    active = ledger.active_users()
    for user in active:
        if user.voice_part is not None:
            counts[user.voice_part] += 1
    return VoicePartCounts(counts=counts, total=len(active))
