from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.enums import EventCategory


@dataclass(frozen=True)
class Event:
    """Domain entity: a scheduled rehearsal, service or other gathering."""

    event_id: str
    title: str
    date: datetime
    location: str
    description: str = ""
    category: EventCategory = EventCategory.REHEARSAL
    # Informational only, never used in aggregation.
    is_important: bool = False


@dataclass(frozen=True)
class EventDraft:
    """Input for creating or updating an event."""

    title: str
    date: datetime
    location: str
    description: str = ""
    category: EventCategory = EventCategory.REHEARSAL
    is_important: bool = False
