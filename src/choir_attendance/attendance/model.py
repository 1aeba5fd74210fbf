from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one stored answer per (user_id, event_id)."""

    user_id: str
    event_id: str
    status: AttendanceStatus
    reason: Optional[str]
    timestamp: datetime

    @property
    def key(self) -> tuple[str, str]:
        return (self.user_id, self.event_id)


# Derived classification of a (user, event) pair. Pending has no stored row.


@dataclass(frozen=True)
class Present:
    label = "present"


@dataclass(frozen=True)
class Absent:
    reason: str
    label = "absent"


@dataclass(frozen=True)
class Pending:
    label = "pending"


Classification = Union[Present, Absent, Pending]
