from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """Stores at most one record per (user_id, event_id)."""

    def list_all(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def upsert(
        self,
        *,
        user_id: str,
        event_id: str,
        status: AttendanceStatus,
        reason: Optional[str],
        timestamp: datetime,
    ) -> None:
        """Create the record or overwrite status, reason and timestamp."""

        raise NotImplementedError

    def delete(self, *, user_id: str, event_id: str) -> bool:
        raise NotImplementedError
