from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from ..ledger.mapping import attendance_from_row
from .model import AttendanceRecord
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT user_id, event_id, status, reason, timestamp FROM attendance")
            records = (attendance_from_row(r) for r in fetchall(cur))
            return [r for r in records if r is not None]

    def upsert(
        self,
        *,
        user_id: str,
        event_id: str,
        status: AttendanceStatus,
        reason: Optional[str],
        timestamp: datetime,
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(user_id, event_id, status, reason, timestamp)
                VALUES(%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    status=VALUES(status), reason=VALUES(reason), timestamp=VALUES(timestamp)
                """,
                (user_id, event_id, status.value, reason, timestamp),
            )

    def delete(self, *, user_id: str, event_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance WHERE user_id=%s AND event_id=%s", (user_id, event_id))
            return cur.rowcount > 0
