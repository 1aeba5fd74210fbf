from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from ..ledger.mapping import announcement_from_row
from .model import Announcement
from .repository import AnnouncementRepository


class MySQLAnnouncementRepository(AnnouncementRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Announcement]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, title, content, author_id, timestamp FROM announcements ORDER BY timestamp DESC"
            )
            return [announcement_from_row(r) for r in fetchall(cur)]

    def create(self, *, title: str, content: str, author_id: Optional[str], timestamp: datetime) -> str:
        announcement_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO announcements(id, title, content, author_id, timestamp) VALUES(%s,%s,%s,%s,%s)",
                (announcement_id, title, content, author_id, timestamp),
            )
        return announcement_id

    def update(self, announcement_id: str, *, title: str, content: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE announcements SET title=%s, content=%s WHERE id=%s",
                (title, content, announcement_id),
            )
            return cur.rowcount > 0

    def delete(self, announcement_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM announcements WHERE id=%s", (announcement_id,))
            return cur.rowcount > 0
