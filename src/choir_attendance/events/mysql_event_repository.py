from __future__ import annotations

import uuid
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..ledger.mapping import event_from_row
from .model import Event, EventDraft
from .repository import EventRepository

_COLUMNS = "id, title, date, location, description, category, is_important"


class MySQLEventRepository(EventRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Event]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM events ORDER BY date ASC")
            return [event_from_row(r) for r in fetchall(cur)]

    def get_by_id(self, event_id: str) -> Optional[Event]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM events WHERE id=%s", (event_id,))
            r = fetchone(cur)
            return event_from_row(r) if r else None

    def create(self, draft: EventDraft) -> str:
        event_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO events(id, title, date, location, description, category, is_important)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    event_id,
                    draft.title,
                    draft.date,
                    draft.location,
                    draft.description or None,
                    draft.category.value,
                    int(draft.is_important),
                ),
            )
        return event_id

    def update(self, event_id: str, draft: EventDraft) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE events
                SET title=%s, date=%s, location=%s, description=%s, category=%s, is_important=%s
                WHERE id=%s
                """,
                (
                    draft.title,
                    draft.date,
                    draft.location,
                    draft.description or None,
                    draft.category.value,
                    int(draft.is_important),
                    event_id,
                ),
            )
            return cur.rowcount > 0

    def delete(self, event_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM events WHERE id=%s", (event_id,))
            return cur.rowcount > 0
