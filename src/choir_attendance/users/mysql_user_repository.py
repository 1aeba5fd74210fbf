from __future__ import annotations

import uuid
from typing import Optional, Sequence

from ..core.enums import Role, UserStatus, VoicePart
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..ledger.mapping import user_from_row
from .model import User
from .repository import UserRepository

_COLUMNS = "id, name, email, password_hash, role, voice_part, phone, status"


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users ORDER BY name ASC")
            return [user_from_row(r) for r in fetchall(cur)]

    def get_by_id(self, user_id: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE id=%s", (user_id,))
            r = fetchone(cur)
            return user_from_row(r) if r else None

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE email=%s", (email,))
            r = fetchone(cur)
            return user_from_row(r) if r else None

    def create_user(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        role: Role,
        voice_part: Optional[VoicePart],
        phone: str,
        status: UserStatus,
    ) -> str:
        user_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(id, name, email, password_hash, role, voice_part, phone, status)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    user_id,
                    name,
                    email,
                    password_hash,
                    role.value,
                    voice_part.value if voice_part else None,
                    phone or None,
                    status.value,
                ),
            )
        return user_id

    def update_user(
        self,
        user_id: str,
        *,
        name: str,
        email: str,
        role: Role,
        voice_part: Optional[VoicePart],
        phone: str,
        status: UserStatus,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE users
                SET name=%s, email=%s, role=%s, voice_part=%s, phone=%s, status=%s
                WHERE id=%s
                """,
                (
                    name,
                    email,
                    role.value,
                    voice_part.value if voice_part else None,
                    phone or None,
                    status.value,
                    user_id,
                ),
            )
            return cur.rowcount > 0

    def set_status(self, user_id: str, *, status: UserStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET status=%s WHERE id=%s", (status.value, user_id))
            return cur.rowcount > 0

    def set_password_hash(self, user_id: str, *, password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET password_hash=%s WHERE id=%s", (password_hash, user_id))
            return cur.rowcount > 0

    def delete_by_id(self, user_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE id=%s", (user_id,))
            return cur.rowcount > 0
