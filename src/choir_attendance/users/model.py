from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role, UserStatus, VoicePart


@dataclass(frozen=True)
class User:
    """Domain entity: choir member.

    Note: Plain data object (no DB access code).
    """

    user_id: str
    name: str
    email: str
    role: Role
    voice_part: Optional[VoicePart]
    status: UserStatus
    phone: str = ""
    password_hash: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
