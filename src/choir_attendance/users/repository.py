from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role, UserStatus, VoicePart
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Note: the service layer depends on this interface, not on a concrete DB.
    """

    def list_all(self) -> Sequence[User]:
        raise NotImplementedError

    def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

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
        raise NotImplementedError

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
        raise NotImplementedError

    def set_status(self, user_id: str, *, status: UserStatus) -> bool:
        raise NotImplementedError

    def set_password_hash(self, user_id: str, *, password_hash: str) -> bool:
        raise NotImplementedError

    def delete_by_id(self, user_id: str) -> bool:
        raise NotImplementedError
