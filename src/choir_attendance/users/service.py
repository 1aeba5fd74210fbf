from __future__ import annotations

import logging
from typing import Optional, Union

from werkzeug.security import generate_password_hash

from ..common.validators import optional_text, require_email, require_min_length, require_non_empty
from ..core.constants import DEFAULT_PASSWORD, MIN_PASSWORD_LENGTH
from ..core.enums import Role, UserStatus, VoicePart
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..ledger.snapshot import Ledger
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


def parse_voice_part(value: Union[VoicePart, str, None]) -> VoicePart:
    if not value:
        raise ValidationError("Voice part is required")
    try:
        return VoicePart(value)
    except ValueError:
        raise ValidationError(f"Unknown voice part: {value!r}") from None


def parse_role(value: Union[Role, str, None]) -> Role:
    try:
        return Role(value or Role.MEMBER)
    except ValueError:
        raise ValidationError(f"Unknown role: {value!r}") from None


class MembershipService:
    """Use case: registration and the admin's membership directory."""

    def __init__(self, users: UserRepository):
        self._users = users

    def _require_admin(self, actor: User, action: str) -> None:
        if actor.role != Role.ADMIN:
            logger.warning("User %s refused: %s requires admin", actor.user_id, action)
            raise AuthorizationError("Only admins can manage members")

    def _require_user(self, user_id: str) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("Member not found")
        return user

    def _require_unique_email(self, email: str, *, exclude_id: Optional[str] = None) -> None:
        existing = self._users.get_by_email(email)
        if existing and existing.user_id != exclude_id:
            raise ValidationError("Email is already registered")

    def register(
        self,
        *,
        name: str,
        email: str,
        password: str,
        voice_part: Union[VoicePart, str],
        phone: str = "",
    ) -> str:
        """Self registration. The account waits for admin approval."""

        name = require_non_empty(name, "Name")
        email = require_email(email)
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
        part = parse_voice_part(voice_part)
        self._require_unique_email(email)

        user_id = self._users.create_user(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            role=Role.MEMBER,
            voice_part=part,
            phone=optional_text(phone, "Phone"),
            status=UserStatus.PENDING,
        )
        logger.info("Registration received from %s (%s)", email, user_id)
        return user_id

    def create_member(
        self,
        actor: User,
        *,
        name: str,
        email: str,
        voice_part: Union[VoicePart, str],
        phone: str = "",
        role: Union[Role, str] = Role.MEMBER,
        password: Optional[str] = None,
    ) -> str:
        """Admin-created accounts are active right away."""

        self._require_admin(actor, "create member")
        name = require_non_empty(name, "Name")
        email = require_email(email)
        part = parse_voice_part(voice_part)
        parsed_role = parse_role(role)
        password = password or DEFAULT_PASSWORD
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
        self._require_unique_email(email)

        user_id = self._users.create_user(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            role=parsed_role,
            voice_part=part,
            phone=optional_text(phone, "Phone"),
            status=UserStatus.ACTIVE,
        )
        logger.info("Member %s created by %s", user_id, actor.user_id)
        return user_id

    def _set_status(self, actor: User, user_id: str, status: UserStatus) -> None:
        self._require_admin(actor, f"set status {status.value}")
        self._require_user(user_id)
        self._users.set_status(user_id, status=status)
        logger.info("Member %s set to %s by %s", user_id, status.value, actor.user_id)

    def approve(self, actor: User, user_id: str) -> None:
        self._set_status(actor, user_id, UserStatus.ACTIVE)

    def reject(self, actor: User, user_id: str) -> None:
        self._set_status(actor, user_id, UserStatus.REJECTED)

    def update(
        self,
        actor: User,
        user_id: str,
        *,
        name: str,
        email: str,
        voice_part: Union[VoicePart, str],
        role: Union[Role, str],
        phone: str = "",
        status: Union[UserStatus, str, None] = None,
    ) -> None:
        self._require_admin(actor, "update member")
        current = self._require_user(user_id)

        name = require_non_empty(name, "Name")
        email = require_email(email)
        part = parse_voice_part(voice_part)
        parsed_role = parse_role(role)
        try:
            parsed_status = UserStatus(status) if status else current.status
        except ValueError:
            raise ValidationError(f"Unknown status: {status!r}") from None
        self._require_unique_email(email, exclude_id=user_id)

        self._users.update_user(
            user_id,
            name=name,
            email=email,
            role=parsed_role,
            voice_part=part,
            phone=optional_text(phone, "Phone"),
            status=parsed_status,
        )
        logger.info("Member %s updated by %s", user_id, actor.user_id)

    def delete(self, actor: User, user_id: str) -> None:
        self._require_admin(actor, "delete member")
        if actor.user_id == user_id:
            raise ValidationError("You cannot delete your own account")
        self._require_user(user_id)

        if not self._users.delete_by_id(user_id):
            raise ValidationError("Deleting the member failed")
        logger.info("Member %s deleted by %s", user_id, actor.user_id)

    def reset_password(self, actor: User, user_id: str) -> str:
        """Reset to the default password and return it so the admin can pass it on."""

        self._require_admin(actor, "reset password")
        self._require_user(user_id)
        self._users.set_password_hash(user_id, password_hash=generate_password_hash(DEFAULT_PASSWORD))
        logger.info("Password of %s reset by %s", user_id, actor.user_id)
        return DEFAULT_PASSWORD

    @staticmethod
    def pending_members(ledger: Ledger) -> list[User]:
        members = [u for u in ledger.users if u.status == UserStatus.PENDING]
        return sorted(members, key=lambda u: (u.name.lower(), u.user_id))

    @staticmethod
    def search_members(ledger: Ledger, query: str = "") -> list[User]:
        """Active members whose name, email or voice part contains ``query``."""

        needle = (query or "").strip().lower()

        def matches(u: User) -> bool:
            fields = [u.name, u.email, u.voice_part.value if u.voice_part else ""]
            return any(needle in f.lower() for f in fields)

        members = [u for u in ledger.active_users() if matches(u)]
        return sorted(members, key=lambda u: (u.name.lower(), u.user_id))
