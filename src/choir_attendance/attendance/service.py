from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Union

from ..common.datetime_utils import now_local
from ..common.validators import require_min_length
from ..core.constants import MIN_REASON_LENGTH
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..events.repository import EventRepository
from ..ledger.snapshot import Ledger
from ..users.model import User
from ..users.repository import UserRepository
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def can_manage(actor: User, target: User) -> bool:
    """Admins manage everyone; coordinators only members of their own voice part."""
    if actor.role == Role.ADMIN:
        return True
    if actor.role == Role.COORDINATOR:
        return actor.voice_part is not None and actor.voice_part == target.voice_part
    return False


def _parse_status(status: Union[AttendanceStatus, str]) -> AttendanceStatus:
    try:
        return AttendanceStatus(status)
    except ValueError:
        raise ValidationError(f"Unknown attendance status: {status!r}") from None


def _checked_reason(status: AttendanceStatus, reason: Optional[str]) -> Optional[str]:
    if status == AttendanceStatus.ABSENT:
        return require_min_length(reason, "Reason", MIN_REASON_LENGTH)
    return None


class AttendanceService:
    """Use case: record, correct and remove attendance answers.

    Input is validated before any repository call, so a rejected request never
    mutates the ledger.
    """

    def __init__(self, attendance: AttendanceRepository, users: UserRepository, events: EventRepository):
        self._attendance = attendance
        self._users = users
        self._events = events

    def _require_event(self, event_id: str) -> None:
        if not self._events.get_by_id(event_id):
            raise NotFoundError("Event not found")

    def _require_managed_user(self, actor: User, user_id: str) -> User:
        if actor.role not in (Role.ADMIN, Role.COORDINATOR):
            logger.warning("Member %s tried to manage attendance of %s", actor.user_id, user_id)
            raise AuthorizationError("Only admins and coordinators can manage attendance")

        target = self._users.get_by_id(user_id)
        if not target:
            raise NotFoundError("Member not found")
        if not can_manage(actor, target):
            logger.warning("Coordinator %s refused on member %s of another voice part", actor.user_id, user_id)
            raise AuthorizationError("Coordinators can only manage their own voice part")
        return target

    def submit(
        self,
        actor: User,
        event_id: str,
        status: Union[AttendanceStatus, str],
        reason: Optional[str] = None,
        *,
        now: Optional[datetime] = None,
    ) -> None:
        """Self report; resubmitting overwrites the previous answer."""

        parsed = _parse_status(status)
        reason = _checked_reason(parsed, reason)

        if not actor.is_active and not actor.is_admin:
            logger.warning("Inactive user %s tried to submit attendance", actor.user_id)
            raise AuthorizationError("Your membership is not active")
        self._require_event(event_id)

        self._attendance.upsert(
            user_id=actor.user_id,
            event_id=event_id,
            status=parsed,
            reason=reason,
            timestamp=now or now_local(),
        )
        logger.info("Attendance %s recorded for %s on %s", parsed.value, actor.user_id, event_id)

    def submit_for(
        self,
        actor: User,
        user_id: str,
        event_id: str,
        status: Union[AttendanceStatus, str],
        reason: Optional[str] = None,
        *,
        now: Optional[datetime] = None,
    ) -> None:
        """Manual override by an admin or a coordinator."""

        parsed = _parse_status(status)
        reason = _checked_reason(parsed, reason)

        self._require_managed_user(actor, user_id)
        self._require_event(event_id)

        self._attendance.upsert(
            user_id=user_id,
            event_id=event_id,
            status=parsed,
            reason=reason,
            timestamp=now or now_local(),
        )
        logger.info("Attendance %s set for %s on %s by %s", parsed.value, user_id, event_id, actor.user_id)

    def remove(self, actor: User, user_id: str, event_id: str) -> bool:
        """Drop the record so the member is pending again. False when there was none."""

        self._require_managed_user(actor, user_id)
        removed = self._attendance.delete(user_id=user_id, event_id=event_id)
        if removed:
            logger.info("Attendance of %s on %s removed by %s", user_id, event_id, actor.user_id)
        return removed

    def unrecorded_members(self, ledger: Ledger, actor: User, event_id: str, query: str = "") -> list[User]:
        """Active members without an answer for the event that ``actor`` may manage."""

        if actor.role not in (Role.ADMIN, Role.COORDINATOR):
            raise AuthorizationError("Only admins and coordinators can manage attendance")
        if ledger.event_by_id(event_id) is None:
            raise NotFoundError("Event not found")

        recorded = {r.user_id for r in ledger.records_for_event(event_id)}
        needle = (query or "").strip().lower()
        members = [
            u
            for u in ledger.active_users()
            if u.user_id not in recorded and needle in u.name.lower() and can_manage(actor, u)
        ]
        return sorted(members, key=lambda u: (u.name.lower(), u.user_id))
