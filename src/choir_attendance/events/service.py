from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Optional, Union

from ..common.validators import optional_text, require_non_empty
from ..core.constants import DEFAULT_UPCOMING_LIMIT, UPCOMING_GRACE_HOURS
from ..core.enums import EventCategory, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..ledger.snapshot import Ledger
from ..users.model import User
from .importer import RowError, parse_schedule_csv, schedule_template
from .model import Event, EventDraft
from .repository import EventRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImportResult:
    created: int
    failed: int
    errors: tuple[RowError, ...] = ()


class EventService:
    """Use case: admin scheduling plus the schedule views."""

    def __init__(self, events: EventRepository):
        self._events = events

    @staticmethod
    def _require_admin(actor: User) -> None:
        if actor.role != Role.ADMIN:
            logger.warning("User %s refused: scheduling requires admin", actor.user_id)
            raise AuthorizationError("Only admins can manage the schedule")

    @staticmethod
    def _checked(draft: EventDraft) -> EventDraft:
        return replace(
            draft,
            title=require_non_empty(draft.title, "Title"),
            location=require_non_empty(draft.location, "Location"),
            description=optional_text(draft.description, "Description"),
        )

    def create(self, actor: User, draft: EventDraft) -> str:
        self._require_admin(actor)
        event_id = self._events.create(self._checked(draft))
        logger.info("Event %s created by %s", event_id, actor.user_id)
        return event_id

    def update(self, actor: User, event_id: str, draft: EventDraft) -> None:
        self._require_admin(actor)
        checked = self._checked(draft)
        if not self._events.get_by_id(event_id):
            raise NotFoundError("Event not found")
        self._events.update(event_id, checked)
        logger.info("Event %s updated by %s", event_id, actor.user_id)

    def delete(self, actor: User, event_id: str) -> None:
        self._require_admin(actor)
        if not self._events.delete(event_id):
            raise NotFoundError("Event not found")
        logger.info("Event %s deleted by %s", event_id, actor.user_id)

    def import_schedule(self, actor: User, csv_text: str) -> ImportResult:
        """Create one event per valid row; invalid rows are counted, not fatal."""

        self._require_admin(actor)
        parsed = parse_schedule_csv(csv_text)
        errors = list(parsed.errors)

        created = 0
        for line, draft in parsed.drafts:
            try:
                self._events.create(self._checked(draft))
            except ValidationError as e:
                errors.append(RowError(line, str(e)))
                continue
            created += 1

        logger.info("Schedule import by %s: %d created, %d failed", actor.user_id, created, len(errors))
        return ImportResult(created=created, failed=len(errors), errors=tuple(errors))

    @staticmethod
    def schedule_template() -> str:
        return schedule_template()

    @staticmethod
    def upcoming_events(ledger: Ledger, now: datetime, limit: int = DEFAULT_UPCOMING_LIMIT) -> list[Event]:
        """Events not older than a day, soonest first."""

        cutoff = now - timedelta(hours=UPCOMING_GRACE_HOURS)
        upcoming = sorted((e for e in ledger.events if e.date > cutoff), key=lambda e: (e.date, e.event_id))
        return upcoming[:limit]

    @staticmethod
    def filter_events(
        ledger: Ledger,
        now: datetime,
        *,
        upcoming_only: bool = True,
        query: str = "",
        month: Optional[int] = None,
        category: Union[EventCategory, str, None] = None,
        responded: Optional[bool] = None,
        user_id: Optional[str] = None,
    ) -> list[Event]:
        """Schedule page filters. ``responded`` needs ``user_id``.

        ``month`` is 1-12 and matches any year.
        """

        if month is not None and not 1 <= month <= 12:
            raise ValidationError("Month must be between 1 and 12")
        try:
            wanted_category = EventCategory(category) if category else None
        except ValueError:
            raise ValidationError(f"Unknown category: {category!r}") from None
        if responded is not None and not user_id:
            raise ValidationError("A user is required to filter by response")

        cutoff = now - timedelta(hours=UPCOMING_GRACE_HOURS)
        needle = (query or "").strip().lower()

        def keep(e: Event) -> bool:
            if upcoming_only and e.date <= cutoff:
                return False
            if needle and needle not in e.title.lower() and needle not in e.location.lower():
                return False
            if month is not None and e.date.month != month:
                return False
            if wanted_category is not None and e.category != wanted_category:
                return False
            if responded is not None:
                has_record = ledger.record_for(user_id, e.event_id) is not None
                if has_record != responded:
                    return False
            return True

        return sorted((e for e in ledger.events if keep(e)), key=lambda e: (e.date, e.event_id))
