from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty
from ..core.constants import FALLBACK_AUTHOR
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError
from ..ledger.snapshot import Ledger
from ..users.model import User
from .model import AnnouncementView
from .repository import AnnouncementRepository

logger = logging.getLogger(__name__)


class AnnouncementService:
    def __init__(self, announcements: AnnouncementRepository):
        self._announcements = announcements

    @staticmethod
    def _require_publisher(actor: User) -> None:
        if actor.role not in (Role.ADMIN, Role.COORDINATOR):
            logger.warning("User %s refused: announcements require admin or coordinator", actor.user_id)
            raise AuthorizationError("Only admins and coordinators can publish announcements")

    def create(self, actor: User, *, title: str, content: str, now: Optional[datetime] = None) -> str:
        self._require_publisher(actor)
        title = require_non_empty(title, "Title")
        content = require_non_empty(content, "Content")

        announcement_id = self._announcements.create(
            title=title,
            content=content,
            author_id=actor.user_id,
            timestamp=now or now_local(),
        )
        logger.info("Announcement %s published by %s", announcement_id, actor.user_id)
        return announcement_id

    def update(self, actor: User, announcement_id: str, *, title: str, content: str) -> None:
        self._require_publisher(actor)
        title = require_non_empty(title, "Title")
        content = require_non_empty(content, "Content")

        if not self._announcements.update(announcement_id, title=title, content=content):
            raise NotFoundError("Announcement not found")
        logger.info("Announcement %s updated by %s", announcement_id, actor.user_id)

    def delete(self, actor: User, announcement_id: str) -> None:
        self._require_publisher(actor)
        if not self._announcements.delete(announcement_id):
            raise NotFoundError("Announcement not found")
        logger.info("Announcement %s deleted by %s", announcement_id, actor.user_id)

    @staticmethod
    def list_for_display(ledger: Ledger) -> list[AnnouncementView]:
        """Newest first; the author name is looked up now, not when it was posted."""

        views = []
        for a in ledger.announcements:
            author = ledger.user_by_id(a.author_id) if a.author_id else None
            views.append(
                AnnouncementView(
                    announcement_id=a.announcement_id,
                    title=a.title,
                    content=a.content,
                    author=author.name if author else FALLBACK_AUTHOR,
                    timestamp=a.timestamp,
                )
            )
        views.sort(key=lambda v: (v.timestamp, v.announcement_id), reverse=True)
        return views
