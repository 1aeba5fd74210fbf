from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import Announcement


class AnnouncementRepository(Protocol):
    def list_all(self) -> Sequence[Announcement]:
        raise NotImplementedError

    def create(self, *, title: str, content: str, author_id: Optional[str], timestamp: datetime) -> str:
        raise NotImplementedError

    def update(self, announcement_id: str, *, title: str, content: str) -> bool:
        raise NotImplementedError

    def delete(self, announcement_id: str) -> bool:
        raise NotImplementedError
