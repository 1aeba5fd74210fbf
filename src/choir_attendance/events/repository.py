from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Event, EventDraft


class EventRepository(Protocol):
    def list_all(self) -> Sequence[Event]:
        """All events ordered by date ascending."""

        raise NotImplementedError

    def get_by_id(self, event_id: str) -> Optional[Event]:
        raise NotImplementedError

    def create(self, draft: EventDraft) -> str:
        raise NotImplementedError

    def update(self, event_id: str, draft: EventDraft) -> bool:
        raise NotImplementedError

    def delete(self, event_id: str) -> bool:
        raise NotImplementedError
