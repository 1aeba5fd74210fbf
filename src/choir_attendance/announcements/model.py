from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Announcement:
    announcement_id: str
    title: str
    content: str
    author_id: Optional[str]
    timestamp: datetime


@dataclass(frozen=True)
class AnnouncementView:
    """Read-model: announcement with the author's display name resolved."""

    announcement_id: str
    title: str
    content: str
    author: str
    timestamp: datetime
