from __future__ import annotations

from datetime import datetime

import pytest

from choir_attendance.announcements.service import AnnouncementService
from choir_attendance.core.exceptions import AuthorizationError, NotFoundError, ValidationError


@pytest.fixture
def service(announcements_repo):
    return AnnouncementService(announcements_repo)


def test_list_newest_first_with_author_fallback(ledger):
    views = AnnouncementService.list_for_display(ledger)
    assert [(v.announcement_id, v.author) for v in views] == [("n2", "Admin"), ("n1", "Grace")]


def test_coordinator_can_publish(service, announcements_repo, users_repo):
    at = datetime(2026, 1, 30, 9, 0)
    announcement_id = service.create(users_repo.get_by_id("coord"), title="Tenors", content="Sectional at 6", now=at)
    item = announcements_repo.items[announcement_id]
    assert (item.author_id, item.timestamp) == ("coord", at)


def test_member_cannot_publish(service, users_repo):
    with pytest.raises(AuthorizationError):
        service.create(users_repo.get_by_id("s1"), title="Hi", content="there")


def test_content_is_required(service, users_repo):
    with pytest.raises(ValidationError):
        service.create(users_repo.get_by_id("admin"), title="Hi", content="  ")


def test_update_and_delete(service, announcements_repo, users_repo):
    admin = users_repo.get_by_id("admin")
    service.update(admin, "n1", title="Robes!", content="Bring robes and folders")
    assert announcements_repo.items["n1"].title == "Robes!"

    service.delete(admin, "n1")
    assert "n1" not in announcements_repo.items
    with pytest.raises(NotFoundError):
        service.update(admin, "n1", title="x", content="y")
