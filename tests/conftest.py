from __future__ import annotations

from datetime import date

import pytest

from choir_attendance.container import Container, wire
from choir_attendance.ledger.snapshot import Ledger, Snapshot
from choir_attendance.reports.interval import Interval

from fakes import InMemoryAnnouncements, InMemoryAttendance, InMemoryEvents, InMemoryUsers, sample_snapshot


@pytest.fixture
def snapshot() -> Snapshot:
    return sample_snapshot()


@pytest.fixture
def ledger(snapshot) -> Ledger:
    return Ledger(snapshot)


@pytest.fixture
def january() -> Interval:
    return Interval.for_dates(date(2026, 1, 1), date(2026, 1, 31))


@pytest.fixture
def users_repo(snapshot):
    return InMemoryUsers(snapshot.users)


@pytest.fixture
def events_repo(snapshot):
    return InMemoryEvents(snapshot.events)


@pytest.fixture
def attendance_repo(snapshot):
    return InMemoryAttendance(snapshot.attendance)


@pytest.fixture
def announcements_repo(snapshot):
    return InMemoryAnnouncements(snapshot.announcements)


@pytest.fixture
def container(users_repo, events_repo, attendance_repo, announcements_repo) -> Container:
    return wire(
        users_repo=users_repo,
        events_repo=events_repo,
        attendance_repo=attendance_repo,
        announcements_repo=announcements_repo,
    )


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    from choir_attendance.main import create_app

    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    def _login(user_id: str):
        with client.session_transaction() as sess:
            sess["user_id"] = user_id
        return client

    return _login
