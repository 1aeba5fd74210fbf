from __future__ import annotations

import csv
import io
from datetime import date, datetime

import pytest

from choir_attendance.core.enums import EventCategory, VoicePart
from choir_attendance.core.exceptions import InvalidIntervalError
from choir_attendance.events.model import Event
from choir_attendance.ledger.snapshot import Ledger, Snapshot
from choir_attendance.reports.exporter import event_column_label, export_attendance_matrix, export_recap_summary
from choir_attendance.reports.interval import Interval

from fakes import make_user

EXPECTED_MATRIX = (
    "Name,25 Jan,27 Jan,Percentage\n"
    "--- SOPRANO ---,,,\n"
    "1. Abigail,v,v,100%\n"
    "2. Hannah,-,-,0%\n"
    "3. Sarah,v,I,50%\n"
    "--- ALTO ---,,,\n"
    "1. Grace,-,-,0%\n"
    "2. Ruth,I,-,0%\n"
    "--- TENOR ---,,,\n"
    "1. Daniel,-,v,50%\n"
    "2. Tom,v,v,100%\n"
    "--- BASS ---,,,\n"
    "1. Peter,-,-,0%\n"
)


def _rows(content: str) -> list[list[str]]:
    return list(csv.reader(io.StringIO(content)))


def test_matrix_content(ledger, january):
    export = export_attendance_matrix(ledger, january)

    assert export.content == EXPECTED_MATRIX
    assert export.filename == "Recap_2026-01-01_to_2026-01-31.csv"
    assert export.mimetype == "text/csv"


def test_matrix_shape(ledger, january):
    rows = _rows(export_attendance_matrix(ledger, january).content)

    assert len(rows) == 1 + 4 + len(ledger.active_users())
    assert {len(r) for r in rows} == {1 + 2 + 1}


def test_other_events_are_not_columns(ledger, january):
    header = _rows(export_attendance_matrix(ledger, january).content)[0]
    assert "20 Jan" not in header


def test_matrix_is_reproducible(snapshot, january):
    first = export_attendance_matrix(Ledger(snapshot), january)
    second = export_attendance_matrix(Ledger(snapshot), january)
    assert first.content.encode("utf-8") == second.content.encode("utf-8")


def test_matrix_query_filters_names_but_keeps_separators(ledger, january):
    rows = _rows(export_attendance_matrix(ledger, january, "an").content)
    names = [r[0] for r in rows[1:] if not r[0].startswith("---")]
    assert names == ["1. Hannah", "1. Daniel"]
    assert sum(r[0].startswith("---") for r in rows) == 4


def test_nothing_to_export_without_counted_events(ledger):
    july = Interval.for_dates(date(2026, 7, 1), date(2026, 7, 31))
    assert export_attendance_matrix(ledger, july) is None
    assert export_recap_summary(ledger, july) is None


def test_inverted_range_is_rejected_before_export():
    with pytest.raises(InvalidIntervalError):
        Interval.for_dates(date(2026, 1, 31), date(2026, 1, 1))


def test_values_with_delimiter_or_quotes_are_quoted(january):
    users = [make_user("x1", 'Lee, "Jr"', VoicePart.SOPRANO), make_user("x2", "Mary, Ann", VoicePart.ALTO)]
    events = [Event("e1", "R", datetime(2026, 1, 5, 19, 0), "Hall", category=EventCategory.REHEARSAL)]
    export = export_attendance_matrix(Ledger(Snapshot.of(users=users, events=events)), january)

    assert '"1. Lee, ""Jr"""' in export.content
    assert '"1. Mary, Ann"' in export.content
    assert _rows(export.content)[2][0] == '1. Lee, "Jr"'


def test_column_label():
    assert event_column_label(Event("e", "t", datetime(2026, 3, 7, 8, 0), "x")) == "7 Mar"


def test_recap_summary(ledger, january):
    export = export_recap_summary(ledger, january, "so")
    rows = _rows(export.content)

    assert export.filename == "Recap_Summary_2026-01-01_to_2026-01-31.csv"
    assert rows[0] == ["Name", "Voice Part", "Present", "Absent", "Total Events", "Percentage"]
    assert rows[1:] == [
        ["Abigail", "Soprano", "2", "0", "2", "100%"],
        ["Sarah", "Soprano", "1", "1", "2", "50%"],
        ["Hannah", "Soprano", "0", "0", "2", "0%"],
    ]
