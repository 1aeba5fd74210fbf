from __future__ import annotations

from datetime import datetime

from choir_attendance.core.enums import EventCategory
from choir_attendance.events.importer import (
    TEMPLATE_HEADER,
    parse_category,
    parse_important,
    parse_schedule_csv,
    schedule_template,
)

CSV_TEXT = (
    "\ufeffTitle,Date(YYYY-MM-DD),Time(HH:MM),Location,Description,Category,Important\n"
    'Weekly Rehearsal,2026-02-03,19:30,"St. Mary Hall, Room 2",Warm up,Rehearsal,no\n'
    "\n"
    "Easter Mass,2026-04-05,07:00,Cathedral,,Service Sunday,yes\n"
    "Picnic,3/30/2026,10:00,Park\n"
    "Broken row,2026-02-10\n"
    "Bad date,2026-13-45,19:00,Hall\n"
    ",2026-02-10,19:00,Hall\n"
)


def test_valid_rows_become_drafts():
    parsed = parse_schedule_csv(CSV_TEXT)
    drafts = [d for _, d in parsed.drafts]

    assert [d.title for d in drafts] == ["Weekly Rehearsal", "Easter Mass", "Picnic"]
    rehearsal, mass, picnic = drafts
    assert rehearsal.location == "St. Mary Hall, Room 2"
    assert rehearsal.date == datetime(2026, 2, 3, 19, 30)
    assert rehearsal.is_important is False
    assert mass.category == EventCategory.SERVICE
    assert mass.description == ""
    assert picnic.date == datetime(2026, 3, 30, 10, 0)
    assert picnic.category == EventCategory.REHEARSAL
    assert picnic.is_important is True


def test_invalid_rows_are_reported_with_line_numbers():
    parsed = parse_schedule_csv(CSV_TEXT)
    assert [e.line for e in parsed.errors] == [6, 7, 8]


def test_category_and_flag_words():
    assert parse_category("Other / social") == EventCategory.OTHER
    assert parse_category("Pelayanan") == EventCategory.SERVICE
    assert parse_category("") == EventCategory.REHEARSAL
    assert parse_important("TRUE") is True
    assert parse_important("No") is False


def test_template_round_trips_through_the_parser():
    text = schedule_template()
    assert text.splitlines()[0] == ",".join(TEMPLATE_HEADER)
    parsed = parse_schedule_csv(text)
    assert len(parsed.drafts) == 1
    assert parsed.errors == ()
