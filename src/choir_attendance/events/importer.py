"""Schedule CSV import.

Expected columns, header row first::

    Title,Date(YYYY-MM-DD),Time(HH:MM),Location,Description,Category,Important

Description, Category and Important may be left out. Quoted cells may contain
commas.
"""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from datetime import datetime

from ..core.enums import EventCategory
from ..core.exceptions import ValidationError
from .model import EventDraft

TEMPLATE_HEADER = ["Title", "Date(YYYY-MM-DD)", "Time(HH:MM)", "Location", "Description", "Category", "Important"]
TEMPLATE_EXAMPLE = ["Weekly Rehearsal", "2025-10-25", "19:30", "St. Mary Hall, Room 2", "Sunday preparation", "Rehearsal", "yes"]

_DATE_FORMATS = ("%Y-%m-%d %H:%M", "%m/%d/%Y %H:%M", "%d-%m-%Y %H:%M")
_TRUE_WORDS = {"yes", "true", "y", "1", "ya"}


@dataclass(frozen=True)
class RowError:
    line: int
    message: str


@dataclass(frozen=True)
class ParsedSchedule:
    drafts: tuple[tuple[int, EventDraft], ...]
    errors: tuple[RowError, ...]


def schedule_template() -> str:
    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(TEMPLATE_HEADER)
    writer.writerow(TEMPLATE_EXAMPLE)
    return out.getvalue()


def parse_category(value: str) -> EventCategory:
    text = (value or "").strip().lower()
    if "service" in text or "pelayanan" in text:
        return EventCategory.SERVICE
    if "other" in text or "lainnya" in text:
        return EventCategory.OTHER
    return EventCategory.REHEARSAL


def parse_important(value: str) -> bool:
    # A missing cell counts as important.
    text = (value or "").strip().lower()
    return not text or text in _TRUE_WORDS


def parse_event_datetime(day: str, clock: str) -> datetime:
    combined = f"{day.strip()} {clock.strip()}"
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(combined, fmt)
        except ValueError:
            continue
    raise ValidationError(f"Invalid date or time: {combined!r}")


def _cell(cols: list[str], index: int) -> str:
    return cols[index].strip() if index < len(cols) else ""


def parse_schedule_csv(text: str) -> ParsedSchedule:
    drafts: list[tuple[int, EventDraft]] = []
    errors: list[RowError] = []

    reader = csv.reader(io.StringIO(text.lstrip("\ufeff")))
    next(reader, None)  # header

    for cols in reader:
        line = reader.line_num
        if not any(c.strip() for c in cols):
            continue
        if len(cols) < 4:
            errors.append(RowError(line, "Expected at least 4 columns"))
            continue

        title, day, clock, location = (_cell(cols, i) for i in range(4))
        if not (title and day and clock and location):
            errors.append(RowError(line, "Title, date, time and location are required"))
            continue

        try:
            when = parse_event_datetime(day, clock)
        except ValidationError as e:
            errors.append(RowError(line, str(e)))
            continue

        drafts.append(
            (
                line,
                EventDraft(
                    title=title,
                    date=when,
                    location=location,
                    description=_cell(cols, 4),
                    category=parse_category(_cell(cols, 5)),
                    is_important=parse_important(_cell(cols, 6)),
                ),
            )
        )

    return ParsedSchedule(drafts=tuple(drafts), errors=tuple(errors))
