"""CSV exports of the attendance recap.

Both exports return ``None`` when the interval holds no rehearsal or service,
so the caller can report "nothing to export" instead of sending a header-only
file. Content is a ``str``; encoding happens at the HTTP boundary.
"""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from typing import Optional

from ..attendance.model import Absent, Present
from ..core.constants import ABSENT_MARK, CSV_MIMETYPE, MONTH_ABBR, PENDING_MARK, PRESENT_MARK, VOICE_PART_ORDER
from ..events.model import Event
from ..ledger.snapshot import Ledger
from .engine import attendance_stats, build_recap, classify, counted_events
from .interval import Interval


@dataclass(frozen=True)
class ExportFile:
    filename: str
    content: str
    mimetype: str = CSV_MIMETYPE


def event_column_label(event: Event) -> str:
    return f"{event.date.day} {MONTH_ABBR[event.date.month - 1]}"


def _marker(ledger: Ledger, user_id: str, event_id: str) -> str:
    state = classify(ledger, user_id, event_id)
    if isinstance(state, Present):
        return PRESENT_MARK
    if isinstance(state, Absent):
        return ABSENT_MARK
    return PENDING_MARK


def _writer(out: io.StringIO):
    return csv.writer(out, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)


def _range_suffix(interval: Interval) -> str:
    return f"{interval.start_date:%Y-%m-%d}_to_{interval.end_date:%Y-%m-%d}"


def export_attendance_matrix(ledger: Ledger, interval: Interval, query: str = "") -> Optional[ExportFile]:
    """One column per counted event, one row per active member grouped by voice part."""

    events = counted_events(ledger.events, interval)
    if not events:
        return None

    needle = (query or "").strip().lower()
    width = len(events) + 2

    out = io.StringIO()
    writer = _writer(out)
    writer.writerow(["Name", *(event_column_label(e) for e in events), "Percentage"])

    for voice_part in VOICE_PART_ORDER:
        writer.writerow([f"--- {voice_part.value.upper()} ---"] + [""] * (width - 1))

        members = [
            u
            for u in ledger.active_users()
            if u.voice_part == voice_part and needle in u.name.lower()
        ]
        members.sort(key=lambda u: (u.name.lower(), u.user_id))

        for index, user in enumerate(members, start=1):
            stats = attendance_stats(ledger, user.user_id, interval)
            writer.writerow(
                [
                    f"{index}. {user.name}",
                    *(_marker(ledger, user.user_id, e.event_id) for e in events),
                    f"{stats.percentage}%",
                ]
            )

    return ExportFile(filename=f"Recap_{_range_suffix(interval)}.csv", content=out.getvalue())


def export_recap_summary(ledger: Ledger, interval: Interval, query: str = "") -> Optional[ExportFile]:
    """The recap table as shown on screen: one row per member, best attendance first."""

    recap = build_recap(ledger, interval, query)
    if recap.total_events == 0:
        return None

    out = io.StringIO()
    writer = _writer(out)
    writer.writerow(["Name", "Voice Part", "Present", "Absent", "Total Events", "Percentage"])
    for row in recap.rows:
        writer.writerow(
            [
                row.user.name,
                row.user.voice_part.value if row.user.voice_part else "",
                row.present,
                row.absent,
                row.total,
                f"{row.percentage}%",
            ]
        )

    return ExportFile(filename=f"Recap_Summary_{_range_suffix(interval)}.csv", content=out.getvalue())
