from __future__ import annotations

from datetime import date, datetime

import pytest

from choir_attendance.attendance.model import Absent, Pending, Present
from choir_attendance.core.constants import NO_REASON_PLACEHOLDER
from choir_attendance.core.enums import AttendanceStatus, VoicePart
from choir_attendance.core.exceptions import NotFoundError
from choir_attendance.ledger.snapshot import Ledger, Snapshot
from choir_attendance.reports.engine import (
    attendance_percentage,
    attendance_stats,
    average_percentage,
    build_recap,
    classify,
    counted_events,
    event_composition,
    member_history,
    round_half_up_percentage,
    voice_part_counts,
)
from choir_attendance.reports.interval import Interval

from fakes import make_record


def _with_records(snapshot: Snapshot, records) -> Ledger:
    return Ledger(Snapshot.of(users=snapshot.users, events=snapshot.events, attendance=records))


@pytest.mark.parametrize(
    "present,total,expected",
    [(0, 0, 0), (1, 2, 50), (1, 3, 33), (2, 3, 67), (1, 8, 13), (3, 8, 38), (5, 5, 100)],
)
def test_round_half_up(present, total, expected):
    assert round_half_up_percentage(present, total) == expected


def test_counted_events_skip_other_and_out_of_range(ledger, january):
    assert [e.event_id for e in counted_events(ledger.events, january)] == ["e2", "e1"]


def test_classify_three_states(ledger):
    assert classify(ledger, "s2", "e1") == Present()
    assert classify(ledger, "s1", "e1") == Absent(reason="sick")
    assert classify(ledger, "s3", "e1") == Pending()


def test_missing_reason_gets_placeholder(ledger):
    assert classify(ledger, "a1", "e2") == Absent(reason=NO_REASON_PLACEHOLDER)


def test_orphan_records_are_ignored(ledger):
    assert classify(ledger, "ghost", "e1") == Pending()
    assert classify(ledger, "s1", "gone") == Pending()


def test_composition_partitions_active_users(ledger):
    composition = event_composition(ledger, "e1")
    active = {u.user_id for u in ledger.active_users()}

    seen = []
    for bucket in composition.buckets:
        seen += [u.user_id for u in bucket.present]
        seen += [m.user.user_id for m in bucket.absent]
        seen += [u.user_id for u in bucket.pending]
    assert sorted(seen) == sorted(active)
    assert len(seen) == len(set(seen))


def test_composition_counts_per_voice_part(ledger):
    composition = event_composition(ledger, "e1")

    soprano = composition.bucket(VoicePart.SOPRANO)
    assert [u.user_id for u in soprano.present] == ["s2"]
    assert [(m.user.user_id, m.reason) for m in soprano.absent] == [("s1", "sick")]
    assert [u.user_id for u in soprano.pending] == ["s3"]

    tenor = composition.bucket(VoicePart.TENOR)
    assert [u.user_id for u in tenor.present] == ["coord", "t1"]

    assert (composition.present_count, composition.absent_count, composition.pending_count) == (3, 1, 4)
    assert [b.voice_part for b in composition.buckets] == [
        VoicePart.SOPRANO,
        VoicePart.ALTO,
        VoicePart.TENOR,
        VoicePart.BASS,
    ]


def test_composition_unknown_event(ledger):
    with pytest.raises(NotFoundError):
        event_composition(ledger, "nope")


def test_half_present_member_scores_fifty(ledger, january):
    stats = attendance_stats(ledger, "s1", january)
    assert (stats.present, stats.absent, stats.pending, stats.total) == (1, 1, 0, 2)
    assert stats.percentage == 50


def test_member_without_records_scores_zero(ledger, january):
    stats = attendance_stats(ledger, "s3", january)
    assert stats.pending == 2
    assert stats.percentage == 0


def test_other_category_never_counts(ledger, january):
    # Present at the dinner only.
    assert attendance_percentage(ledger, "admin", january) == 0


def test_empty_interval_gives_zero_everywhere(ledger):
    july = Interval.for_dates(date(2026, 7, 1), date(2026, 7, 31))
    assert all(attendance_percentage(ledger, u.user_id, july) == 0 for u in ledger.active_users())
    assert average_percentage(ledger, july) == 0.0
    assert build_recap(ledger, july).total_events == 0


def test_percentage_is_idempotent(ledger, january):
    assert attendance_percentage(ledger, "t1", january) == attendance_percentage(ledger, "t1", january)


def test_one_more_present_never_lowers_percentage(snapshot, january):
    before = Ledger(snapshot)
    extra = make_record("t1", "e2", AttendanceStatus.PRESENT)
    after = _with_records(snapshot, list(snapshot.attendance) + [extra])

    assert attendance_percentage(after, "t1", january) >= attendance_percentage(before, "t1", january)
    assert attendance_percentage(after, "t1", january) == 100


def test_removed_record_reverts_to_pending(snapshot):
    remaining = [r for r in snapshot.attendance if r.key != ("s2", "e1")]
    ledger = _with_records(snapshot, remaining)
    assert classify(ledger, "s2", "e1") == Pending()


def test_average_is_mean_of_percentages(ledger, january):
    # 0 + 100 + 50 + 100 + 0 + 0 + 50 + 0 over eight active members
    assert average_percentage(ledger, january) == pytest.approx(37.5)


def test_average_over_given_users(ledger, january):
    users = [ledger.user_by_id("s1"), ledger.user_by_id("s2")]
    assert average_percentage(ledger, january, users) == pytest.approx(75.0)
    assert average_percentage(ledger, january, []) == 0.0


def test_month_views_share_the_same_rules(ledger):
    now = datetime(2026, 1, 26, 12, 0)
    so_far = attendance_stats(ledger, "s2", Interval.month_to_date(now))
    complete = attendance_stats(ledger, "s2", Interval.full_month(now))

    # e1 (27 Jan) is still ahead on the 26th.
    assert (so_far.total, so_far.percentage) == (1, 100)
    assert (complete.total, complete.percentage) == (2, 100)


def test_member_history_lists_each_counted_event(ledger, january):
    history = member_history(ledger, "s1", january)
    assert [(h.event.event_id, h.classification.label) for h in history.entries] == [
        ("e2", "present"),
        ("e1", "absent"),
    ]
    assert history.stats.percentage == 50


def test_member_history_unknown_user(ledger, january):
    with pytest.raises(NotFoundError):
        member_history(ledger, "nobody", january)


def test_recap_sorted_by_percentage_then_name(ledger, january):
    recap = build_recap(ledger, january)
    assert [(r.user.name, r.percentage) for r in recap.rows] == [
        ("Abigail", 100),
        ("Tom", 100),
        ("Daniel", 50),
        ("Sarah", 50),
        ("Grace", 0),
        ("Hannah", 0),
        ("Peter", 0),
        ("Ruth", 0),
    ]
    assert recap.total_events == 2
    assert recap.average == pytest.approx(37.5)


def test_recap_search_on_name_or_voice_part(ledger, january):
    assert [r.user.user_id for r in build_recap(ledger, january, "TENOR").rows] == ["coord", "t1"]
    assert [r.user.user_id for r in build_recap(ledger, january, "sar").rows] == ["s1"]


def test_voice_part_counts_only_active(ledger):
    counts = voice_part_counts(ledger)
    assert counts.counts == {VoicePart.SOPRANO: 3, VoicePart.ALTO: 2, VoicePart.TENOR: 2, VoicePart.BASS: 1}
    assert counts.total == 8
