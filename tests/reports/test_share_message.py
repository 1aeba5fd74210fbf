from __future__ import annotations

import pytest

from choir_attendance.core.exceptions import AuthorizationError, NotFoundError
from choir_attendance.reports.share import build_share_message


def test_admin_shares_every_voice_part(ledger):
    message = build_share_message(ledger, ledger.user_by_id("admin"), "e1")
    lines = message.splitlines()

    assert "*Event:* Weekly Rehearsal" in lines
    assert "*When:* Tuesday, 27 January 2026 @ 19:00" in lines
    assert "*PRESENT (3):*" in lines
    assert "_Soprano_: Abigail" in lines
    assert "_Tenor_: Tom, Daniel" in lines
    assert "*ABSENT (1):*" in lines
    assert "_Soprano_: Sarah (sick)" in lines
    assert not any("NO RESPONSE" in line for line in lines)


def test_admin_message_skips_absent_section_when_nobody_is_absent(ledger):
    message = build_share_message(ledger, ledger.user_by_id("admin"), "e4")
    assert "*PRESENT (0):*" in message
    assert "ABSENT" not in message


def test_coordinator_shares_own_part_with_pending(ledger):
    message = build_share_message(ledger, ledger.user_by_id("coord"), "e2")
    lines = message.splitlines()

    assert "*ATTENDANCE TENOR*" in lines
    assert lines[lines.index("*PRESENT (1):*") + 1] == "Tom"
    assert lines[lines.index("*NO RESPONSE YET (1):*") + 1] == "Daniel"
    assert "Abigail" not in message


def test_coordinator_with_nobody_present_gets_dash(ledger):
    message = build_share_message(ledger, ledger.user_by_id("coord"), "e4")
    lines = message.splitlines()
    assert lines[lines.index("*PRESENT (0):*") + 1] == "-"


def test_members_cannot_share(ledger):
    with pytest.raises(AuthorizationError):
        build_share_message(ledger, ledger.user_by_id("s1"), "e1")


def test_unknown_event(ledger):
    with pytest.raises(NotFoundError):
        build_share_message(ledger, ledger.user_by_id("admin"), "nope")
