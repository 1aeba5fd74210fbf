from __future__ import annotations

from ..core.constants import VOICE_PART_ORDER
from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from ..ledger.snapshot import Ledger
from ..users.model import User
from .engine import AbsentMember, EventComposition, event_composition


def _names(users) -> str:
    return ", ".join(u.name for u in users)


def _absentees(members: tuple[AbsentMember, ...]) -> str:
    return ", ".join(f"{m.user.name} ({m.reason})" for m in members)


def _header(composition: EventComposition) -> list[str]:
    event = composition.event
    when = f"{event.date:%A}, {event.date.day} {event.date:%B %Y} @ {event.date:%H:%M}"
    return [
        "*CHOIR SCHEDULE*",
        "--------------------------",
        f"*Event:* {event.title}",
        f"*When:* {when}",
        f"*Location:* {event.location}",
        "",
    ]


def _admin_body(composition: EventComposition) -> list[str]:
    lines = ["*ATTENDANCE (SATB)*", "", f"*PRESENT ({composition.present_count}):*"]
    for vp in VOICE_PART_ORDER:
        bucket = composition.bucket(vp)
        if bucket.present:
            lines.append(f"_{vp.value}_: {_names(bucket.present)}")

    if composition.absent_count:
        lines += ["", f"*ABSENT ({composition.absent_count}):*"]
        for vp in VOICE_PART_ORDER:
            bucket = composition.bucket(vp)
            if bucket.absent:
                lines.append(f"_{vp.value}_: {_absentees(bucket.absent)}")
    return lines


def _coordinator_body(composition: EventComposition, actor: User) -> list[str]:
    bucket = composition.bucket(actor.voice_part)
    lines = [
        f"*ATTENDANCE {actor.voice_part.value.upper()}*",
        "",
        f"*PRESENT ({bucket.present_count}):*",
        _names(bucket.present) if bucket.present else "-",
    ]
    if bucket.absent:
        lines += ["", f"*ABSENT ({bucket.absent_count}):*", _absentees(bucket.absent)]
    if bucket.pending:
        lines += ["", f"*NO RESPONSE YET ({bucket.pending_count}):*", _names(bucket.pending)]
    return lines


def build_share_message(ledger: Ledger, actor: User, event_id: str) -> str:
    """Plain-text attendance summary of one event for a messaging group.

    Admins share every voice part; coordinators share their own part,
    including who has not answered yet.
    """

    if actor.role == Role.ADMIN:
        composition = event_composition(ledger, event_id)
        body = _admin_body(composition)
    elif actor.role == Role.COORDINATOR and actor.voice_part is not None:
        composition = event_composition(ledger, event_id)
        body = _coordinator_body(composition, actor)
    else:
        raise AuthorizationError("Only admins and coordinators can share attendance")

    return "\n".join(_header(composition) + body) + "\n"
