"""Helpers shared by the Flask controllers."""

from __future__ import annotations

from functools import wraps
from typing import Any, Mapping, Optional

from flask import Flask, jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..ledger.snapshot import Ledger
from ..reports.exporter import ExportFile
from ..reports.interval import Interval
from ..users.model import User
from .datetime_utils import now_local, parse_iso_date


def login_required(view):
    # Sign-in itself happens elsewhere; it leaves the user id in the session.
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "message": "Please sign in to continue"}), 401
        return view(*args, **kwargs)

    return wrapper


def current_actor(ledger: Ledger) -> User:
    actor = ledger.user_by_id(str(session["user_id"]))
    if actor is None:
        raise AuthorizationError("Signed-in user no longer exists")
    return actor


def require_roles(actor: User, *roles: Role) -> None:
    if actor.role not in roles:
        raise AuthorizationError("You do not have access to this page")


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _date_arg(args: Mapping[str, str], key: str):
    value = (args.get(key) or "").strip()
    if not value:
        return None
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"'{key}' must be a date in YYYY-MM-DD format") from None


def interval_from_args(args: Mapping[str, str], *, default: str = "full_month", now=None) -> Interval:
    """``start``/``end`` query arguments, both or neither.

    Without them the current month is used, either up to now
    (``default="month_to_date"``) or complete.
    """

    start = _date_arg(args, "start")
    end = _date_arg(args, "end")
    if start and end:
        return Interval.for_dates(start, end)
    if start or end:
        raise ValidationError("Both 'start' and 'end' are required")

    now = now or now_local()
    if default == "month_to_date":
        return Interval.month_to_date(now)
    return Interval.full_month(now)


def csv_response(app: Flask, export: ExportFile):
    # Excel needs the BOM to detect UTF-8.
    return app.response_class(
        export.content.encode("utf-8-sig"),
        mimetype=export.mimetype,
        headers={"Content-Disposition": f"attachment; filename={export.filename}"},
    )


def user_json(user: User) -> dict[str, Any]:
    return {
        "id": user.user_id,
        "name": user.name,
        "email": user.email,
        "role": user.role.value,
        "voice_part": user.voice_part.value if user.voice_part else None,
        "status": user.status.value,
        "phone": user.phone,
    }


def optional_bool(value: Optional[str]) -> Optional[bool]:
    if value is None or value.strip().lower() in ("", "all"):
        return None
    text = value.strip().lower()
    if text in ("1", "true", "yes", "voted"):
        return True
    if text in ("0", "false", "no", "not_voted"):
        return False
    raise ValidationError(f"Invalid flag: {value!r}")
