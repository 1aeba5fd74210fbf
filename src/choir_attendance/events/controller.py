from __future__ import annotations

from typing import Any

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local
from ..common.validators import optional_text
from ..common.web import current_actor, json_body, login_required, optional_bool
from ..container import Container
from ..core.enums import EventCategory
from ..core.exceptions import ValidationError
from ..ledger.mapping import parse_flag, parse_timestamp
from .model import Event, EventDraft


def event_json(e: Event) -> dict[str, Any]:
    return {
        "id": e.event_id,
        "title": e.title,
        "date": e.date.isoformat(),
        "location": e.location,
        "description": e.description,
        "category": e.category.value,
        "is_important": e.is_important,
    }


def draft_from_json(data: dict) -> EventDraft:
    if data.get("date") in (None, ""):
        raise ValidationError("Date is required, e.g. 2026-01-27T19:00")
    when = parse_timestamp(data.get("date"), field="event date")
    try:
        category = EventCategory(data.get("category") or EventCategory.REHEARSAL)
    except ValueError:
        raise ValidationError(f"Unknown category: {data.get('category')!r}") from None
    return EventDraft(
        title=optional_text(data.get("title"), "Title"),
        date=when,
        location=optional_text(data.get("location"), "Location"),
        description=optional_text(data.get("description"), "Description"),
        category=category,
        is_important=parse_flag(data.get("is_important", False)),
    )


def _month_arg(value):
    if value in (None, "", "all"):
        return None
    try:
        return int(value)
    except ValueError:
        raise ValidationError("Month must be a number between 1 and 12") from None


def register(app: Flask, container: Container) -> None:
    events = container.event_service

    @app.route("/api/events", methods=["GET"], endpoint="list_events")
    @login_required
    def list_events():
        ledger = container.loader.load_ledger()
        actor = current_actor(ledger)
        args = request.args
        result = events.filter_events(
            ledger,
            now_local(),
            upcoming_only=args.get("scope", "upcoming") != "all",
            query=args.get("q", ""),
            month=_month_arg(args.get("month")),
            category=args.get("category") if args.get("category") not in (None, "", "all") else None,
            responded=optional_bool(args.get("responded")),
            user_id=actor.user_id,
        )
        return jsonify([event_json(e) for e in result])

    @app.route("/api/events/upcoming", methods=["GET"], endpoint="upcoming_events")
    @login_required
    def upcoming():
        ledger = container.loader.load_ledger()
        current_actor(ledger)
        return jsonify([event_json(e) for e in events.upcoming_events(ledger, now_local())])

    @app.route("/admin/events", methods=["POST"], endpoint="create_event")
    @login_required
    def create():
        actor = current_actor(container.loader.load_ledger())
        event_id = events.create(actor, draft_from_json(json_body()))
        return jsonify({"success": True, "id": event_id}), 201

    @app.route("/admin/events/<event_id>", methods=["PUT"], endpoint="update_event")
    @login_required
    def update(event_id: str):
        actor = current_actor(container.loader.load_ledger())
        events.update(actor, event_id, draft_from_json(json_body()))
        return jsonify({"success": True})

    @app.route("/admin/events/<event_id>", methods=["DELETE"], endpoint="delete_event")
    @login_required
    def delete(event_id: str):
        events.delete(current_actor(container.loader.load_ledger()), event_id)
        return jsonify({"success": True})

    @app.route("/admin/events/import", methods=["POST"], endpoint="import_schedule")
    @login_required
    def import_schedule():
        actor = current_actor(container.loader.load_ledger())
        upload = request.files.get("file")
        if upload is not None:
            try:
                text = upload.read().decode("utf-8-sig")
            except UnicodeDecodeError:
                raise ValidationError("The schedule file must be UTF-8 encoded") from None
        else:
            text = request.get_data(as_text=True)
        if not text.strip():
            raise ValidationError("The uploaded schedule is empty")

        result = events.import_schedule(actor, text)
        return jsonify(
            {
                "success": True,
                "created": result.created,
                "failed": result.failed,
                "errors": [{"line": e.line, "message": e.message} for e in result.errors],
            }
        )

    @app.route("/admin/events/template.csv", methods=["GET"], endpoint="schedule_template")
    @login_required
    def template():
        return app.response_class(
            events.schedule_template().encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": "attachment; filename=schedule_template.csv"},
        )
