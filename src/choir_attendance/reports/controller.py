from __future__ import annotations

from typing import Any

from flask import Flask, jsonify, request

from ..attendance.model import Absent
from ..common.web import csv_response, current_actor, interval_from_args, login_required, require_roles, user_json
from ..container import Container
from ..core.enums import Role
from .engine import (
    EventComposition,
    MemberHistory,
    RecapSummary,
    build_recap,
    event_composition,
    member_history,
    voice_part_counts,
)
from .exporter import export_attendance_matrix, export_recap_summary
from .share import build_share_message


def _composition_json(c: EventComposition) -> dict[str, Any]:
    return {
        "event_id": c.event.event_id,
        "title": c.event.title,
        "present": c.present_count,
        "absent": c.absent_count,
        "pending": c.pending_count,
        "voice_parts": [
            {
                "voice_part": b.voice_part.value,
                "present": [{"id": u.user_id, "name": u.name} for u in b.present],
                "absent": [{"id": m.user.user_id, "name": m.user.name, "reason": m.reason} for m in b.absent],
                "pending": [{"id": u.user_id, "name": u.name} for u in b.pending],
            }
            for b in c.buckets
        ],
    }


def _history_json(h: MemberHistory) -> dict[str, Any]:
    return {
        "user": user_json(h.user),
        "start": h.interval.start_date.isoformat(),
        "end": h.interval.end_date.isoformat(),
        "present": h.stats.present,
        "absent": h.stats.absent,
        "pending": h.stats.pending,
        "total": h.stats.total,
        "percentage": h.stats.percentage,
        "events": [
            {
                "event_id": e.event.event_id,
                "title": e.event.title,
                "date": e.event.date.isoformat(),
                "category": e.event.category.value,
                "status": e.classification.label,
                "reason": e.classification.reason if isinstance(e.classification, Absent) else None,
            }
            for e in h.entries
        ],
    }


def _recap_json(r: RecapSummary) -> dict[str, Any]:
    return {
        "start": r.interval.start_date.isoformat(),
        "end": r.interval.end_date.isoformat(),
        "total_events": r.total_events,
        "average": round(r.average, 1),
        "rows": [
            {
                "id": row.user.user_id,
                "name": row.user.name,
                "voice_part": row.user.voice_part.value if row.user.voice_part else None,
                "present": row.present,
                "absent": row.absent,
                "total": row.total,
                "percentage": row.percentage,
            }
            for row in r.rows
        ],
    }


def register(app: Flask, container: Container) -> None:
    def _nothing_to_export():
        return jsonify({"success": False, "message": "Nothing to export: no rehearsal or service in this range"}), 404

    @app.route("/api/events/<event_id>/composition", methods=["GET"], endpoint="event_composition")
    @login_required
    def composition(event_id: str):
        ledger = container.loader.load_ledger()
        current_actor(ledger)
        return jsonify(_composition_json(event_composition(ledger, event_id)))

    @app.route("/api/events/<event_id>/share", methods=["GET"], endpoint="event_share")
    @login_required
    def share(event_id: str):
        ledger = container.loader.load_ledger()
        message = build_share_message(ledger, current_actor(ledger), event_id)
        return jsonify({"message": message})

    @app.route("/api/me/attendance", methods=["GET"], endpoint="my_attendance")
    @login_required
    def my_attendance():
        ledger = container.loader.load_ledger()
        actor = current_actor(ledger)
        interval = interval_from_args(request.args, default="month_to_date")
        return jsonify(_history_json(member_history(ledger, actor.user_id, interval)))

    @app.route("/api/members/<user_id>/attendance", methods=["GET"], endpoint="member_attendance")
    @login_required
    def member_attendance(user_id: str):
        ledger = container.loader.load_ledger()
        require_roles(current_actor(ledger), Role.ADMIN, Role.COORDINATOR)
        interval = interval_from_args(request.args)
        return jsonify(_history_json(member_history(ledger, user_id, interval)))

    @app.route("/api/members/counts", methods=["GET"], endpoint="voice_part_counts")
    @login_required
    def counts():
        ledger = container.loader.load_ledger()
        current_actor(ledger)
        result = voice_part_counts(ledger)
        return jsonify({"total": result.total, **{vp.value: n for vp, n in result.counts.items()}})

    @app.route("/api/recap", methods=["GET"], endpoint="recap")
    @login_required
    def recap():
        ledger = container.loader.load_ledger()
        require_roles(current_actor(ledger), Role.ADMIN, Role.COORDINATOR)
        interval = interval_from_args(request.args)
        return jsonify(_recap_json(build_recap(ledger, interval, request.args.get("q", ""))))

    @app.route("/admin/recap.csv", methods=["GET"], endpoint="recap_csv")
    @login_required
    def recap_csv():
        ledger = container.loader.load_ledger()
        require_roles(current_actor(ledger), Role.ADMIN, Role.COORDINATOR)
        interval = interval_from_args(request.args)
        export = export_attendance_matrix(ledger, interval, request.args.get("q", ""))
        if export is None:
            return _nothing_to_export()
        return csv_response(app, export)

    @app.route("/admin/recap-summary.csv", methods=["GET"], endpoint="recap_summary_csv")
    @login_required
    def recap_summary_csv():
        ledger = container.loader.load_ledger()
        require_roles(current_actor(ledger), Role.ADMIN, Role.COORDINATOR)
        interval = interval_from_args(request.args)
        export = export_recap_summary(ledger, interval, request.args.get("q", ""))
        if export is None:
            return _nothing_to_export()
        return csv_response(app, export)
