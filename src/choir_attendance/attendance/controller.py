from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import current_actor, json_body, login_required, user_json
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/events/<event_id>/attendance", methods=["POST"], endpoint="submit_attendance")
    @login_required
    def submit(event_id: str):
        data = json_body()
        actor = current_actor(container.loader.load_ledger())
        container.attendance_service.submit(actor, event_id, data.get("status", ""), data.get("reason"))
        return jsonify({"success": True, "message": "Attendance saved"})

    @app.route("/api/events/<event_id>/attendance/<user_id>", methods=["PUT"], endpoint="override_attendance")
    @login_required
    def override(event_id: str, user_id: str):
        data = json_body()
        actor = current_actor(container.loader.load_ledger())
        container.attendance_service.submit_for(actor, user_id, event_id, data.get("status", ""), data.get("reason"))
        return jsonify({"success": True, "message": "Attendance saved"})

    @app.route("/api/events/<event_id>/attendance/<user_id>", methods=["DELETE"], endpoint="remove_attendance")
    @login_required
    def remove(event_id: str, user_id: str):
        actor = current_actor(container.loader.load_ledger())
        removed = container.attendance_service.remove(actor, user_id, event_id)
        return jsonify({"success": True, "removed": removed})

    @app.route("/api/events/<event_id>/unrecorded", methods=["GET"], endpoint="unrecorded_members")
    @login_required
    def unrecorded(event_id: str):
        ledger = container.loader.load_ledger()
        members = container.attendance_service.unrecorded_members(
            ledger, current_actor(ledger), event_id, request.args.get("q", "")
        )
        return jsonify([user_json(u) for u in members])
