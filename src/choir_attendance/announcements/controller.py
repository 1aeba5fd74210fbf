from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import current_actor, json_body, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    announcements = container.announcement_service

    @app.route("/api/announcements", methods=["GET"], endpoint="list_announcements")
    @login_required
    def list_announcements():
        ledger = container.loader.load_ledger()
        current_actor(ledger)
        return jsonify(
            [
                {
                    "id": a.announcement_id,
                    "title": a.title,
                    "content": a.content,
                    "author": a.author,
                    "timestamp": a.timestamp.isoformat(),
                }
                for a in announcements.list_for_display(ledger)
            ]
        )

    @app.route("/admin/announcements", methods=["POST"], endpoint="create_announcement")
    @login_required
    def create():
        data = json_body()
        actor = current_actor(container.loader.load_ledger())
        announcement_id = announcements.create(actor, title=data.get("title", ""), content=data.get("content", ""))
        return jsonify({"success": True, "id": announcement_id}), 201

    @app.route("/admin/announcements/<announcement_id>", methods=["PUT"], endpoint="update_announcement")
    @login_required
    def update(announcement_id: str):
        data = json_body()
        actor = current_actor(container.loader.load_ledger())
        announcements.update(actor, announcement_id, title=data.get("title", ""), content=data.get("content", ""))
        return jsonify({"success": True})

    @app.route("/admin/announcements/<announcement_id>", methods=["DELETE"], endpoint="delete_announcement")
    @login_required
    def delete(announcement_id: str):
        announcements.delete(current_actor(container.loader.load_ledger()), announcement_id)
        return jsonify({"success": True})
