from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import current_actor, json_body, login_required, require_roles, user_json
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    members = container.membership_service

    @app.route("/api/register", methods=["POST"], endpoint="register_member")
    def register_member():
        data = json_body()
        user_id = members.register(
            name=data.get("name", ""),
            email=data.get("email", ""),
            password=data.get("password", ""),
            voice_part=data.get("voice_part", ""),
            phone=data.get("phone", ""),
        )
        return jsonify({"success": True, "id": user_id, "message": "Registration received, waiting for approval"}), 201

    @app.route("/admin/members", methods=["GET"], endpoint="search_members")
    @login_required
    def search():
        ledger = container.loader.load_ledger()
        require_roles(current_actor(ledger), Role.ADMIN, Role.COORDINATOR)
        return jsonify([user_json(u) for u in members.search_members(ledger, request.args.get("q", ""))])

    @app.route("/admin/members/pending", methods=["GET"], endpoint="pending_members")
    @login_required
    def pending():
        ledger = container.loader.load_ledger()
        require_roles(current_actor(ledger), Role.ADMIN)
        return jsonify([user_json(u) for u in members.pending_members(ledger)])

    @app.route("/admin/members", methods=["POST"], endpoint="create_member")
    @login_required
    def create():
        data = json_body()
        actor = current_actor(container.loader.load_ledger())
        user_id = members.create_member(
            actor,
            name=data.get("name", ""),
            email=data.get("email", ""),
            voice_part=data.get("voice_part", ""),
            phone=data.get("phone", ""),
            role=data.get("role") or Role.MEMBER,
            password=data.get("password"),
        )
        return jsonify({"success": True, "id": user_id}), 201

    @app.route("/admin/members/<user_id>", methods=["PUT"], endpoint="update_member")
    @login_required
    def update(user_id: str):
        data = json_body()
        actor = current_actor(container.loader.load_ledger())
        members.update(
            actor,
            user_id,
            name=data.get("name", ""),
            email=data.get("email", ""),
            voice_part=data.get("voice_part", ""),
            role=data.get("role") or Role.MEMBER,
            phone=data.get("phone", ""),
            status=data.get("status"),
        )
        return jsonify({"success": True})

    @app.route("/admin/members/<user_id>/approve", methods=["POST"], endpoint="approve_member")
    @login_required
    def approve(user_id: str):
        members.approve(current_actor(container.loader.load_ledger()), user_id)
        return jsonify({"success": True})

    @app.route("/admin/members/<user_id>/reject", methods=["POST"], endpoint="reject_member")
    @login_required
    def reject(user_id: str):
        members.reject(current_actor(container.loader.load_ledger()), user_id)
        return jsonify({"success": True})

    @app.route("/admin/members/<user_id>", methods=["DELETE"], endpoint="delete_member")
    @login_required
    def delete(user_id: str):
        members.delete(current_actor(container.loader.load_ledger()), user_id)
        return jsonify({"success": True})

    @app.route("/admin/members/<user_id>/reset-password", methods=["POST"], endpoint="reset_password")
    @login_required
    def reset_password(user_id: str):
        password = members.reset_password(current_actor(container.loader.load_ledger()), user_id)
        return jsonify({"success": True, "password": password})
