from __future__ import annotations

from flask import Flask, g, jsonify

from ..common.http import json_api, json_body
from ..container import Container
from ..core.enums import Role
from ..sessions.guard import RequestGuard


def register(app: Flask, container: Container) -> None:
    guard = RequestGuard(container.session_guard)

    @app.route("/api/users", methods=["GET"], endpoint="list_users")
    @guard.token_required
    @guard.roles_required(Role.ADMIN)
    @json_api
    def list_users():
        users = container.user_service.list_users(current_role=g.user.role)
        return jsonify([u.public_view() for u in users])

    @app.route("/api/users/<int:user_id>/tasks", methods=["PATCH"], endpoint="update_user_tasks")
    @guard.token_required
    @guard.roles_required(Role.ADMIN)
    @json_api
    def update_tasks(user_id: int):
        data = json_body()
        account = container.user_service.update_tasks(
            current_role=g.user.role,
            actor=g.user.username,
            user_id=user_id,
            tasks=data.get("tasks"),
        )
        return jsonify(account.public_view())

    @app.route("/api/admin/users", methods=["POST"], endpoint="admin_create_user")
    @guard.token_required
    @guard.roles_required(Role.ADMIN)
    @json_api
    def create_user():
        data = json_body()
        account = container.user_service.create_account(
            current_role=g.user.role,
            actor=g.user.username,
            username=str(data.get("username") or ""),
            password=str(data.get("password") or ""),
            user_code=str(data.get("user_code") or ""),
            role=str(data.get("role") or ""),
        )
        return jsonify(account.public_view()), 201

    @app.route("/api/public/preparers", methods=["GET"], endpoint="list_preparers")
    @guard.token_required
    @json_api
    def list_preparers():
        return jsonify(container.user_service.list_preparers())
