from __future__ import annotations

from flask import Flask, g, jsonify

from ..common.http import json_api, json_body
from ..container import Container
from ..core.exceptions import NotFoundError, ValidationError
from .guard import RequestGuard


def register(app: Flask, container: Container) -> None:
    guard = RequestGuard(container.session_guard)

    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    @json_api
    def login():
        data = json_body()
        force = data.get("force")
        if force is not None and not isinstance(force, bool):
            raise ValidationError("force must be a boolean")
        result = container.session_guard.login(
            str(data.get("username") or ""),
            str(data.get("password") or ""),
            force=bool(force),
        )
        return jsonify(result.to_dict())

    @app.route("/api/auth/register", methods=["POST"], endpoint="auth_register")
    @json_api
    def register_account():
        data = json_body()
        result = container.session_guard.register(
            str(data.get("username") or ""),
            str(data.get("password") or ""),
        )
        return jsonify(result.to_dict()), 201

    @app.route("/api/auth/logout", methods=["POST"], endpoint="auth_logout")
    @guard.token_required
    @json_api
    def logout():
        container.session_guard.logout(g.user.user_id, username=g.user.username)
        return jsonify({"message": "Logged out successfully"})

    @app.route("/api/auth/user", methods=["GET"], endpoint="auth_user")
    @guard.token_required
    @json_api
    def current_user():
        account = container.users_repo.get_by_id(g.user.user_id)
        if not account:
            raise NotFoundError("Account not found")
        return jsonify(account.public_view())
