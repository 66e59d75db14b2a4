from __future__ import annotations

import hmac

from flask import Flask, g, jsonify, request

from ..common.http import json_api, json_body, json_error
from ..container import Container
from ..sessions.guard import RequestGuard


def register(app: Flask, container: Container) -> None:
    guard = RequestGuard(container.session_guard)

    @app.route("/api/pre-remitos", methods=["GET"], endpoint="list_pre_remitos")
    @guard.token_required
    @json_api
    def list_pre_remitos():
        return jsonify([p.summary() for p in container.order_service.list_pending()])

    @app.route("/api/pre-remitos/<order_number>", methods=["GET"], endpoint="get_pre_remito")
    @guard.token_required
    @json_api
    def get_pre_remito(order_number: str):
        return jsonify(container.order_service.get(order_number).to_dict())

    @app.route("/api/pre-remitos/<order_number>/draft", methods=["PATCH"], endpoint="save_pre_remito_draft")
    @guard.token_required
    @json_api
    def save_draft(order_number: str):
        data = json_body()
        pre = container.order_service.save_draft(
            order_number=order_number,
            scanned_items=data.get("scannedItems"),
            username=g.user.username,
        )
        return jsonify({"message": "Draft saved successfully", "data": pre.to_dict()})

    @app.route("/api/erp/pre-remito", methods=["POST"], endpoint="erp_receive_pre_remito")
    @json_api
    def erp_receive_pre_remito():
        expected_token = app.config.get("ERP_WEBHOOK_TOKEN")
        if expected_token:
            given = request.headers.get("X-Webhook-Token", "")
            if not hmac.compare_digest(given.encode(), str(expected_token).encode()):
                return json_error("Invalid webhook token", 401)

        data = json_body()
        pre_remito_id = container.order_service.receive_from_erp(
            header=data.get("header"),
            details=data.get("details"),
        )
        return jsonify({"message": "Pre-Remito received successfully", "id": pre_remito_id})
