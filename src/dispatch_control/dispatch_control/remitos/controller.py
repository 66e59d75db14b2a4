from __future__ import annotations

from flask import Flask, g, jsonify

from ..common.http import json_api, json_body
from ..container import Container
from ..sessions.guard import RequestGuard


def register(app: Flask, container: Container) -> None:
    guard = RequestGuard(container.session_guard)

    @app.route("/api/remitos", methods=["POST"], endpoint="create_remito")
    @guard.token_required
    @json_api
    def create_remito():
        data = json_body()
        remito = container.remito_service.submit(
            order_number=str(data.get("remitoNumber") or data.get("orderNumber") or ""),
            scanned_items=data.get("scannedItems", data.get("items")),
            username=g.user.username,
            clarification=data.get("clarification"),
            missing_reasons=data.get("missingReasons"),
            prepared_by=data.get("preparedBy"),
        )
        return jsonify(remito.to_dict()), 201

    @app.route("/api/remitos/preview", methods=["POST"], endpoint="preview_remito")
    @guard.token_required
    @json_api
    def preview_remito():
        data = json_body()
        report = container.remito_service.preview(
            order_number=str(data.get("remitoNumber") or data.get("orderNumber") or ""),
            scanned_items=data.get("scannedItems", data.get("items")),
        )
        return jsonify(report.to_dict() | {"has_discrepancies": report.has_discrepancies})

    @app.route("/api/remitos", methods=["GET"], endpoint="list_remitos")
    @guard.token_required
    @json_api
    def list_remitos():
        return jsonify([r.to_dict() for r in container.remito_service.list_remitos()])

    @app.route("/api/remitos/<int:remito_id>", methods=["GET"], endpoint="get_remito")
    @guard.token_required
    @json_api
    def get_remito(remito_id: int):
        return jsonify(container.remito_service.get(remito_id).to_dict())

    @app.route("/api/remitos/<int:remito_id>", methods=["PATCH"], endpoint="update_remito")
    @guard.token_required
    @json_api
    def update_remito(remito_id: int):
        data = json_body()
        remito = container.remito_service.update(
            remito_id=remito_id,
            username=g.user.username,
            total_packages=data.get("total_packages"),
            status=data.get("status"),
        )
        return jsonify(remito.to_dict())
