from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_api
from ..container import Container
from ..sessions.guard import RequestGuard


def register(app: Flask, container: Container) -> None:
    guard = RequestGuard(container.session_guard)

    @app.route("/api/products/<barcode>", methods=["GET"], endpoint="get_product")
    @guard.token_required
    @json_api
    def get_product(barcode: str):
        return jsonify(container.product_catalog.lookup(barcode).to_dict())
