from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import current_caller, json_body, login_required
from ..container import Container
from ..core.exceptions import ValidationError
from .service import CHECKED_IN


def register(app: Flask, container: Container) -> None:
    @app.route("/api/qrcode/generate", methods=["POST"], endpoint="generate_qr")
    @login_required
    def generate_qr():
        issued = container.qr_service.generate(current_caller(container.users_repo).user_id)
        return jsonify(issued.to_dict())

    @app.route("/api/qrcode/current", methods=["GET"], endpoint="current_qr")
    @login_required
    def current_qr():
        return jsonify(container.qr_service.current(current_caller(container.users_repo).user_id).to_dict())

    @app.route("/api/check-ins/scan", methods=["POST"], endpoint="scan_qr")
    @login_required
    def scan_qr():
        raw = json_body().get("payload")
        if not raw:
            raise ValidationError("QR payload is required")
        result = container.qr_service.scan(raw, current_caller(container.users_repo))
        return jsonify(result.to_dict()), 201 if result.action == CHECKED_IN else 200
