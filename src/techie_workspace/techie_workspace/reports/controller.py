from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import current_caller, login_required, query_date
from ..container import Container
from ..core.constants import DEFAULT_REPORT_PERIOD


def register(app: Flask, container: Container) -> None:
    def _period() -> str:
        return request.args.get("period") or DEFAULT_REPORT_PERIOD

    @app.route("/api/users/<int:user_id>/reports/attendance", methods=["GET"], endpoint="attendance_report")
    @login_required
    def attendance_report(user_id: int):
        sessions = container.report_service.attendance_report(current_caller(container.users_repo), user_id, _period(), query_date())
        return jsonify([s.to_dict() for s in sessions])

    @app.route("/api/users/<int:user_id>/reports/usage", methods=["GET"], endpoint="usage_report")
    @login_required
    def usage_report(user_id: int):
        report = container.report_service.usage_report(current_caller(container.users_repo), user_id, _period(), query_date())
        return jsonify(report.to_dict())

    @app.route("/api/users/<int:user_id>/reports/billing", methods=["GET"], endpoint="billing_report")
    @login_required
    def billing_report(user_id: int):
        records = container.report_service.billing_report(current_caller(container.users_repo), user_id, _period(), query_date())
        return jsonify([b.to_dict() for b in records])

    @app.route("/api/billings/<int:user_id>/history", methods=["GET"], endpoint="billing_history")
    @login_required
    def billing_history(user_id: int):
        records = container.report_service.billing_history(current_caller(container.users_repo), user_id)
        return jsonify([b.to_dict() for b in records])
