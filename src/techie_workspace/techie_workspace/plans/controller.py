from __future__ import annotations

from flask import Flask, jsonify

from ..common.authorization import ensure_can_access
from ..common.http import current_caller, json_body, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/plans", methods=["GET"], endpoint="list_plans")
    def list_plans():
        return jsonify([t.to_dict() for t in container.plan_service.list_plans()])

    @app.route("/api/users/change-plan", methods=["POST"], endpoint="change_plan")
    @login_required
    def change_plan():
        record = container.plan_service.change_plan(current_caller(container.users_repo).user_id, json_body().get("plan_type"))
        return jsonify({"message": "Plan updated successfully", "billing": record.to_dict()})

    @app.route("/api/users/<int:user_id>/weekly-usage", methods=["GET"], endpoint="weekly_usage")
    @login_required
    def weekly_usage(user_id: int):
        ensure_can_access(current_caller(container.users_repo), user_id, what="usage")
        return jsonify(container.plan_service.weekly_usage(user_id).to_dict())
