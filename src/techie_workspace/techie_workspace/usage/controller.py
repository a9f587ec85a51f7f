from __future__ import annotations

from flask import Flask, jsonify

from ..common.authorization import ensure_can_access
from ..common.http import current_caller, login_required, query_date
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/users/<int:user_id>/analytics/weekly", methods=["GET"], endpoint="weekly_analytics")
    @login_required
    def weekly_analytics(user_id: int):
        ensure_can_access(current_caller(container.users_repo), user_id, what="analytics")
        reference = query_date() or container.usage_aggregator.now()
        breakdown = container.usage_aggregator.daily_breakdown(user_id, reference)
        return jsonify([d.to_dict() for d in breakdown])
