from __future__ import annotations

from flask import Flask, current_app, jsonify

from ..common.authorization import ensure_can_access
from ..common.http import current_caller, login_required
from ..container import Container
from ..core.constants import DEFAULT_RECENT_LIMIT


def register(app: Flask, container: Container) -> None:
    @app.route("/api/check-ins", methods=["POST"], endpoint="check_in")
    @login_required
    def check_in():
        checked_in = container.session_ledger.check_in(current_caller(container.users_repo).user_id)
        return jsonify(checked_in.to_dict()), 201

    @app.route("/api/check-ins/<int:session_id>/checkout", methods=["PATCH"], endpoint="check_out")
    @login_required
    def check_out(session_id: int):
        completed = container.session_ledger.check_out(session_id, current_caller(container.users_repo))
        return jsonify(completed.to_dict())

    @app.route("/api/check-ins/current/<int:user_id>", methods=["GET"], endpoint="current_check_in")
    @login_required
    def current_check_in(user_id: int):
        ensure_can_access(current_caller(container.users_repo), user_id, what="check-ins")
        active = container.session_ledger.get_active(user_id)
        return jsonify(active.to_dict() if active else None)

    @app.route("/api/users/<int:user_id>/recent-activity", methods=["GET"], endpoint="recent_activity")
    @login_required
    def recent_activity(user_id: int):
        ensure_can_access(current_caller(container.users_repo), user_id, what="activity")
        limit = int(current_app.config.get("RECENT_ACTIVITY_LIMIT", DEFAULT_RECENT_LIMIT))
        return jsonify([s.to_dict() for s in container.session_ledger.get_recent(user_id, limit)])
