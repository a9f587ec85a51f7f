from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.http import current_caller, json_body, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/register", methods=["POST"], endpoint="register")
    def register_user():
        data = json_body()
        user = container.user_service.register(
            username=data.get("username", ""),
            password=data.get("password", ""),
            email=data.get("email", ""),
            full_name=data.get("full_name", ""),
            plan=data.get("current_plan"),
        )
        return jsonify(user.to_public_dict()), 201

    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        s_user = container.auth_service.authenticate(data.get("username", ""), data.get("password", ""))

        session.clear()
        session["user_id"] = s_user.user_id
        session["name"] = s_user.full_name
        session["role"] = s_user.role.value

        return jsonify(container.user_service.get(s_user.user_id).to_public_dict())

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        if "user_id" not in session:
            return jsonify({"message": "No active session"})
        session.clear()
        return jsonify({"message": "Logged out successfully"})

    @app.route("/api/users/current", methods=["GET"], endpoint="current_user")
    @login_required
    def current_user():
        user = container.user_service.get(current_caller(container.users_repo).user_id)
        return jsonify(user.to_public_dict())

    @app.route("/api/users", methods=["GET"], endpoint="list_users")
    @login_required
    def list_users():
        users = container.user_service.list_all(current_caller(container.users_repo))
        return jsonify([u.to_public_dict() for u in users])

    @app.route("/api/users/<int:user_id>", methods=["PATCH"], endpoint="update_user")
    @login_required
    def update_user(user_id: int):
        data = json_body()
        user = container.user_service.update_profile(
            current_caller(container.users_repo),
            user_id,
            full_name=data.get("full_name"),
            email=data.get("email"),
        )
        return jsonify(user.to_public_dict())

    @app.route("/api/users/<int:user_id>", methods=["DELETE"], endpoint="delete_user")
    @login_required
    def delete_user(user_id: int):
        container.user_service.delete_user(current_caller(container.users_repo), user_id)
        return jsonify({"message": "User deleted successfully"})
