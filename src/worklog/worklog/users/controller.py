from __future__ import annotations

from datetime import timedelta
from functools import wraps

from flask import Flask, jsonify, request, session

from ..common.envelope import Envelope
from ..container import Container
from ..core.enums import Role
from ..operations import Operations


def register(app: Flask, container: Container) -> None:
    ops = Operations(container)
    app.permanent_session_lifetime = timedelta(days=7)

    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return jsonify(Envelope.fail("Authentication required", 401).body), 401
            return view(*args, **kwargs)

        return wrapper

    def admin_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return jsonify(Envelope.fail("Authentication required", 401).body), 401
            if session.get("role") != Role.ADMIN.value:
                return jsonify(Envelope.fail("Forbidden", 403).body), 403
            return view(*args, **kwargs)

        return wrapper

    def _reply(result: Envelope):
        return jsonify(result.body), result.status

    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = request.get_json(silent=True) or {}
        result = ops.login(data.get("jsId", ""), data.get("password", ""))
        if result.success:
            user = result.body["user"]
            session.permanent = bool(data.get("rememberMe"))
            session["user_id"] = user["id"]
            session["name"] = user["name"]
            session["role"] = user["role"]
        return _reply(result)

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True})

    @app.route("/api/auth/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        user = container.users_repo.get_by_id(int(session["user_id"]))
        if not user:
            session.clear()
            return _reply(Envelope.fail("Authentication required", 401))
        return jsonify({"success": True, "user": user.to_public()})

    @app.route("/api/auth/change-password", methods=["POST"], endpoint="change_password")
    @login_required
    def change_password():
        data = request.get_json(silent=True) or {}
        return _reply(ops.change_password(int(session["user_id"]), data.get("newPassword", "")))

    @app.route("/api/admin/trainers", methods=["GET", "POST"], endpoint="admin_trainers")
    @admin_required
    def admin_trainers():
        if request.method == "GET":
            return _reply(ops.get_all_trainers())

        data = request.get_json(silent=True) or {}
        return _reply(ops.add_trainer(data.get("name", ""), data.get("jsId", ""), admin_id=session["user_id"]))

    @app.route("/api/admin/trainers/<int:user_id>", methods=["PUT", "DELETE"], endpoint="admin_trainer")
    @admin_required
    def admin_trainer(user_id: int):
        if request.method == "DELETE":
            return _reply(ops.delete_user(user_id, admin_id=session["user_id"]))

        data = request.get_json(silent=True) or {}
        return _reply(ops.update_user(user_id, data.get("name", ""), data.get("jsId", ""), admin_id=session["user_id"]))

    @app.route("/api/admin/trainers/<int:user_id>/reset-password", methods=["POST"], endpoint="admin_reset_password")
    @admin_required
    def admin_reset_password(user_id: int):
        return _reply(ops.reset_password(user_id, admin_id=session["user_id"]))
