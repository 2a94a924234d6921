from __future__ import annotations

from functools import wraps

from flask import Flask, jsonify, request, session

from ..common.envelope import Envelope
from ..container import Container
from ..core.enums import Role
from ..operations import Operations


def register(app: Flask, container: Container) -> None:
    ops = Operations(container)

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

    @app.route("/api/task-types", methods=["GET"], endpoint="task_types")
    @login_required
    def task_types():
        return _reply(ops.get_task_types())

    @app.route("/api/task-types", methods=["POST"], endpoint="add_task_type")
    @admin_required
    def add_task_type():
        data = request.get_json(silent=True) or {}
        return _reply(ops.add_task_type(data.get("name", ""), user_id=session["user_id"]))

    @app.route("/api/task-types/<int:type_id>", methods=["PUT", "DELETE"], endpoint="task_type")
    @admin_required
    def task_type(type_id: int):
        if request.method == "DELETE":
            return _reply(ops.delete_task_type(type_id, user_id=session["user_id"]))

        data = request.get_json(silent=True) or {}
        return _reply(ops.update_task_type(type_id, data.get("name", ""), user_id=session["user_id"]))
