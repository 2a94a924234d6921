from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, request, session

from ..common.envelope import Envelope
from ..container import Container
from ..operations import Operations

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    ops = Operations(container)

    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return jsonify(Envelope.fail("Authentication required", 401).body), 401
            return view(*args, **kwargs)

        return wrapper

    def _task_fields(data: dict) -> dict:
        return dict(
            task_type=data.get("taskType"),
            custom_task_name=data.get("customTaskName"),
            hours=data.get("hours"),
            date=data.get("date"),
            start_time=data.get("startTime"),
            end_time=data.get("endTime"),
            remarks=data.get("remarks"),
        )

    def _dispatch(action: str, data: dict, user_id) -> Envelope | None:
        if action == "get-user-tasks":
            return ops.get_user_tasks(user_id, data.get("date"))
        if action == "add":
            return ops.add_task(user_id, **_task_fields(data))
        if action == "update":
            return ops.update_task(data.get("taskId"), user_id, **_task_fields(data))
        if action == "delete":
            return ops.delete_task(data.get("taskId"), user_id)
        if action == "get-today-hours":
            return ops.get_today_hours(user_id, data.get("date"))
        if action == "get-day-status":
            return ops.get_day_status(user_id, data.get("date"))
        return None

    @app.route("/api/tasks", methods=["GET", "POST", "PUT", "PATCH", "DELETE"], endpoint="api_tasks")
    def api_tasks():
        if request.method != "POST":
            return jsonify({"error": "Method not allowed"}), 405
        return _post_task_action()

    @login_required
    def _post_task_action():
        data = request.get_json(silent=True) or {}
        action = data.pop("action", None)

        # Tasks are always read and written as the signed-in user.
        user_id = int(session["user_id"])
        claimed = data.get("userId")
        if claimed not in (None, "") and str(claimed) != str(user_id):
            logger.warning("User %s sent userId=%r on %r", user_id, claimed, action)
            return jsonify(Envelope.fail("Forbidden", 403).body), 403

        result = _dispatch(action, data, user_id)
        if result is None:
            logger.info("Rejected unknown task action %r", action)
            return jsonify({"error": "Invalid action"}), 400
        return jsonify(result.body), result.status
