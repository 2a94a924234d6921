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

    @app.route("/api/announcements", methods=["GET", "POST"], endpoint="announcements")
    @login_required
    def announcements():
        is_admin = session.get("role") == Role.ADMIN.value

        if request.method == "GET":
            # Admins see the full history; trainers only what is addressed to them.
            return _reply(ops.get_announcements(None if is_admin else int(session["user_id"])))

        if not is_admin:
            return _reply(Envelope.fail("Forbidden", 403))

        data = request.get_json(silent=True) or {}
        return _reply(
            ops.create_announcement(
                data.get("message", ""),
                is_urgent=bool(data.get("isUrgent")),
                recipient_ids=data.get("recipientIds") or [],
                admin_id=session["user_id"],
            )
        )

    def _reply(result: Envelope):
        return jsonify(result.body), result.status
