from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, request, session
from werkzeug.utils import secure_filename

from ..common.datetime_utils import format_iso_date, today_local
from ..common.envelope import Envelope
from ..container import Container
from ..core.constants import DEFAULT_AUDIT_LOG_LIMIT, DEFAULT_TREND_DAYS
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..operations import Operations
from .export import EXPORT_COLUMNS, TRAINER_REPORT_COLUMNS, export_table, to_csv_bytes, to_xlsx_bytes, trainer_report_table

logger = logging.getLogger(__name__)

_MIMETYPES = {
    "csv": "text/csv",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}


def register(app: Flask, container: Container) -> None:
    ops = Operations(container)

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

    def _int_arg(name: str, default: int) -> int:
        value = request.args.get(name)
        return int(value) if value and value.isdigit() else default

    def _file_response(table: list[dict], columns: list[str], *, fmt: str, filename: str):
        if fmt == "xlsx":
            payload = to_xlsx_bytes(table, columns)
        else:
            fmt = "csv"
            payload = to_csv_bytes(table, columns)
        # Header values must stay latin-1; trainer names may not be.
        safe_name = secure_filename(f"{filename}.{fmt}") or f"report.{fmt}"
        return app.response_class(
            payload,
            mimetype=_MIMETYPES[fmt],
            headers={"Content-Disposition": f"attachment; filename={safe_name}"},
        )

    @app.route("/api/admin/team-performance", methods=["GET"], endpoint="team_performance")
    @admin_required
    def team_performance():
        day = request.args.get("date") or format_iso_date(today_local())
        return _reply(ops.get_team_performance(day))

    @app.route("/api/admin/trainer-tasks/<int:trainer_id>", methods=["GET"], endpoint="trainer_tasks")
    @admin_required
    def trainer_tasks(trainer_id: int):
        return _reply(
            ops.get_trainer_tasks(
                trainer_id,
                request.args.get("range", "week"),
                request.args.get("start"),
                request.args.get("end"),
            )
        )

    @app.route("/api/admin/trends", methods=["GET"], endpoint="team_trends")
    @admin_required
    def team_trends():
        # Passed through as given so a bad or negative value is rejected, not defaulted.
        return _reply(ops.get_team_trends(request.args.get("days") or DEFAULT_TREND_DAYS))

    @app.route("/api/admin/top-performers", methods=["GET"], endpoint="top_performers")
    @admin_required
    def top_performers():
        return _reply(ops.get_top_performers(request.args.get("period", "month")))

    @app.route("/api/admin/audit-logs", methods=["GET"], endpoint="audit_logs")
    @admin_required
    def audit_logs():
        return _reply(ops.get_audit_logs(_int_arg("limit", DEFAULT_AUDIT_LOG_LIMIT)))

    @app.route("/api/admin/export", methods=["GET"], endpoint="export_data")
    @admin_required
    def export_data():
        today = today_local()
        start = request.args.get("start") or format_iso_date(today.replace(day=1))
        end = request.args.get("end") or format_iso_date(today)
        fmt = request.args.get("format", "json")

        if fmt == "json":
            return _reply(ops.get_export_data(start, end))

        try:
            rows = container.report_service.export_data(start, end)
        except ValidationError as e:
            return _reply(Envelope.fail(str(e), 400))
        except Exception:
            logger.exception("Export failed")
            return _reply(Envelope.fail("Export failed", 500))

        table = export_table(rows)
        columns = [label for _, label in EXPORT_COLUMNS]
        return _file_response(table, columns, fmt=fmt, filename=f"worklog_{start}_{end}")

    @app.route("/api/admin/trainer-tasks/<int:trainer_id>/export", methods=["GET"], endpoint="trainer_report_export")
    @admin_required
    def trainer_report_export(trainer_id: int):
        trainer = container.users_repo.get_by_id(trainer_id)
        if not trainer:
            return _reply(Envelope.fail("Trainer not found", 404))

        date_range = request.args.get("range", "week")
        try:
            report = container.report_service.trainer_tasks(
                trainer_id,
                date_range,
                start=request.args.get("start"),
                end=request.args.get("end"),
            )
        except ValidationError as e:
            return _reply(Envelope.fail(str(e), 400))
        except Exception:
            logger.exception("Trainer report export failed")
            return _reply(Envelope.fail("Export failed", 500))

        table = trainer_report_table(report, trainer.name)
        filename = f"report_{'_'.join(trainer.name.split())}_{date_range}"
        return _file_response(table, TRAINER_REPORT_COLUMNS, fmt=request.args.get("format", "csv"), filename=filename)
