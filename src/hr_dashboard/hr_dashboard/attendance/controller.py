from __future__ import annotations

import logging

from flask import Flask, jsonify, request, session

from ..common.auth import login_required, role_required
from ..common.validators import require_positive_int
from ..core.constants import DEFAULT_HISTORY_LIMIT, DEFAULT_OVERVIEW_LIMIT
from ..core.enums import Role
from ..core.exceptions import MisconfiguredError, StoreQueryError, UnauthorizedError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/cron/auto-clockout", methods=["POST"], endpoint="cron_auto_clockout")
    def cron_auto_clockout():
        try:
            result = container.auto_clockout_job.run(request.headers.get("Authorization"))
        except UnauthorizedError:
            logger.warning("Rejected auto clock-out call from %s", request.remote_addr)
            return jsonify({"error": "Unauthorized"}), 401
        except MisconfiguredError:
            logger.error("Auto clock-out called but DB_ADMIN_PASSWORD is not set")
            return jsonify({"error": "Server misconfigured"}), 500
        except StoreQueryError as e:
            return jsonify({"error": str(e)}), 500

        return jsonify(result.to_payload()), 200

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    @login_required
    def attendance_today():
        svc = container.attendance_service
        record = svc.get_today_log(str(session["user_id"]))
        return jsonify(svc.to_ui(record)), 200

    @app.route("/api/attendance/clock-in", methods=["POST"], endpoint="attendance_clock_in")
    @login_required
    def attendance_clock_in():
        svc = container.attendance_service
        user_id = str(session["user_id"])
        try:
            svc.clock_in(user_id)
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        return jsonify(svc.to_ui(svc.get_today_log(user_id))), 201

    @app.route("/api/attendance/clock-out", methods=["POST"], endpoint="attendance_clock_out")
    @login_required
    def attendance_clock_out():
        svc = container.attendance_service
        try:
            record = svc.clock_out(str(session["user_id"]))
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        return jsonify(svc.to_ui(record)), 200

    @app.route("/api/attendance/history", methods=["GET"], endpoint="attendance_history")
    @login_required
    def attendance_history():
        try:
            limit = require_positive_int(request.args.get("limit", DEFAULT_HISTORY_LIMIT), "limit", maximum=100)
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        rows = container.attendance_service.get_history_ui(str(session["user_id"]), limit=limit)
        return jsonify({"rows": rows}), 200

    @app.route("/api/attendance/all", methods=["GET"], endpoint="attendance_all")
    @role_required(container.profile_service.get_role, Role.HR, Role.ADMIN)
    def attendance_all():
        try:
            limit = require_positive_int(request.args.get("limit", DEFAULT_OVERVIEW_LIMIT), "limit", maximum=1000)
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        return jsonify({"rows": container.attendance_service.get_overview_ui(limit=limit)}), 200
