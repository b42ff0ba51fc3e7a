from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.auth import login_required, role_required
from ..common.validators import require_positive_int
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/announcements", methods=["GET"], endpoint="announcements_list")
    @login_required
    def announcements_list():
        limit = request.args.get("limit")
        try:
            limit = require_positive_int(limit, "limit", maximum=500) if limit is not None else None
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400

        items = container.announcement_service.list_recent(limit=limit)
        return jsonify({"announcements": [a.to_dict() for a in items]}), 200

    @app.route("/api/announcements/latest", methods=["GET"], endpoint="announcements_latest")
    @login_required
    def announcements_latest():
        latest = container.announcement_service.latest()
        return jsonify({"announcement": latest.to_dict() if latest else None}), 200

    @app.route("/api/announcements", methods=["POST"], endpoint="announcements_post")
    @role_required(container.profile_service.get_role, Role.HR, Role.ADMIN)
    def announcements_post():
        data = request.get_json(silent=True) or {}
        try:
            announcement = container.announcement_service.post(
                str(session["user_id"]),
                data.get("title"),
                data.get("body"),
            )
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except AuthorizationError as e:
            return jsonify({"error": str(e)}), 403
        return jsonify(announcement.to_dict()), 201
