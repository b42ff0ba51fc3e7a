from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.auth import login_required
from ..common.validators import require_positive_int
from ..core.constants import DEFAULT_BIRTHDAY_WINDOW_DAYS
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/birthdays/upcoming", methods=["GET"], endpoint="upcoming_birthdays")
    @login_required
    def upcoming_birthdays():
        try:
            days = require_positive_int(request.args.get("days", DEFAULT_BIRTHDAY_WINDOW_DAYS), "days", maximum=366)
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400

        today = container.clock().astimezone(container.local_tz).date()
        items = container.birthday_service.upcoming(today, days=days)
        return jsonify({"birthdays": [b.to_dict() for b in items]}), 200
