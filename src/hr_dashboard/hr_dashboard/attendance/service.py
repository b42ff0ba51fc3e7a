from __future__ import annotations

from datetime import datetime, timezone, tzinfo
from typing import Optional

from ..common.datetime_utils import Clock, format_time, local_day_range, parse_store_time, to_iso, utc_now
from ..core.constants import DEFAULT_HISTORY_LIMIT, DEFAULT_OVERVIEW_LIMIT
from ..core.exceptions import ValidationError
from .model import AttendanceLog, LogId
from .repository import AttendanceLogRepository


class AttendanceService:
    """Employee clock widget: today's session, clock in, clock out, history."""

    def __init__(
        self,
        logs: AttendanceLogRepository,
        *,
        local_tz: Optional[tzinfo] = None,
        clock: Clock = utc_now,
    ):
        self._logs = logs
        self._tz = local_tz or timezone.utc
        self._clock = clock

    def get_today_log(self, user_id: str, *, now: datetime | None = None) -> Optional[AttendanceLog]:
        start, end = local_day_range(now or self._clock(), self._tz)
        return self._logs.get_latest_for_user_between(user_id=user_id, start=start, end=end)

    def clock_in(self, user_id: str, *, now: datetime | None = None) -> LogId:
        now = parse_store_time(now or self._clock())

        today = self.get_today_log(user_id, now=now)
        if today and today.is_open:
            raise ValidationError("You are already clocked in")

        return self._logs.create_clock_in(user_id=user_id, clock_in=now)

    def clock_out(self, user_id: str, *, now: datetime | None = None) -> AttendanceLog:
        now = parse_store_time(now or self._clock())

        record = self.get_today_log(user_id, now=now)
        if not record:
            raise ValidationError("You have not clocked in today")
        if not record.is_open:
            raise ValidationError("You have already clocked out")
        if now < record.clock_in:
            raise ValidationError("Clock-out cannot be earlier than clock-in")

        if not self._logs.update_clock_out(log_id=record.log_id, clock_out=now):
            # Closed in the meantime, e.g. by the auto clock-out job.
            raise ValidationError("You have already clocked out")

        return AttendanceLog(log_id=record.log_id, user_id=record.user_id, clock_in=record.clock_in, clock_out=now)

    def get_history_ui(self, user_id: str, *, limit: int = DEFAULT_HISTORY_LIMIT) -> list[dict]:
        return [self.to_ui(r) for r in self._logs.get_recent_for_user(user_id, limit)]

    def get_overview_ui(self, *, limit: int = DEFAULT_OVERVIEW_LIMIT) -> list[dict]:
        """All employees' sessions, newest first, for the HR/admin table."""
        rows = []
        for r in self._logs.list_with_profiles(limit=limit):
            row = self.to_ui(AttendanceLog(log_id=r.log_id, user_id=r.user_id, clock_in=r.clock_in, clock_out=r.clock_out))
            row.update(
                {
                    "user_id": r.user_id,
                    "full_name": r.full_name or r.user_id,
                    "role": r.role.value if r.role else None,
                }
            )
            rows.append(row)
        return rows

    def to_ui(self, r: Optional[AttendanceLog]) -> dict:
        if r is None:
            return {
                "log_id": None,
                "date": None,
                "clock_in": "--",
                "clock_out": "--",
                "clock_in_at": None,
                "clock_out_at": None,
                "status": "not_started",
            }

        return {
            "log_id": r.log_id,
            "date": r.clock_in.astimezone(self._tz).strftime("%Y-%m-%d"),
            "clock_in": format_time(r.clock_in, self._tz),
            "clock_out": format_time(r.clock_out, self._tz),
            "clock_in_at": to_iso(r.clock_in),
            "clock_out_at": to_iso(r.clock_out) if r.clock_out else None,
            "status": "open" if r.is_open else "closed",
        }
