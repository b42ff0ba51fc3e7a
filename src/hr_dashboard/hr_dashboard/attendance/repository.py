from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceLog, AttendanceOverviewRow, LogId, OpenLog


class AttendanceLogRepository(Protocol):
    def find_open_before(self, cutoff: datetime) -> Sequence[OpenLog]:
        """Logs with no clock_out whose clock_in is strictly before ``cutoff``.

        Raises StoreQueryError when the query itself fails.
        """

        raise NotImplementedError

    def close_log(self, *, log_id: LogId, clock_out: datetime) -> bool:
        """Set clock_out by id. Returns False if no row matched.

        Raises RecordUpdateError when the update fails.
        """

        raise NotImplementedError

    def get_latest_for_user_between(self, *, user_id: str, start: datetime, end: datetime) -> Optional[AttendanceLog]:
        raise NotImplementedError

    def get_recent_for_user(self, user_id: str, limit: int) -> Sequence[AttendanceLog]:
        raise NotImplementedError

    def list_with_profiles(self, *, limit: int) -> Sequence[AttendanceOverviewRow]:
        """All users' logs, newest clock_in first. Logs without a profile keep None names."""

        raise NotImplementedError

    def create_clock_in(self, *, user_id: str, clock_in: datetime) -> LogId:
        raise NotImplementedError

    def update_clock_out(self, *, log_id: LogId, clock_out: datetime) -> bool:
        """User-initiated clock-out; only touches a still-open log."""

        raise NotImplementedError
