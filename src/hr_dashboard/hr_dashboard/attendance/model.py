from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

from ..core.constants import NO_OPEN_LOGS_MESSAGE
from ..core.enums import Role

LogId = Union[int, str]


@dataclass(frozen=True)
class AttendanceLog:
    """Domain entity: one clock-in/clock-out session.

    ``clock_out`` is None while the session is still open. Timestamps are aware UTC.
    """

    log_id: LogId
    user_id: str
    clock_in: datetime
    clock_out: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        return self.clock_out is None


@dataclass(frozen=True)
class OpenLog:
    """Read-model returned by the stale-session scan."""

    log_id: LogId
    clock_in: datetime


@dataclass(frozen=True)
class ReconciliationResult:
    closed_count: int
    total_candidates: int

    def to_payload(self) -> dict:
        if self.total_candidates == 0:
            return {"closed": 0, "message": NO_OPEN_LOGS_MESSAGE}
        return {"closed": self.closed_count, "total": self.total_candidates}


@dataclass(frozen=True)
class AttendanceOverviewRow:
    """Read-model for the HR/admin attendance table: a log joined to its owner's profile."""

    log_id: LogId
    user_id: str
    full_name: Optional[str]
    role: Optional[Role]
    clock_in: datetime
    clock_out: Optional[datetime]
