from __future__ import annotations

import logging
from datetime import datetime
from typing import Sequence

from ..common.datetime_utils import end_of_day, start_of_day_utc
from ..core.exceptions import RecordUpdateError
from .model import OpenLog, ReconciliationResult
from .repository import AttendanceLogRepository

logger = logging.getLogger(__name__)


class OpenLogScanner:
    """Finds stale sessions: still open and clocked in before today (UTC)."""

    def __init__(self, logs: AttendanceLogRepository):
        self._logs = logs

    def scan(self, now: datetime) -> Sequence[OpenLog]:
        # StoreQueryError propagates: a partial candidate set is never used.
        cutoff = start_of_day_utc(now)
        candidates = list(self._logs.find_open_before(cutoff))
        logger.info("Found %d open log(s) clocked in before %s", len(candidates), cutoff.isoformat())
        return candidates


class ReconciliationDriver:
    """Closes each candidate at 23:59:59 UTC of its clock-in day.

    A clock-in inside that last second closes at the clock-in instant itself so
    clock_out never precedes clock_in.

    Records are independent: a failed update is skipped, never retried in the
    same run, and never stops the remaining updates.
    """

    def __init__(self, logs: AttendanceLogRepository):
        self._logs = logs

    def reconcile(self, candidates: Sequence[OpenLog]) -> ReconciliationResult:
        if not candidates:
            return ReconciliationResult(closed_count=0, total_candidates=0)

        closed = 0
        for candidate in candidates:
            close_at = max(end_of_day(candidate.clock_in, use_utc=True), candidate.clock_in)
            try:
                updated = self._logs.close_log(log_id=candidate.log_id, clock_out=close_at)
            except RecordUpdateError as e:
                logger.warning("Skipping log %s: %s", candidate.log_id, e.detail)
                continue

            if updated:
                closed += 1
            else:
                logger.warning("Skipping log %s: no row updated", candidate.log_id)

        return ReconciliationResult(closed_count=closed, total_candidates=len(candidates))
