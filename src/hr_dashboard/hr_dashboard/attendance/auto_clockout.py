"""Daily auto clock-out job.

Closes every attendance log that was clocked in before today (UTC) and never
clocked out, setting ``clock_out`` to 23:59:59 UTC of its clock-in day. Meant to
be called by an external scheduler shortly after midnight UTC, e.g. 00:05, with
``Authorization: Bearer <CRON_SECRET>``.

Re-running is safe: closed logs no longer match the scan.
"""
from __future__ import annotations

import hmac
import logging
from typing import Callable, Optional

from ..common.datetime_utils import Clock, utc_now
from ..core.exceptions import MisconfiguredError, UnauthorizedError
from .model import ReconciliationResult
from .reconciliation import OpenLogScanner, ReconciliationDriver
from .repository import AttendanceLogRepository

logger = logging.getLogger(__name__)

StoreFactory = Callable[[], AttendanceLogRepository]


class InvocationGate:
    """Shared-secret bearer check. Permissive when no secret is configured."""

    def __init__(self, secret: Optional[str]):
        self._secret = secret or None

    @property
    def is_permissive(self) -> bool:
        return self._secret is None

    def authorize(self, authorization: Optional[str]) -> None:
        if self._secret is None:
            return

        expected = f"Bearer {self._secret}".encode("utf-8")
        presented = (authorization or "").encode("utf-8")
        if not hmac.compare_digest(presented, expected):
            raise UnauthorizedError("Unauthorized")


class AutoClockOutJob:
    """Gate, scan, then close.

    ``store_factory`` opens the record store with the administrative
    credential; None means that credential is not configured.
    """

    def __init__(
        self,
        *,
        gate: InvocationGate,
        store_factory: Optional[StoreFactory],
        clock: Clock = utc_now,
    ):
        self._gate = gate
        self._store_factory = store_factory
        self._clock = clock

    def run(self, authorization: Optional[str]) -> ReconciliationResult:
        self._gate.authorize(authorization)
        return self.reconcile()

    def reconcile(self) -> ReconciliationResult:
        """Run without the bearer check (local cron script)."""
        if self._store_factory is None:
            raise MisconfiguredError("Server misconfigured")

        now = self._clock()
        logs = self._store_factory()

        candidates = OpenLogScanner(logs).scan(now)
        result = ReconciliationDriver(logs).reconcile(candidates)

        logger.info("Auto clock-out closed %d of %d open log(s)", result.closed_count, result.total_candidates)
        return result
