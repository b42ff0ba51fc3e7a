from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

import mysql.connector

from ..core.enums import Role
from ..core.exceptions import RecordUpdateError, StoreQueryError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_mysql_datetime, to_mysql_datetime
from .model import AttendanceLog, AttendanceOverviewRow, LogId, OpenLog
from .repository import AttendanceLogRepository

logger = logging.getLogger(__name__)


def _to_log(r: dict) -> AttendanceLog:
    return AttendanceLog(
        log_id=int(r["log_id"]),
        user_id=str(r["user_id"]),
        clock_in=from_mysql_datetime(r["clock_in"]),
        clock_out=from_mysql_datetime(r.get("clock_out")),
    )


class MySQLAttendanceLogRepository(AttendanceLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_open_before(self, cutoff: datetime) -> Sequence[OpenLog]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    SELECT log_id, clock_in
                    FROM attendance_logs
                    WHERE clock_out IS NULL AND clock_in < %s
                    """,
                    (to_mysql_datetime(cutoff),),
                )
                rows = fetchall(cur)
        except mysql.connector.Error as e:
            logger.error("Open log scan failed: %s", e)
            raise StoreQueryError(str(e)) from e

        return [OpenLog(log_id=int(r["log_id"]), clock_in=from_mysql_datetime(r["clock_in"])) for r in rows]

    def close_log(self, *, log_id: LogId, clock_out: datetime) -> bool:
        # Keyed on id only: a concurrent user clock-out between scan and update is overwritten.
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "UPDATE attendance_logs SET clock_out=%s WHERE log_id=%s",
                    (to_mysql_datetime(clock_out), int(log_id)),
                )
                return cur.rowcount > 0
        except mysql.connector.Error as e:
            raise RecordUpdateError(log_id, str(e)) from e

    def list_with_profiles(self, *, limit: int) -> Sequence[AttendanceOverviewRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT al.log_id, al.user_id, al.clock_in, al.clock_out, p.full_name, p.role
                FROM attendance_logs al
                LEFT JOIN profiles p ON p.profile_id = al.user_id
                ORDER BY al.clock_in DESC
                LIMIT %s
                """,
                (int(limit),),
            )
            return [
                AttendanceOverviewRow(
                    log_id=int(r["log_id"]),
                    user_id=str(r["user_id"]),
                    full_name=r.get("full_name"),
                    role=Role(r["role"]) if r.get("role") else None,
                    clock_in=from_mysql_datetime(r["clock_in"]),
                    clock_out=from_mysql_datetime(r.get("clock_out")),
                )
                for r in fetchall(cur)
            ]

    def get_latest_for_user_between(self, *, user_id: str, start: datetime, end: datetime) -> Optional[AttendanceLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT log_id, user_id, clock_in, clock_out
                FROM attendance_logs
                WHERE user_id=%s AND clock_in >= %s AND clock_in < %s
                ORDER BY clock_in DESC
                LIMIT 1
                """,
                (user_id, to_mysql_datetime(start), to_mysql_datetime(end)),
            )
            r = fetchone(cur)
            return _to_log(r) if r else None

    def get_recent_for_user(self, user_id: str, limit: int) -> Sequence[AttendanceLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT log_id, user_id, clock_in, clock_out
                FROM attendance_logs
                WHERE user_id=%s
                ORDER BY clock_in DESC
                LIMIT %s
                """,
                (user_id, int(limit)),
            )
            return [_to_log(r) for r in fetchall(cur)]

    def create_clock_in(self, *, user_id: str, clock_in: datetime) -> LogId:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO attendance_logs(user_id, clock_in) VALUES(%s, %s)",
                (user_id, to_mysql_datetime(clock_in)),
            )
            return int(cur.lastrowid)

    def update_clock_out(self, *, log_id: LogId, clock_out: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE attendance_logs SET clock_out=%s WHERE log_id=%s AND clock_out IS NULL",
                (to_mysql_datetime(clock_out), int(log_id)),
            )
            return cur.rowcount > 0
