from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import tzinfo
from typing import Optional

from .announcements.mysql_announcement_repository import MySQLAnnouncementRepository
from .announcements.repository import AnnouncementRepository
from .announcements.service import AnnouncementService
from .attendance.auto_clockout import AutoClockOutJob, InvocationGate, StoreFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceLogRepository
from .attendance.repository import AttendanceLogRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import Clock, get_timezone, utc_now
from .database.connection import DatabaseConnection, db_config_from_dict
from .profiles.mysql_profile_repository import MySQLProfileRepository
from .profiles.repository import ProfileRepository
from .profiles.service import BirthdayService, ProfileService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    attendance_repo: AttendanceLogRepository
    profiles_repo: ProfileRepository
    announcements_repo: AnnouncementRepository

    attendance_service: AttendanceService
    birthday_service: BirthdayService
    profile_service: ProfileService
    announcement_service: AnnouncementService
    auto_clockout_job: AutoClockOutJob

    local_tz: tzinfo
    clock: Clock = utc_now


def _admin_store_factory(
    db_config: dict,
    *,
    admin_user: Optional[str],
    admin_password: Optional[str],
    timeout_seconds: Optional[int],
) -> Optional[StoreFactory]:
    if not admin_password:
        return None

    config = db_config_from_dict(db_config, timeout_seconds=timeout_seconds)
    config = replace(config, user=admin_user or config.user, password=admin_password)
    # Separate from the app's shared connection factory.
    admin_conn = DatabaseConnection(config)
    return lambda: MySQLAttendanceLogRepository(admin_conn)


def build_container(
    *,
    db_config: dict,
    admin_user: Optional[str] = None,
    admin_password: Optional[str] = None,
    cron_secret: Optional[str] = None,
    local_timezone: Optional[str] = None,
    timeout_seconds: Optional[int] = None,
) -> Container:
    conn = DatabaseConnection.get_instance(db_config_from_dict(db_config, timeout_seconds=timeout_seconds))
    local_tz = get_timezone(local_timezone)

    attendance_repo = MySQLAttendanceLogRepository(conn)
    profiles_repo = MySQLProfileRepository(conn)
    announcements_repo = MySQLAnnouncementRepository(conn)

    gate = InvocationGate(cron_secret)
    if gate.is_permissive:
        logger.warning("CRON_SECRET is not set: /api/cron/auto-clockout accepts unauthenticated calls")

    store_factory = _admin_store_factory(
        db_config,
        admin_user=admin_user,
        admin_password=admin_password,
        timeout_seconds=timeout_seconds,
    )
    if store_factory is None:
        logger.warning("DB_ADMIN_PASSWORD is not set: auto clock-out will report a misconfiguration")

    return Container(
        conn=conn,
        attendance_repo=attendance_repo,
        profiles_repo=profiles_repo,
        announcements_repo=announcements_repo,
        attendance_service=AttendanceService(attendance_repo, local_tz=local_tz),
        birthday_service=BirthdayService(profiles_repo),
        profile_service=ProfileService(profiles_repo),
        announcement_service=AnnouncementService(announcements_repo, profiles_repo),
        auto_clockout_job=AutoClockOutJob(gate=gate, store_factory=store_factory),
        local_tz=local_tz,
    )
