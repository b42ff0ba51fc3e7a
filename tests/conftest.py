from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from typing import Optional

import pytest

from src.hr_dashboard.hr_dashboard.announcements.model import Announcement
from src.hr_dashboard.hr_dashboard.announcements.service import AnnouncementService
from src.hr_dashboard.hr_dashboard.attendance.auto_clockout import AutoClockOutJob, InvocationGate
from src.hr_dashboard.hr_dashboard.attendance.model import AttendanceLog, AttendanceOverviewRow, OpenLog
from src.hr_dashboard.hr_dashboard.attendance.service import AttendanceService
from src.hr_dashboard.hr_dashboard.container import Container
from src.hr_dashboard.hr_dashboard.core.enums import Role
from src.hr_dashboard.hr_dashboard.core.exceptions import RecordUpdateError, StoreQueryError
from src.hr_dashboard.hr_dashboard.main import create_app
from src.hr_dashboard.hr_dashboard.profiles.model import Profile
from src.hr_dashboard.hr_dashboard.profiles.service import BirthdayService, ProfileService


class InMemoryProfiles:
    def __init__(self, profiles=()):
        self._profiles = {p.profile_id: p for p in profiles}

    def add(self, profile_id: str, full_name: str, *, role: Role = Role.EMPLOYEE, **fields) -> Profile:
        fields.setdefault("department", None)
        fields.setdefault("position", None)
        fields.setdefault("dob", None)
        profile = Profile(profile_id=profile_id, full_name=full_name, role=role, **fields)
        self._profiles[profile_id] = profile
        return profile

    def get_by_id(self, profile_id: str) -> Optional[Profile]:
        return self._profiles.get(profile_id)

    def list_with_dob(self):
        return [p for p in self._profiles.values() if p.dob]


class InMemoryAttendanceLogs:
    """Fake attendance_logs store that records every scan/update call."""

    def __init__(self, *, fail_update_ids=(), scan_error: Optional[str] = None, profiles: Optional[InMemoryProfiles] = None):
        self._logs: dict[int, AttendanceLog] = {}
        self._id = 0
        self.fail_update_ids = set(fail_update_ids)
        self.scan_error = scan_error
        self.profiles = profiles or InMemoryProfiles()
        self.scan_calls: list[datetime] = []
        self.update_calls: list[tuple[int, datetime]] = []

    def add(self, *, user_id: str = "u1", clock_in: datetime, clock_out: Optional[datetime] = None) -> int:
        self._id += 1
        self._logs[self._id] = AttendanceLog(log_id=self._id, user_id=user_id, clock_in=clock_in, clock_out=clock_out)
        return self._id

    def find_open_before(self, cutoff: datetime):
        self.scan_calls.append(cutoff)
        if self.scan_error:
            raise StoreQueryError(self.scan_error)
        return [
            OpenLog(log_id=r.log_id, clock_in=r.clock_in)
            for r in self._logs.values()
            if r.clock_out is None and r.clock_in < cutoff
        ]

    def close_log(self, *, log_id, clock_out: datetime) -> bool:
        self.update_calls.append((log_id, clock_out))
        if log_id in self.fail_update_ids:
            raise RecordUpdateError(log_id, "simulated failure")
        record = self._logs.get(log_id)
        if not record:
            return False
        if clock_out < record.clock_in:
            # Same rule as chk_attendance_logs_order in schema.sql.
            raise RecordUpdateError(log_id, "check constraint violated")
        self._logs[log_id] = replace(record, clock_out=clock_out)
        return True

    def get_by_id(self, log_id) -> Optional[AttendanceLog]:
        return self._logs.get(log_id)

    def get_latest_for_user_between(self, *, user_id: str, start: datetime, end: datetime) -> Optional[AttendanceLog]:
        items = [r for r in self._logs.values() if r.user_id == user_id and start <= r.clock_in < end]
        items.sort(key=lambda r: r.clock_in, reverse=True)
        return items[0] if items else None

    def get_recent_for_user(self, user_id: str, limit: int):
        items = [r for r in self._logs.values() if r.user_id == user_id]
        items.sort(key=lambda r: r.clock_in, reverse=True)
        return items[:limit]

    def list_with_profiles(self, *, limit: int):
        items = sorted(self._logs.values(), key=lambda r: r.clock_in, reverse=True)[:limit]
        rows = []
        for r in items:
            p = self.profiles.get_by_id(r.user_id)
            rows.append(
                AttendanceOverviewRow(
                    log_id=r.log_id,
                    user_id=r.user_id,
                    full_name=p.full_name if p else None,
                    role=p.role if p else None,
                    clock_in=r.clock_in,
                    clock_out=r.clock_out,
                )
            )
        return rows

    def create_clock_in(self, *, user_id: str, clock_in: datetime) -> int:
        return self.add(user_id=user_id, clock_in=clock_in)

    def update_clock_out(self, *, log_id, clock_out: datetime) -> bool:
        record = self._logs.get(log_id)
        if not record or record.clock_out is not None:
            return False
        self._logs[log_id] = replace(record, clock_out=clock_out)
        return True


class InMemoryAnnouncements:
    def __init__(self):
        self._items: list[Announcement] = []

    def list_recent(self, *, limit: Optional[int] = None):
        items = sorted(self._items, key=lambda a: (a.created_at, a.announcement_id), reverse=True)
        return items if limit is None else items[:limit]

    def create(self, *, title, body, author_id, author_name, author_role, created_at) -> int:
        announcement_id = len(self._items) + 1
        self._items.append(
            Announcement(
                announcement_id=announcement_id,
                title=title,
                body=body,
                author_id=author_id,
                author_name=author_name,
                author_role=author_role,
                created_at=created_at,
            )
        )
        return announcement_id


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


@pytest.fixture
def fixed_now() -> datetime:
    return utc(2024, 3, 11, 0, 5, 0)


@pytest.fixture
def logs_repo() -> InMemoryAttendanceLogs:
    return InMemoryAttendanceLogs()


@pytest.fixture
def make_logs_repo():
    return InMemoryAttendanceLogs


@pytest.fixture
def profiles_repo() -> InMemoryProfiles:
    return InMemoryProfiles()


@pytest.fixture
def announcements_repo() -> InMemoryAnnouncements:
    return InMemoryAnnouncements()


@pytest.fixture
def make_client(monkeypatch):
    """Flask test client over a Container built from in-memory fakes."""
    monkeypatch.setenv("APP_ENV", "testing")

    def _make(logs, *, profiles=None, announcements=None, secret="s3cret", configured=True, now=None):
        now = now or utc(2024, 3, 11, 0, 5)
        clock = lambda: now  # noqa: E731
        profiles = profiles or logs.profiles
        announcements = announcements or InMemoryAnnouncements()
        container = Container(
            conn=None,
            attendance_repo=logs,
            profiles_repo=profiles,
            announcements_repo=announcements,
            attendance_service=AttendanceService(logs, clock=clock),
            birthday_service=BirthdayService(profiles),
            profile_service=ProfileService(profiles),
            announcement_service=AnnouncementService(announcements, profiles, clock=clock),
            auto_clockout_job=AutoClockOutJob(
                gate=InvocationGate(secret),
                store_factory=(lambda: logs) if configured else None,
                clock=clock,
            ),
            local_tz=timezone.utc,
            clock=clock,
        )
        return create_app(container).test_client()

    return _make
