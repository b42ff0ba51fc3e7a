from __future__ import annotations

from datetime import datetime, timezone

import pytest

from src.hr_dashboard.hr_dashboard.announcements.service import AnnouncementService
from src.hr_dashboard.hr_dashboard.core.enums import Role
from src.hr_dashboard.hr_dashboard.core.exceptions import AuthorizationError, ValidationError


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


@pytest.fixture
def svc(announcements_repo, profiles_repo):
    profiles_repo.add("hr1", "Mai Tran", role=Role.HR)
    profiles_repo.add("ad1", "Omar Ali", role=Role.ADMIN)
    profiles_repo.add("e1", "Linh Pham")
    return AnnouncementService(announcements_repo, profiles_repo, clock=lambda: utc(2024, 3, 11, 9, 0))


def test_post_copies_author_from_profile(svc):
    a = svc.post("hr1", "  Office closed  ", "Friday is a holiday.")

    assert a.title == "Office closed"
    assert a.author_name == "Mai Tran"
    assert a.author_role is Role.HR
    assert a.to_dict() == {
        "id": 1,
        "title": "Office closed",
        "body": "Friday is a holiday.",
        "author_name": "Mai Tran",
        "author_role": "hr",
        "created_at": "2024-03-11T09:00:00.000Z",
    }


def test_employees_cannot_post(svc, announcements_repo):
    with pytest.raises(AuthorizationError):
        svc.post("e1", "Hi", "Hello")

    assert announcements_repo.list_recent() == []


def test_unknown_author_is_rejected(svc):
    with pytest.raises(ValidationError, match="Profile not found"):
        svc.post("nobody", "Hi", "Hello")


@pytest.mark.parametrize(
    "title, body, message",
    [
        ("", "Hello", "title is required"),
        ("Hi", "   ", "body is required"),
        (None, "Hello", "title is required"),
        ("x" * 121, "Hello", "title must be at most 120"),
        ("Hi", "x" * 1001, "body must be at most 1000"),
    ],
)
def test_post_validation(svc, title, body, message):
    with pytest.raises(ValidationError, match=message):
        svc.post("ad1", title, body)


def test_list_is_newest_first_and_latest_is_the_head(svc):
    assert svc.latest() is None

    svc.post("hr1", "First", "a", now=utc(2024, 3, 1, 9, 0))
    svc.post("ad1", "Third", "c", now=utc(2024, 3, 9, 9, 0))
    svc.post("hr1", "Second", "b", now=utc(2024, 3, 5, 9, 0))

    assert [a.title for a in svc.list_recent()] == ["Third", "Second", "First"]
    assert [a.title for a in svc.list_recent(limit=2)] == ["Third", "Second"]
    assert svc.latest().title == "Third"
