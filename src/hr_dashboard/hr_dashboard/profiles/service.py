from __future__ import annotations

from datetime import date, timedelta
from typing import Optional

from ..common.strings import capitalize_name
from ..core.constants import DEFAULT_BIRTHDAY_WINDOW_DAYS
from ..core.enums import Role
from .model import Profile, UpcomingBirthday
from .repository import ProfileRepository


def next_birthday(dob: date, today: date) -> date:
    """Next anniversary of ``dob`` on or after ``today``. Feb 29 maps to Feb 28 in common years."""

    def _in_year(year: int) -> date:
        try:
            return dob.replace(year=year)
        except ValueError:
            return date(year, 2, 28)

    candidate = _in_year(today.year)
    if candidate < today:
        candidate = _in_year(today.year + 1)
    return candidate


class BirthdayService:
    def __init__(self, profiles: ProfileRepository):
        self._profiles = profiles

    def upcoming(self, today: date, *, days: int = DEFAULT_BIRTHDAY_WINDOW_DAYS) -> list[UpcomingBirthday]:
        horizon = today + timedelta(days=days)
        result: list[UpcomingBirthday] = []

        for p in self._profiles.list_with_dob():
            if not p.dob:
                continue
            nxt = next_birthday(p.dob, today)
            if nxt > horizon:
                continue
            result.append(
                UpcomingBirthday(
                    profile_id=p.profile_id,
                    full_name=capitalize_name(p.full_name),
                    department=p.department,
                    position=p.position,
                    avatar_url=p.avatar_url,
                    upcoming_date=nxt,
                    is_today=nxt == today,
                )
            )

        result.sort(key=lambda b: (b.upcoming_date, b.full_name))
        return result


class ProfileService:
    def __init__(self, profiles: ProfileRepository):
        self._profiles = profiles

    def get(self, profile_id: str) -> Optional[Profile]:
        return self._profiles.get_by_id(profile_id)

    def get_role(self, profile_id: str) -> Optional[Role]:
        profile = self._profiles.get_by_id(profile_id)
        return profile.role if profile else None
