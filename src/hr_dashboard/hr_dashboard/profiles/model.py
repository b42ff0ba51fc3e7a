from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Profile:
    """Domain entity: an employee profile (subset used by the dashboard widgets)."""

    profile_id: str
    full_name: str
    department: Optional[str]
    position: Optional[str]
    dob: Optional[date]
    avatar_url: Optional[str] = None
    role: Role = Role.EMPLOYEE


@dataclass(frozen=True)
class UpcomingBirthday:
    profile_id: str
    full_name: str
    department: Optional[str]
    position: Optional[str]
    avatar_url: Optional[str]
    upcoming_date: date
    is_today: bool

    def to_dict(self) -> dict:
        return {
            "id": self.profile_id,
            "full_name": self.full_name,
            "department": self.department,
            "position": self.position,
            "avatar_url": self.avatar_url,
            "upcoming_date": self.upcoming_date.isoformat(),
            "is_today": self.is_today,
        }
