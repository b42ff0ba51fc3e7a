from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..common.datetime_utils import to_iso
from ..core.enums import Role


@dataclass(frozen=True)
class Announcement:
    """Company-wide notice. Author name and role are copied from the profile at posting time."""

    announcement_id: int
    title: str
    body: str
    author_id: str
    author_name: str
    author_role: Role
    created_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.announcement_id,
            "title": self.title,
            "body": self.body,
            "author_name": self.author_name,
            "author_role": self.author_role.value,
            "created_at": to_iso(self.created_at),
        }
