from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import Announcement


class AnnouncementRepository(Protocol):
    def list_recent(self, *, limit: Optional[int] = None) -> Sequence[Announcement]:
        """Newest first. ``limit=None`` returns every announcement."""

        raise NotImplementedError

    def create(
        self,
        *,
        title: str,
        body: str,
        author_id: str,
        author_name: str,
        author_role: Role,
        created_at: datetime,
    ) -> int:
        raise NotImplementedError
