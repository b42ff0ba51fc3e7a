from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import Clock, parse_store_time, utc_now
from ..common.validators import require_max_length, require_non_empty
from ..core.constants import ANNOUNCEMENT_BODY_MAX_LENGTH, ANNOUNCEMENT_TITLE_MAX_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..profiles.repository import ProfileRepository
from .model import Announcement
from .repository import AnnouncementRepository

logger = logging.getLogger(__name__)

POSTING_ROLES = (Role.HR, Role.ADMIN)


class AnnouncementService:
    def __init__(self, announcements: AnnouncementRepository, profiles: ProfileRepository, *, clock: Clock = utc_now):
        self._announcements = announcements
        self._profiles = profiles
        self._clock = clock

    def list_recent(self, *, limit: Optional[int] = None) -> list[Announcement]:
        return list(self._announcements.list_recent(limit=limit))

    def latest(self) -> Optional[Announcement]:
        items = self._announcements.list_recent(limit=1)
        return items[0] if items else None

    def post(self, author_id: str, title, body, *, now: datetime | None = None) -> Announcement:
        title = require_max_length(require_non_empty(title, "title"), "title", ANNOUNCEMENT_TITLE_MAX_LENGTH)
        body = require_max_length(require_non_empty(body, "body"), "body", ANNOUNCEMENT_BODY_MAX_LENGTH)

        author = self._profiles.get_by_id(author_id)
        if not author:
            raise ValidationError("Profile not found")
        if author.role not in POSTING_ROLES:
            raise AuthorizationError("Only HR and admins can post announcements")

        created_at = parse_store_time(now or self._clock())
        announcement_id = self._announcements.create(
            title=title,
            body=body,
            author_id=author.profile_id,
            author_name=author.full_name,
            author_role=author.role,
            created_at=created_at,
        )
        logger.info("Announcement %s posted by %s", announcement_id, author.profile_id)

        return Announcement(
            announcement_id=announcement_id,
            title=title,
            body=body,
            author_id=author.profile_id,
            author_name=author.full_name,
            author_role=author.role,
            created_at=created_at,
        )
