from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, from_mysql_datetime, to_mysql_datetime
from .model import Announcement
from .repository import AnnouncementRepository


def _to_announcement(r: dict) -> Announcement:
    return Announcement(
        announcement_id=int(r["announcement_id"]),
        title=r["title"],
        body=r["body"],
        author_id=str(r["author_id"]),
        author_name=r["author_name"],
        author_role=Role(r["author_role"]),
        created_at=from_mysql_datetime(r["created_at"]),
    )


class MySQLAnnouncementRepository(AnnouncementRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_recent(self, *, limit: Optional[int] = None) -> Sequence[Announcement]:
        sql = """
            SELECT announcement_id, title, body, author_id, author_name, author_role, created_at
            FROM announcements
            ORDER BY created_at DESC, announcement_id DESC
        """
        params: tuple = ()
        if limit is not None:
            sql += " LIMIT %s"
            params = (int(limit),)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [_to_announcement(r) for r in fetchall(cur)]

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO announcements(title, body, author_id, author_name, author_role, created_at)
                VALUES(%s, %s, %s, %s, %s, %s)
                """,
                (title, body, author_id, author_name, author_role.value, to_mysql_datetime(created_at)),
            )
            return int(cur.lastrowid)
