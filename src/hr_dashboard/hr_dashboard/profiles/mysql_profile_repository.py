from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Profile
from .repository import ProfileRepository


def _to_profile(r: dict) -> Profile:
    return Profile(
        profile_id=str(r["profile_id"]),
        full_name=r["full_name"],
        department=r.get("department"),
        position=r.get("position"),
        dob=r.get("dob"),
        avatar_url=r.get("avatar_url"),
        role=Role(r.get("role") or Role.EMPLOYEE.value),
    )


class MySQLProfileRepository(ProfileRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, profile_id: str) -> Optional[Profile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT profile_id, full_name, department, position, dob, avatar_url, role
                FROM profiles
                WHERE profile_id=%s
                """,
                (profile_id,),
            )
            r = fetchone(cur)
            return _to_profile(r) if r else None

    def list_with_dob(self) -> Sequence[Profile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT profile_id, full_name, department, position, dob, avatar_url, role
                FROM profiles
                WHERE dob IS NOT NULL
                """
            )
            return [_to_profile(r) for r in fetchall(cur)]
