from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..common.datetime_utils import parse_store_time
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def to_mysql_datetime(value: datetime) -> datetime:
    """Aware datetime -> naive UTC for DATETIME(6) columns."""
    return parse_store_time(value).replace(tzinfo=None)


def from_mysql_datetime(value: Any) -> Optional[datetime]:
    """Naive UTC DATETIME (or string) -> aware UTC datetime.

    mysql-connector returns DATETIME as datetime.datetime, but some drivers and
    views hand back strings.
    """

    if value is None:
        return None
    if isinstance(value, datetime):
        return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value.astimezone(timezone.utc)
    return parse_store_time(str(value))
