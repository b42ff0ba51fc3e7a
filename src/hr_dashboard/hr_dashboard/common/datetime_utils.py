from __future__ import annotations

import re
from datetime import datetime, time, timedelta, timezone, tzinfo
from typing import Callable, Optional, Union
from zoneinfo import ZoneInfo

Clock = Callable[[], datetime]
Timestamp = Union[str, datetime]

_TZ_SUFFIX = re.compile(r"([zZ]|[+-]\d{2}:?\d{2})$")


def utc_now() -> datetime:
    """Current UTC time.

    Note: Services take a clock argument instead of calling this directly,
    so tests can pass a fixed instant.
    """
    return datetime.now(timezone.utc)


def get_timezone(name: Optional[str]) -> tzinfo:
    if not name or name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)


def parse_store_time(value: Timestamp) -> datetime:
    """Parse a stored timestamp into an aware UTC datetime.

    Strings without a ``Z`` or numeric offset and naive datetimes are taken
    as UTC, never as server-local time.
    """

    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    text = str(value).strip()
    if not text:
        raise ValueError("Empty timestamp")

    if not _TZ_SUFFIX.search(text):
        text = f"{text}Z"
    if text[-1] in "zZ":
        text = f"{text[:-1]}+00:00"

    # fromisoformat on 3.10 rejects "+HHMM"
    m = re.search(r"([+-])(\d{2})(\d{2})$", text)
    if m and not re.search(r"[+-]\d{2}:\d{2}$", text):
        text = f"{text[:m.start()]}{m.group(1)}{m.group(2)}:{m.group(3)}"

    parsed = datetime.fromisoformat(text)
    return parsed.astimezone(timezone.utc)


def start_of_day_utc(now: datetime) -> datetime:
    """UTC midnight of the calendar day containing ``now``."""
    now_utc = parse_store_time(now)
    return datetime.combine(now_utc.date(), time(0, 0), tzinfo=timezone.utc)


def end_of_day(value: Timestamp, *, use_utc: bool = True, tz: Optional[tzinfo] = None) -> datetime:
    """23:59:59.000 of the calendar day containing ``value``.

    With ``use_utc`` the day is the UTC calendar day (server/cron). Otherwise it
    is the calendar day in ``tz`` (defaults to UTC). The result is always
    returned in UTC.
    """

    instant = parse_store_time(value)
    zone = timezone.utc if use_utc else (tz or timezone.utc)
    local = instant.astimezone(zone)
    end = datetime.combine(local.date(), time(23, 59, 59), tzinfo=zone)
    return end.astimezone(timezone.utc)


def local_day_range(now: datetime, tz: Optional[tzinfo] = None) -> tuple[datetime, datetime]:
    """[start, end) of the local calendar day containing ``now``, as UTC instants."""
    zone = tz or timezone.utc
    local_date = parse_store_time(now).astimezone(zone).date()
    start = datetime.combine(local_date, time(0, 0), tzinfo=zone)
    end = datetime.combine(local_date + timedelta(days=1), time(0, 0), tzinfo=zone)
    return start.astimezone(timezone.utc), end.astimezone(timezone.utc)


def to_iso(value: datetime) -> str:
    """UTC ISO-8601 with millisecond precision, e.g. 2024-03-10T23:59:59.000Z."""
    utc = parse_store_time(value)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def format_time(value: Optional[Timestamp], tz: Optional[tzinfo] = None) -> str:
    if value is None:
        return "--"
    return parse_store_time(value).astimezone(tz or timezone.utc).strftime("%H:%M:%S")
