"""Time helpers in the facility timezone (America/Chicago).

All times are displayed in 24-hour format in the facility timezone, while
the database stores timezone-aware ISO timestamps.
"""
from __future__ import annotations

import re
from datetime import date, datetime, timezone
from typing import Optional, Union
from zoneinfo import ZoneInfo

from ..core.constants import FACILITY_TIMEZONE
from ..core.exceptions import ValidationError

FACILITY_TZ = ZoneInfo(FACILITY_TIMEZONE)
_TIME_24H = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


def now_local() -> datetime:
    """Current time in the facility timezone.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(FACILITY_TZ)


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def utc_iso(value: Optional[datetime] = None) -> str:
    return (value or now_utc()).astimezone(timezone.utc).isoformat()


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date: {value!r}")


def parse_timestamp(value: Union[str, datetime, None]) -> Optional[datetime]:
    """Parse an ISO timestamp from the database; naive values are taken as UTC."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        dt = value
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(text)
        except ValueError:
            raise ValidationError(f"Invalid timestamp: {value!r}")
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def to_local(value: Union[str, datetime, None]) -> Optional[datetime]:
    dt = parse_timestamp(value)
    return dt.astimezone(FACILITY_TZ) if dt else None


def format_local_time(value: Union[str, datetime, None]) -> str:
    dt = to_local(value)
    return dt.strftime("%H:%M") if dt else "-"


def format_local_datetime(value: Union[str, datetime, None]) -> str:
    dt = to_local(value)
    return dt.strftime("%m/%d/%Y %H:%M") if dt else "-"


def format_duration(start: Union[str, datetime], end: Union[str, datetime]) -> str:
    """Duration as "2h 30m", "2h" or "45m"; an end before the start gets a leading "-"."""
    seconds = (parse_timestamp(end) - parse_timestamp(start)).total_seconds()
    sign = "-" if seconds < 0 else ""
    hours, rest = divmod(int(abs(seconds) // 60), 60)
    if hours > 0 and rest > 0:
        return f"{sign}{hours}h {rest}m"
    if hours > 0:
        return f"{sign}{hours}h"
    return f"{sign}{rest}m"


def is_valid_24h_time(value: str) -> bool:
    return bool(_TIME_24H.match(value or ""))


def local_datetime(day: str, hhmm: str) -> datetime:
    """Combine a YYYY-MM-DD date and an HH:MM(:SS) time in the facility timezone."""
    d = parse_iso_date(day)
    parts = [int(p) for p in hhmm.split(":")]
    if len(parts) < 2:
        raise ValidationError(f"Invalid time: {hhmm!r}")
    seconds = parts[2] if len(parts) > 2 else 0
    return datetime(d.year, d.month, d.day, parts[0], parts[1], seconds, tzinfo=FACILITY_TZ)


def local_date(value: Union[str, datetime, None]) -> Optional[date]:
    dt = to_local(value)
    return dt.date() if dt else None
