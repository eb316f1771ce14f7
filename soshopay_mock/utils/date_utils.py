"""Date manipulation utilities"""

import math
from datetime import date, datetime, timezone
from typing import Any, Optional

MS_PER_DAY = 86_400_000


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse a stored timestamp into an aware UTC datetime.

    Accepts ISO-8601 strings (with or without "Z"/offset), plain dates and
    epoch milliseconds. Returns None for empty or unparseable values.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def to_epoch_ms(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


def to_iso(moment: datetime) -> str:
    """Format as UTC ISO-8601 with millisecond precision, e.g. 2024-01-01T00:00:00.000Z"""
    utc = moment.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def days_between(start: datetime, end: datetime) -> int:
    """Whole days from start to end, rounded up (negative when end is in the past)"""
    delta_ms = (end - start).total_seconds() * 1000
    return math.ceil(delta_ms / MS_PER_DAY)
