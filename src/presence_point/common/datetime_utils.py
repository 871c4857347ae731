from __future__ import annotations

from datetime import datetime, time, timedelta
from zoneinfo import ZoneInfo

from ..core.constants import DEFAULT_TIMEZONE

_local_zone = ZoneInfo(DEFAULT_TIMEZONE)


def parse_clock(value: str) -> time:
    """Parse HH:MM or HH:MM:SS (as returned by Postgres TIME columns)."""
    value = value.strip()
    fmt = "%H:%M:%S" if value.count(":") == 2 else "%H:%M"
    return datetime.strptime(value, fmt).time()


def use_timezone(name: str) -> None:
    """Set the IANA zone that defines the school day (TIMEZONE setting)."""
    global _local_zone
    _local_zone = ZoneInfo(name)


def now_local() -> datetime:
    """Current time in the school's zone.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(_local_zone)


def day_window(moment: datetime) -> tuple[datetime, datetime]:
    """Half-open window [start_of_day, start_of_next_day) around ``moment``."""
    # Both ends are local midnights; across a DST change the day is 23 or 25 hours.
    day = moment.date()
    start = datetime.combine(day, time.min, tzinfo=moment.tzinfo)
    end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=moment.tzinfo)
    return start, end


def trailing_window(moment: datetime, *, days: int) -> tuple[datetime, datetime]:
    """Window covering the ``days`` days leading up to ``moment``."""
    return moment - timedelta(days=days), moment


def parse_timestamp(value) -> datetime:
    if isinstance(value, datetime):
        return value
    # Postgres may send "Z" or fractional seconds with odd precision.
    text = str(value).replace("Z", "+00:00")
    head, sep, tail = text.partition(".")
    if sep:
        frac = ""
        rest = ""
        for i, ch in enumerate(tail):
            if not ch.isdigit():
                rest = tail[i:]
                break
            frac += ch
        text = f"{head}.{frac[:6].ljust(6, '0')}{rest}"
    return datetime.fromisoformat(text)
