"""
Temporal Formatting - Render engine date/time integers as text.

The engine hands out dates as day offsets from 1970-01-01 and timestamps /
times of day as integers in one of four units. These helpers turn them into
ISO-like strings without consulting the host locale or time zone: timestamps
are always rendered in UTC with an explicit '+00:00' offset.
"""

from datetime import date, datetime, timedelta, timezone
from enum import Enum
from typing import Tuple

from ..constants import INVALID_DATE_TEXT, INVALID_TIME_TEXT

EPOCH_DATE = date(1970, 1, 1)
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
SECONDS_PER_DAY = 86_400
NANOS_PER_SECOND = 1_000_000_000


class TimeUnit(Enum):
    """Resolution of a timestamp or time-of-day integer.

    Value is (ticks per second, digits of the rendered fraction).
    """
    SECOND = (1, 0)
    MILLISECOND = (1_000, 3)
    MICROSECOND = (1_000_000, 6)
    NANOSECOND = (1_000_000_000, 9)

    @property
    def ticks_per_second(self) -> int:
        return self.value[0]

    @property
    def fraction_digits(self) -> int:
        return self.value[1]

    @classmethod
    def from_arrow(cls, unit: str) -> "TimeUnit":
        """Map an Arrow unit code ('s', 'ms', 'us', 'ns')."""
        return _ARROW_UNITS[unit]


_ARROW_UNITS = {
    "s": TimeUnit.SECOND,
    "ms": TimeUnit.MILLISECOND,
    "us": TimeUnit.MICROSECOND,
    "ns": TimeUnit.NANOSECOND,
}


def split_ticks(ticks: int, unit: TimeUnit) -> Tuple[int, int]:
    """
    Split a tick count into whole seconds and remaining nanoseconds.

    Floor division keeps the nanosecond part in [0, 1e9) for negative values,
    so -1 ms is (-1 s, 999_000_000 ns).
    """
    seconds, remainder = divmod(ticks, unit.ticks_per_second)
    return seconds, remainder * (NANOS_PER_SECOND // unit.ticks_per_second)


def _fraction(nanos: int, unit: TimeUnit) -> str:
    digits = unit.fraction_digits
    if not digits:
        return ""
    scaled = nanos // 10 ** (9 - digits)
    return f".{scaled:0{digits}d}"


def date32_to_ymd(days: int) -> str:
    """Render a day offset from 1970-01-01 as YYYY-MM-DD."""
    try:
        day = EPOCH_DATE + timedelta(days=days)
    except OverflowError:
        return INVALID_DATE_TEXT
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def timestamp_to_ymd_hms(ticks: int, unit: TimeUnit) -> str:
    """
    Render a timestamp as YYYY-MM-DDTHH:MM:SS[.fraction]+00:00.

    The fraction has 3, 6 or 9 digits for ms, us and ns; seconds have none.
    Values outside the representable calendar render as 'Invalid Time'.
    """
    seconds, nanos = split_ticks(ticks, unit)
    try:
        moment = EPOCH + timedelta(seconds=seconds)
    except OverflowError:
        return INVALID_TIME_TEXT
    return (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"
        f"T{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
        f"{_fraction(nanos, unit)}+00:00"
    )


def time_to_hms(ticks: int, unit: TimeUnit) -> str:
    """
    Render a time since midnight as HH:MM:SS[.fraction].

    Negative values and values of 24 hours or more render as 'Invalid Time'.
    """
    seconds, nanos = split_ticks(ticks, unit)
    if seconds < 0 or seconds >= SECONDS_PER_DAY:
        return INVALID_TIME_TEXT
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}{_fraction(nanos, unit)}"
