"""Calendar-aware decomposition of a millisecond delta into units."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone, tzinfo

from tick_countdown.types import TimeBreakdown

MS_PER_SECOND = 1000
MS_PER_MINUTE = 60 * MS_PER_SECOND
MS_PER_HOUR = 60 * MS_PER_MINUTE
MS_PER_DAY = 24 * MS_PER_HOUR

DAYS_PER_WEEK = 7
WEEKS_PER_YEAR = 52

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def is_leap_year(year: int) -> bool:
    if year % 100 == 0:
        return year % 400 == 0
    return year % 4 == 0


def year_length(year: int) -> int:
    return 366 if is_leap_year(year) else 365


def calendar_year(timestamp_ms: int, tz: tzinfo | None = None) -> int:
    """Calendar year of an epoch-millisecond instant.

    ``tz=None`` uses host local time, like the host's own date parsing.
    """
    instant = _EPOCH + timedelta(milliseconds=timestamp_ms)
    return instant.astimezone(tz).year


def compute_breakdown(
    delta_ms: int,
    target_ms: int,
    now_ms: int,
    tz: tzinfo | None = None,
) -> TimeBreakdown:
    """Split ``delta_ms`` into years, weeks, days, hours, minutes, seconds.

    Hours, minutes and seconds are plain modular arithmetic. Years are
    peeled off day by calendar year, walking from the year of ``now_ms``
    toward the year of ``target_ms`` so leap years count 366 days. The
    remaining days become weeks; 52 weeks roll over into one more year,
    which is an approximation (a year is not exactly 52 weeks).
    """
    is_negative = delta_ms < 0
    abs_ms = abs(delta_ms)

    hours = abs_ms % MS_PER_DAY // MS_PER_HOUR
    minutes = abs_ms % MS_PER_HOUR // MS_PER_MINUTE
    seconds = abs_ms % MS_PER_MINUTE // MS_PER_SECOND

    years = 0
    weeks = 0
    days = abs_ms // MS_PER_DAY

    final_year = calendar_year(target_ms, tz)
    cursor = calendar_year(now_ms, tz)
    step = -1 if is_negative else 1
    # Stop short of a year longer than the remaining days so days never
    # goes negative; the leftover rolls over through the week loop below.
    while cursor != final_year and days >= year_length(cursor):
        years += 1
        days -= year_length(cursor)
        cursor += step

    while days >= DAYS_PER_WEEK:
        days -= DAYS_PER_WEEK
        weeks += 1
        if weeks >= WEEKS_PER_YEAR:
            weeks = 0
            years += 1

    return TimeBreakdown(
        years=years,
        weeks=weeks,
        days=days,
        hours=hours,
        minutes=minutes,
        seconds=seconds,
        is_negative=is_negative,
        delta_ms=delta_ms,
    )
