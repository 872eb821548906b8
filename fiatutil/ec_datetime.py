"""Integer-argument date and time routines built on Julian day numbers.

Every routine takes and returns plain integers. Invalid input raises one of
the errors defined in :mod:`fiatutil.julian`.
"""

from __future__ import annotations

from fiatutil.julian import (
    INT32_MAX,
    INT32_MIN,
    Date,
    OutOfRangeError,
    Time,
    add_days,
    add_hours,
    add_minutes,
    add_seconds,
    century_to_date,
    date_minus_date,
    date_to_century,
    date_to_yearday,
    hours_between,
    minutes_between,
    seconds_between,
    yearday_to_date,
)

__all__ = [
    "daydiff",
    "hourdiff",
    "mindiff",
    "secdiff",
    "dayincr",
    "hourincr",
    "minincr",
    "secincr",
    "cd2date",
    "yd2date",
    "idate2cd",
    "idate2yd",
    "icd2ymd",
    "iymd2cd",
]


def _trunc_divmod(a: int, b: int) -> tuple[int, int]:
    """Quotient truncated toward zero and remainder with the dividend's sign."""
    q = abs(a) // abs(b)
    if (a >= 0) != (b >= 0):
        q = -q
    return q, a - b * q


def daydiff(year1: int, month1: int, day1: int, year2: int, month2: int, day2: int) -> int:
    """Return the days from the second date to the first."""
    return date_minus_date(Date(year1, month1, day1), Date(year2, month2, day2))


def hourdiff(
    year1: int, month1: int, day1: int, hour1: int,
    year2: int, month2: int, day2: int, hour2: int,
) -> int:
    """Return the hours from the second date and hour to the first."""
    return hours_between(
        Date(year1, month1, day1), Time(hour1),
        Date(year2, month2, day2), Time(hour2),
    )


def mindiff(
    year1: int, month1: int, day1: int, hour1: int, minute1: int,
    year2: int, month2: int, day2: int, hour2: int, minute2: int,
) -> int:
    """Return the minutes from the second moment to the first."""
    return minutes_between(
        Date(year1, month1, day1), Time(hour1, minute1),
        Date(year2, month2, day2), Time(hour2, minute2),
    )


def secdiff(
    year1: int, month1: int, day1: int, hour1: int, minute1: int, second1: int,
    year2: int, month2: int, day2: int, hour2: int, minute2: int, second2: int,
) -> int:
    """Return the seconds from the second moment to the first."""
    return seconds_between(
        Date(year1, month1, day1), Time(hour1, minute1, second1),
        Date(year2, month2, day2), Time(hour2, minute2, second2),
    )


def dayincr(year: int, month: int, day: int, days: int) -> tuple[int, int, int]:
    """Return (year, month, day) moved by *days* days."""
    new = add_days(Date(year, month, day), days)
    return new.year, new.month, new.day


def hourincr(year: int, month: int, day: int, hour: int, hours: int) -> tuple[int, int, int, int]:
    """Return (year, month, day, hour) moved by *hours* hours."""
    new_date, new_time = add_hours(Date(year, month, day), Time(hour), hours)
    return new_date.year, new_date.month, new_date.day, new_time.hour


def minincr(
    year: int, month: int, day: int, hour: int, minute: int, minutes: int
) -> tuple[int, int, int, int, int]:
    """Return (year, month, day, hour, minute) moved by *minutes* minutes."""
    new_date, new_time = add_minutes(Date(year, month, day), Time(hour, minute), minutes)
    return new_date.year, new_date.month, new_date.day, new_time.hour, new_time.minute


def secincr(
    year: int, month: int, day: int, hour: int, minute: int, second: int, seconds: int
) -> tuple[int, int, int, int, int, int]:
    """Return (year, month, day, hour, minute, second) moved by *seconds* seconds."""
    new_date, new_time = add_seconds(
        Date(year, month, day), Time(hour, minute, second), seconds
    )
    return (
        new_date.year, new_date.month, new_date.day,
        new_time.hour, new_time.minute, new_time.second,
    )


def cd2date(icd: int) -> tuple[int, int, int]:
    """Convert a century day (day 1 is 1900-01-01) to (year, month, day)."""
    date = century_to_date(icd)
    return date.year, date.month, date.day


def yd2date(iyd: int, iy: int) -> tuple[int, int]:
    """Return (month, day) of day *iyd* of year *iy*."""
    date = yearday_to_date(iyd, iy)
    return date.month, date.day


def idate2cd(iy: int, im: int, id: int) -> int:
    """Convert (year, month, day) to a century day."""
    return date_to_century(Date(iy, im, id))


def idate2yd(iy: int, im: int, id: int) -> int:
    """Return the day of the year of (year, month, day), starting at 1."""
    return date_to_yearday(Date(iy, im, id))


def icd2ymd(icd: int) -> int:
    """Convert a century day to a YYYYMMDD integer."""
    iy, im, id_ = cd2date(icd)
    ymd = iy * 10000 + im * 100 + id_
    if ymd > INT32_MAX or ymd < INT32_MIN:
        raise OutOfRangeError(f"ICD2YMD: ymd = {ymd}: exceeded the allowed range")
    return ymd


def iymd2cd(iymd: int) -> int:
    """Convert a YYYYMMDD integer to a century day."""
    iy, rest = _trunc_divmod(iymd, 10000)
    im, id_ = _trunc_divmod(rest, 100)
    return idate2cd(iy, im, id_)