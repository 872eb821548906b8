"""Calendar arithmetic on Julian day numbers.

Dates are proleptic Gregorian with years 0..9999. Integer division follows
C semantics (truncation toward zero), which the diff and increment
routines rely on.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    "JulianError",
    "InvalidDateError",
    "InvalidTimeError",
    "OutOfRangeError",
    "Date",
    "Time",
    "is_leap",
    "validate_date",
    "validate_time",
    "date_to_julian",
    "julian_to_date",
    "hms_to_seconds",
    "seconds_to_hms",
    "date_minus_date",
    "hours_between",
    "minutes_between",
    "seconds_between",
    "century_to_date",
    "date_to_century",
    "date_to_yearday",
    "yearday_to_date",
    "add_days",
    "add_hours",
    "add_minutes",
    "add_seconds",
]

MJDSHIFT = 0
CENTURYSHIFT = 2415021
JULIAN_MIN = 0

YEAR_MIN = 0
YEAR_MAX = 9999

SEC_MIN = 60
SEC_HOUR = 3600
SEC_DAY = 86400
MIN_HOUR = 60
MIN_DAY = 1440
HOUR_DAY = 24

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

_MONTH_LEN = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


class JulianError(ValueError):
    """Base error for calendar conversions."""

    code = -1


class InvalidDateError(JulianError):
    """A date is not a valid calendar date."""

    code = -7


class InvalidTimeError(JulianError):
    """A time of day is not valid."""

    code = -8


class OutOfRangeError(JulianError):
    """A result does not fit a 32-bit signed integer."""

    code = -10


@dataclass(frozen=True)
class Date:
    """A calendar date."""

    year: int
    month: int
    day: int

    def __str__(self) -> str:
        return f"{self.year:04d}{self.month:02d}{self.day:02d}"


@dataclass(frozen=True)
class Time:
    """A time of day."""

    hour: int = 0
    minute: int = 0
    second: int = 0

    def __str__(self) -> str:
        return f"{self.hour:02d}{self.minute:02d}{self.second:02d}"


def _cdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def _cmod(a: int, b: int) -> int:
    """Remainder with the sign of the dividend."""
    return a - b * _cdiv(a, b)


def _check_int32(value: int, what: str) -> int:
    if value > INT32_MAX or value < INT32_MIN:
        raise OutOfRangeError(f"{what} = {value}: exceeded the allowed range")
    return value


def is_leap(year: int) -> bool:
    """Return True for a Gregorian leap year."""
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def validate_date(date: Date) -> None:
    """Raise InvalidDateError unless *date* is a valid date in years 0..9999."""
    if date.year < YEAR_MIN or date.year > YEAR_MAX:
        raise InvalidDateError(f"Year {date.year} out of allowed range")
    if not 1 <= date.month <= 12:
        raise InvalidDateError(f"Date incorrect ({date})")
    if date.month == 2:
        last = 29 if is_leap(date.year) else 28
    else:
        last = _MONTH_LEN[date.month - 1]
    if not 1 <= date.day <= last:
        raise InvalidDateError(f"Date incorrect ({date})")


def validate_time(time: Time) -> None:
    """Raise InvalidTimeError unless *time* is a valid time of day."""
    if (
        not 0 <= time.hour <= HOUR_DAY - 1
        or not 0 <= time.minute <= MIN_HOUR - 1
        or not 0 <= time.second <= SEC_MIN - 1
    ):
        raise InvalidTimeError(f"Time incorrect ({time})")


def date_to_julian(date: Date) -> int:
    """Return the Julian day number of *date*."""
    validate_date(date)
    m1 = _cdiv(date.month - 14, 12)
    a = _cdiv(1461 * (date.year + 4800 + m1), 4)
    b = _cdiv(367 * (date.month - 2 - 12 * m1), 12)
    m2 = _cdiv(date.year + 4900 + m1, 100)
    c = _cdiv(3 * m2, 4)
    return a + b - c + date.day - 32075 - MJDSHIFT


def julian_to_date(julian: int) -> Date:
    """Return the calendar date of Julian day number *julian*."""
    jdate = julian + MJDSHIFT
    if jdate < JULIAN_MIN:
        raise JulianError(f"Julian {jdate} less than {JULIAN_MIN}")
    l = jdate + 68569
    n = (4 * l) // 146097
    l = l - (146097 * n + 3) // 4
    i = (4000 * (l + 1)) // 1461001
    l = l - (1461 * i) // 4 + 31
    j = (80 * l) // 2447
    day = l - (2447 * j) // 80
    l = j // 11
    month = j + 2 - 12 * l
    year = 100 * (n - 49) + i + l
    _check_int32(year, "julian_to_date: year")
    return Date(year, month, day)


def hms_to_seconds(time: Time) -> int:
    """Return the number of seconds since midnight."""
    validate_time(time)
    return SEC_HOUR * time.hour + SEC_MIN * time.minute + time.second


def seconds_to_hms(seconds: int) -> Time:
    """Split seconds since midnight (0..86400) into a Time."""
    if seconds < 0 or seconds > SEC_DAY:
        raise JulianError(f"Seconds {seconds} outside 0..{SEC_DAY}")
    hour, rest = divmod(seconds, SEC_HOUR)
    minute, second = divmod(rest, MIN_HOUR)
    return Time(hour, minute, second)


def date_minus_date(date1: Date, date2: Date) -> int:
    """Return the number of days from *date2* to *date1*."""
    return date_to_julian(date1) - date_to_julian(date2)


def _day_and_second_diff(date1: Date, time1: Time, date2: Date, time2: Time) -> tuple[int, int]:
    days = date_to_julian(date1) - date_to_julian(date2)
    seconds = hms_to_seconds(time1) - hms_to_seconds(time2)
    return days, seconds


def hours_between(date1: Date, time1: Time, date2: Date, time2: Time) -> int:
    """Return the hours from (date2, time2) to (date1, time1)."""
    days, seconds = _day_and_second_diff(date1, time1, date2, time2)
    return _check_int32(days * HOUR_DAY + _cdiv(seconds, SEC_HOUR), "hours_between: hours")


def minutes_between(date1: Date, time1: Time, date2: Date, time2: Time) -> int:
    """Return the minutes from (date2, time2) to (date1, time1)."""
    days, seconds = _day_and_second_diff(date1, time1, date2, time2)
    return _check_int32(days * MIN_DAY + _cdiv(seconds, SEC_MIN), "minutes_between: minutes")


def seconds_between(date1: Date, time1: Time, date2: Date, time2: Time) -> int:
    """Return the seconds from (date2, time2) to (date1, time1)."""
    days, seconds = _day_and_second_diff(date1, time1, date2, time2)
    return _check_int32(days * SEC_DAY + seconds, "seconds_between: seconds")


def century_to_date(century: int) -> Date:
    """Convert a century day (day 1 is 1900-01-01) to a date."""
    return julian_to_date(century + CENTURYSHIFT - 1)


def date_to_century(date: Date) -> int:
    """Convert a date to a century day (day 1 is 1900-01-01)."""
    return date_to_julian(date) - CENTURYSHIFT + 1


def date_to_yearday(date: Date) -> int:
    """Return the day of the year of *date*, starting at 1."""
    julian = date_to_julian(date)
    return julian - date_to_julian(Date(date.year, 1, 1)) + 1


def yearday_to_date(yearday: int, year: int) -> Date:
    """Return the date that is day *yearday* of *year*."""
    shift = date_to_julian(Date(year, 1, 1))
    return julian_to_date(yearday + shift - 1)


def add_days(date: Date, days: int) -> Date:
    """Return *date* moved by *days* days."""
    julian = _check_int32(date_to_julian(date) + days, "add_days: julian")
    return julian_to_date(julian)


def _shift(date: Date, time: Time, days: int, seconds: int) -> tuple[Date, Time]:
    julian = date_to_julian(date) + days
    total = hms_to_seconds(time) + seconds
    if total < 0:
        julian -= 1
        total += SEC_DAY
    elif total >= SEC_DAY:
        julian += 1
        total -= SEC_DAY
    return julian_to_date(julian), seconds_to_hms(total)


def add_hours(date: Date, time: Time, hours: int) -> tuple[Date, Time]:
    """Return (date, time) moved by *hours* hours."""
    return _shift(date, time, _cdiv(hours, HOUR_DAY), _cmod(hours, HOUR_DAY) * SEC_HOUR)


def add_minutes(date: Date, time: Time, minutes: int) -> tuple[Date, Time]:
    """Return (date, time) moved by *minutes* minutes."""
    return _shift(date, time, _cdiv(minutes, MIN_DAY), _cmod(minutes, MIN_DAY) * SEC_MIN)


def add_seconds(date: Date, time: Time, seconds: int) -> tuple[Date, Time]:
    """Return (date, time) moved by *seconds* seconds."""
    return _shift(date, time, _cdiv(seconds, SEC_DAY), _cmod(seconds, SEC_DAY))