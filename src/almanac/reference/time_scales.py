from __future__ import annotations

import math
from datetime import date, datetime, timedelta, timezone
from typing import Tuple, overload


# ============================================================
# Epochs
# ============================================================

J2000_JD = 2451545.0            # JD(TT) at J2000.0 (2000-01-01 12:00)
JULIAN_DAYS_PER_CENTURY = 36525.0

# A moment counts days from 0000-01-01 00:00 UTC, proleptic Gregorian.
# date.toordinal() counts 0001-01-01 as day 1 and year 0 is a leap year.
MOMENT_EPOCH_JD = 1721059.5
MOMENT_ORDINAL_OFFSET = 365
J2000 = J2000_JD - MOMENT_EPOCH_JD  # 730485.5

MINUTES_PER_DEGREE = 4
SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = SECONDS_PER_MINUTE * 60
SECONDS_PER_DAY = SECONDS_PER_HOUR * 24


def _tdiv(a: int, b: int) -> int:
    """Integer division truncated toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


# ============================================================
# Gregorian calendar date <-> JDN (integer arithmetic)
# ============================================================

def jdn_from_ymd(year: int, month: int, day: int) -> int:
    """
    Proleptic Gregorian date -> Julian Day Number (Fliegel–Van Flandern).
    Valid for year <= 0 as well, unlike datetime.date.
    """
    a = (14 - month) // 12
    y2 = year + 4800 - a
    m2 = month + 12 * a - 3
    return day + (153 * m2 + 2) // 5 + 365 * y2 + y2 // 4 - y2 // 100 + y2 // 400 - 32045


def ymd_from_jdn(jdn: int) -> Tuple[int, int, int]:
    """Julian Day Number -> proleptic Gregorian (year, month, day)."""
    a = jdn + 32044
    b = (4 * a + 3) // 146097
    c = a - (146097 * b) // 4
    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    m = (5 * e + 2) // 153
    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = 100 * b + d - 4800 + (m // 10)
    return year, month, day


# ============================================================
# Julian day / century
# ============================================================

@overload
def julian_day_from_date(year: date) -> float: ...
@overload
def julian_day_from_date(year: int, month: int, day: int) -> float: ...

def julian_day_from_date(year, month=None, day=None) -> float:
    """
    Julian day at 00:00 of a proleptic Gregorian date.

    The integer formula uses divisions truncated toward zero; the result
    is the JDN minus one half (JD days begin at noon).
    """
    if isinstance(year, date):
        year, month, day = year.year, year.month, year.day
    a = _tdiv(month - 14, 12)
    return (
        _tdiv(1461 * (year + 4800 + a), 4)
        + _tdiv(367 * (month - 2 - 12 * a), 12)
        - _tdiv(3 * _tdiv(year + 4900 + a, 100), 4)
        + day
        - 32075
        - 0.5
    )


def date_from_julian_day(jd: float) -> datetime:
    """
    Julian day -> UTC datetime. The time of day is truncated to whole
    seconds the same way to_hms does.
    """
    jdn = math.floor(jd + 0.5)
    fraction = jd + 0.5 - jdn
    y, m, d = ymd_from_jdn(jdn)
    h, mi, s = to_hms(fraction * 24.0)
    return datetime(y, m, d, h, mi, s, tzinfo=timezone.utc)


def julian_centuries_from_julian_day(julian_day: float) -> float:
    """T = (JD - 2451545.0) / 36525"""
    return (julian_day - J2000_JD) / JULIAN_DAYS_PER_CENTURY


def julian_day_from_julian_centuries(julian_centuries: float) -> float:
    """JD = 2451545.0 + 36525*T"""
    return julian_centuries * JULIAN_DAYS_PER_CENTURY + J2000_JD


def ajd(d: date) -> float:
    """Astronomical Julian day of a date at midnight."""
    return julian_day_from_date(d)


def mjd(d: date) -> float:
    """Modified Julian day of a date at midnight."""
    return ajd(d) - 2400000.5


# ============================================================
# Moments
# ============================================================

def julian_day_from_moment(t: float) -> float:
    return t + MOMENT_EPOCH_JD


def moment_from_julian_day(jd: float) -> float:
    return jd - MOMENT_EPOCH_JD


def moment_from_date(d: date) -> float:
    """Moment of 00:00 UTC on a Gregorian date."""
    return float(d.toordinal() + MOMENT_ORDINAL_OFFSET)


def moment_from_datetime(dt: datetime) -> float:
    """
    datetime -> moment. Aware datetimes are converted to UTC first,
    naive ones are taken as UTC.
    """
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)
    seconds = dt.hour * SECONDS_PER_HOUR + dt.minute * SECONDS_PER_MINUTE + dt.second + dt.microsecond / 1e6
    return moment_from_date(dt.date()) + seconds / SECONDS_PER_DAY


def datetime_from_moment(t: float) -> datetime:
    """moment -> timezone-aware UTC datetime (h:m:s truncated)."""
    return date_from_julian_day(julian_day_from_moment(t))


def gregorian_year_from_moment(t: float) -> int:
    """Gregorian year containing a moment; works before year 1."""
    jdn = math.floor(t) + int(MOMENT_EPOCH_JD + 0.5)
    return ymd_from_jdn(jdn)[0]


# ============================================================
# Time of day
# ============================================================

def to_hms(hours: float) -> Tuple[int, int, int]:
    """
    Fractional hours -> (hours, minutes, seconds) by successive
    multiplication and truncation: 23.999 -> (23, 59, 56), not (24, 0, 0).
    """
    h = int(hours)
    minutes = (hours - h) * 60.0
    m = int(minutes)
    s = int((minutes - m) * 60.0)
    return h, m, s


def moment_to_datetime(time_of_day: float, d: date) -> datetime:
    """
    UTC hours of the day (e.g. a sunrise) on the UTC date d -> aware datetime.
    """
    h, m, s = to_hms(time_of_day)
    return datetime(d.year, d.month, d.day, tzinfo=timezone.utc) + timedelta(hours=h, minutes=m, seconds=s)


# ============================================================
# Local Mean Time (longitude-based)
# ============================================================

def local_mean_time_offset(longitude_deg_east: float) -> float:
    """
    Offset (fraction of a day) of Local Mean Time ahead of UTC.
      360° -> 1 day  =>  1° -> 4 minutes.
    """
    return longitude_deg_east / 360.0


def local_mean_time_offset_seconds(longitude_deg_east: float) -> float:
    return longitude_deg_east * MINUTES_PER_DEGREE * SECONDS_PER_MINUTE

