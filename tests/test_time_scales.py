# tests/test_time_scales.py

import pytest
import random
from datetime import date, datetime, timezone

from almanac.reference import time_scales as ts

def test_jdn_ymd_roundtrip():
    random.seed(42)
    # includes years <= 0, which datetime.date cannot represent
    for _ in range(10000):
        jdn_in = random.randint(1000000, 5373484)
        y, m, d = ts.ymd_from_jdn(jdn_in)
        assert ts.jdn_from_ymd(y, m, d) == jdn_in

def test_julian_day_date_roundtrip():
    """
    Midnight Julian days survive date_from_julian_day -> julian_day_from_date
    over several centuries.
    """
    random.seed(42)
    for _ in range(2000):
        jd_in = random.randint(2086308, 2816788) + 0.5  # 1000-01-01 .. 3000-01-01
        dt = ts.date_from_julian_day(jd_in)
        assert ts.julian_day_from_date(dt.date()) == pytest.approx(jd_in, abs=1e-9)

def test_known_epochs():
    assert ts.julian_day_from_date(2000, 1, 1) == 2451544.5
    assert ts.julian_day_from_date(date(1970, 1, 1)) == 2440587.5
    assert ts.date_from_julian_day(2451545.0) == datetime(2000, 1, 1, 12, tzinfo=timezone.utc)
    assert ts.mjd(date(1858, 11, 17)) == 0.0

def test_moment_epochs():
    assert ts.moment_from_date(date(2000, 1, 1)) + 0.5 == ts.J2000
    assert ts.julian_day_from_moment(ts.J2000) == ts.J2000_JD
    assert ts.moment_from_julian_day(ts.MOMENT_EPOCH_JD) == 0.0

def test_moment_datetime_roundtrip():
    random.seed(5)
    for _ in range(500):
        seconds = random.randint(0, 86399)
        dt = datetime(2021, 8, 22, seconds // 3600, (seconds // 60) % 60, seconds % 60, tzinfo=timezone.utc)
        t = ts.moment_from_datetime(dt)
        back = ts.datetime_from_moment(t)
        # truncation may lose at most a second
        assert abs((back - dt).total_seconds()) <= 1.0

def test_aware_datetimes_are_read_in_utc():
    from datetime import timedelta
    plus_ten = timezone(timedelta(hours=10))
    local = datetime(2019, 12, 4, 10, 0, tzinfo=plus_ten)
    assert ts.moment_from_datetime(local) == ts.moment_from_date(date(2019, 12, 4))

def test_gregorian_year_from_moment():
    assert ts.gregorian_year_from_moment(ts.moment_from_date(date(2019, 12, 31)) + 0.99) == 2019
    assert ts.gregorian_year_from_moment(0.0) == 0
    assert ts.gregorian_year_from_moment(-1.0) == -1

@pytest.mark.parametrize("hours, expected", [
    (0.0, (0, 0, 0)),
    (6.5, (6, 30, 0)),
    (12.25, (12, 15, 0)),
    (23.999, (23, 59, 56)),
])
def test_to_hms_truncates(hours, expected):
    assert ts.to_hms(hours) == expected

def test_moment_to_datetime():
    dt = ts.moment_to_datetime(18.5, date(2019, 12, 3))
    assert dt == datetime(2019, 12, 3, 18, 30, tzinfo=timezone.utc)

def test_julian_centuries_roundtrip():
    for jd in (2415020.0, 2451545.0, 2488070.0):
        assert ts.julian_day_from_julian_centuries(ts.julian_centuries_from_julian_day(jd)) == pytest.approx(jd)

def test_local_mean_time_offset():
    assert ts.local_mean_time_offset(90.0) == 0.25
    assert ts.local_mean_time_offset_seconds(-15.0) == -3600.0
